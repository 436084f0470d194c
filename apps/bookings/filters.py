"""FilterSet definitions for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from apps.users.permissions import user_is_admin

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Filters for the booking list; ``user`` is honoured for administrators only."""

    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    vehicle = django_filters.NumberFilter(field_name="vehicle_id")
    user = django_filters.NumberFilter(method="filter_user")

    class Meta:
        model = Booking
        fields = ["status", "vehicle", "user"]

    def filter_user(self, queryset, name, value):  # type: ignore
        if self.request is None or not user_is_admin(self.request.user):
            return queryset
        return queryset.filter(user_id=value)
