"""FilterSet for the review list."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Review


class ReviewFilterSet(django_filters.FilterSet):
    vehicle = django_filters.NumberFilter(field_name="vehicle_id")
    user = django_filters.NumberFilter(field_name="user_id")
    min_rating = django_filters.NumberFilter(field_name="rating", lookup_expr="gte")
    max_rating = django_filters.NumberFilter(field_name="rating", lookup_expr="lte")

    class Meta:
        model = Review
        fields = ["vehicle", "user", "min_rating", "max_rating"]
