"""FilterSet definitions for vehicle search and listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.conf import settings  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Vehicle
from .services import vehicles_within_radius


class VehicleFilterSet(django_filters.FilterSet):
    """
    FilterSet for Vehicle list queries.

    ``availability`` defaults to ``true`` when the parameter is absent.
    ``lat`` and ``lng`` together restrict results to ``radius`` km around
    the point.
    """

    category = django_filters.CharFilter(method="filter_category")
    brand = django_filters.CharFilter(field_name="brand", lookup_expr="icontains")
    min_price = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="lte")
    availability = django_filters.BooleanFilter(field_name="availability")
    search = django_filters.CharFilter(method="filter_search")

    lat = django_filters.NumberFilter(method="filter_location", min_value=-90, max_value=90)
    lng = django_filters.NumberFilter(method="filter_location", min_value=-180, max_value=180)
    radius = django_filters.NumberFilter(method="filter_location", min_value=0)

    class Meta:
        model = Vehicle
        fields = [
            "category",
            "brand",
            "availability",
        ]

    def filter_category(self, queryset, name, value):  # type: ignore
        return queryset.filter(category=value.lower())

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(
            Q(name__icontains=value) | Q(brand__icontains=value) | Q(description__icontains=value)
        )

    def filter_location(self, queryset, name, value):  # type: ignore
        # Needs all three parameters at once, applied in filter_queryset.
        return queryset

    def filter_queryset(self, queryset):  # type: ignore
        queryset = super().filter_queryset(queryset)
        data = self.form.cleaned_data

        if data.get("availability") is None:
            queryset = queryset.filter(availability=True)

        lat, lng = data.get("lat"), data.get("lng")
        if lat is not None and lng is not None:
            radius = data.get("radius")
            if radius is None:
                radius = settings.VEHICLE_SEARCH_DEFAULT_RADIUS_KM
            queryset = vehicles_within_radius(queryset, lat, lng, radius)
        return queryset
