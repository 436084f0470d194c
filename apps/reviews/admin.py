"""Admin registration for reviews."""

from __future__ import annotations

from django.contrib import admin
from django.db import transaction

from .models import Review
from .services import delete_review, recalculate_vehicle_rating


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Moderation of reviews; deletions keep the vehicle rating rollup current."""

    list_display = ("id", "vehicle", "user", "rating", "is_verified", "helpful_votes", "created_at")
    list_filter = ("rating", "is_verified")
    search_fields = ("vehicle__name", "user__email", "comment")
    readonly_fields = (
        "user",
        "vehicle",
        "booking",
        "rating",
        "responded_at",
        "responded_by",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request) -> bool:  # type: ignore
        return False

    def delete_model(self, request, obj: Review) -> None:  # type: ignore
        delete_review(obj)

    def delete_queryset(self, request, queryset) -> None:  # type: ignore
        with transaction.atomic():
            vehicle_ids = set(queryset.values_list("vehicle_id", flat=True))
            queryset.delete()
            for vehicle_id in sorted(vehicle_ids):
                recalculate_vehicle_rating(vehicle_id)
