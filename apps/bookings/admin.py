"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """
    Bookings are created by renters and moved through their lifecycle by the
    API, which checks the vehicle calendar. The admin edits only notes and
    payment details, so it can never place two bookings on the same dates.
    """

    list_display = (
        "id",
        "vehicle",
        "user",
        "status",
        "payment_status",
        "start_date",
        "end_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "payment_status", "payment_method", "start_date")
    search_fields = ("vehicle__name", "vehicle__license_plate", "user__email")
    readonly_fields = (
        "user",
        "vehicle",
        "start_date",
        "end_date",
        "status",
        "total_price",
        "cancelled_at",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request) -> bool:  # type: ignore
        return False

    def has_delete_permission(self, request, obj=None) -> bool:  # type: ignore
        return False
