"""Admin registrations for the vehicles domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Vehicle, VehicleImage


class VehicleImageInline(admin.TabularInline):
    model = VehicleImage
    extra = 0
    fields = ("image", "uploaded_at")
    readonly_fields = ("uploaded_at",)


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "brand",
        "category",
        "license_plate",
        "price_per_day",
        "availability",
        "average_rating",
        "total_reviews",
        "owner",
    )
    list_filter = ("category", "availability", "fuel_type", "transmission")
    search_fields = ("name", "brand", "license_plate", "address", "owner__email")
    inlines = (VehicleImageInline,)
    readonly_fields = ("average_rating", "total_reviews", "created_at", "updated_at")
