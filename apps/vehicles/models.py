"""Vehicle catalogue models for RideRent.

A vehicle is listed by an administrator and can be booked for a date
range. ``availability`` is an operator switch and is never derived from
bookings; the booking engine decides whether specific dates are free.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


def max_vehicle_year() -> int:
    return timezone.now().year + 1


class Vehicle(models.Model):
    """Vehicle offered for daily rental."""

    class Category(models.TextChoices):
        CAR = "car", _("Car")
        BIKE = "bike", _("Bike")
        SCOOTER = "scooter", _("Scooter")
        BICYCLE = "bicycle", _("Bicycle")
        TRUCK = "truck", _("Truck")
        VAN = "van", _("Van")

    class FuelType(models.TextChoices):
        PETROL = "petrol", _("Petrol")
        DIESEL = "diesel", _("Diesel")
        ELECTRIC = "electric", _("Electric")
        HYBRID = "hybrid", _("Hybrid")
        MANUAL = "manual", _("Manual")

    class Transmission(models.TextChoices):
        MANUAL = "manual", _("Manual")
        AUTOMATIC = "automatic", _("Automatic")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="vehicles",
    )
    name = models.CharField(max_length=100)
    brand = models.CharField(max_length=50)
    category = models.CharField(max_length=20, choices=Category.choices)
    description = models.TextField(max_length=500, blank=True)
    price_per_day = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    latitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(Decimal("-90")), MaxValueValidator(Decimal("90"))],
    )
    longitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(Decimal("-180")), MaxValueValidator(Decimal("180"))],
    )
    address = models.CharField(max_length=200)
    availability = models.BooleanField(default=True)
    features = models.JSONField(default=list, blank=True)
    fuel_type = models.CharField(max_length=10, choices=FuelType.choices, blank=True)
    seating_capacity = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(50)],
    )
    transmission = models.CharField(max_length=10, choices=Transmission.choices, blank=True)
    year = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1900), MaxValueValidator(max_vehicle_year)],
    )
    license_plate = models.CharField(max_length=20, unique=True)
    average_rating = models.DecimalField(
        max_digits=3,
        decimal_places=1,
        default=Decimal("0.0"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("5"))],
    )
    total_reviews = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Vehicle")
        verbose_name_plural = _("Vehicles")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category", "availability"], name="vehicle_category_avail_idx"),
            models.Index(fields=["price_per_day"], name="vehicle_price_idx"),
            models.Index(fields=["brand"], name="vehicle_brand_idx"),
            models.Index(fields=["latitude", "longitude"], name="vehicle_location_idx"),
            models.Index(fields=["-average_rating"], name="vehicle_rating_desc_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_day__gte=0),
                name="vehicle_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(latitude__gte=-90, latitude__lte=90),
                name="vehicle_latitude_range",
            ),
            models.CheckConstraint(
                condition=models.Q(longitude__gte=-180, longitude__lte=180),
                name="vehicle_longitude_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.brand} {self.name} ({self.license_plate})"

    def save(self, *args, **kwargs):  # type: ignore
        if self.license_plate:
            self.license_plate = self.license_plate.strip().upper()
        if self.category:
            self.category = self.category.lower()
        super().save(*args, **kwargs)


class VehicleImage(models.Model):
    """Image file attached to a vehicle listing."""

    vehicle = models.ForeignKey(Vehicle, on_delete=models.CASCADE, related_name="images")
    image = models.ImageField(upload_to="vehicles/")
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Vehicle image")
        verbose_name_plural = _("Vehicle images")
        ordering = ["uploaded_at", "id"]

    def __str__(self) -> str:
        return f"{self.vehicle} [{self.filename}]"

    @property
    def filename(self) -> str:
        return self.image.name
