"""Booking domain models for RideRent."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange

from .domain import lifecycle


class Booking(models.Model):
    """Rental of a vehicle for the half-open period [start_date, end_date)."""

    class Status(models.TextChoices):
        PENDING = lifecycle.PENDING, _("Pending")
        APPROVED = lifecycle.APPROVED, _("Approved")
        REJECTED = lifecycle.REJECTED, _("Rejected")
        ACTIVE = lifecycle.ACTIVE, _("Active")
        COMPLETED = lifecycle.COMPLETED, _("Completed")
        CANCELLED = lifecycle.CANCELLED, _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        FAILED = "failed", _("Failed")
        REFUNDED = "refunded", _("Refunded")

    class PaymentMethod(models.TextChoices):
        CASH = "cash", _("Cash")
        CARD = "card", _("Card")
        DIGITAL_WALLET = "digital_wallet", _("Digital wallet")
        BANK_TRANSFER = "bank_transfer", _("Bank transfer")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    vehicle = models.ForeignKey(
        "vehicles.Vehicle",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Billable days multiplied by the vehicle's daily price at booking time."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    pickup_location = models.CharField(max_length=200)
    dropoff_location = models.CharField(max_length=200)
    special_requests = models.TextField(max_length=500, blank=True)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True)
    payment_id = models.CharField(
        max_length=100,
        blank=True,
        help_text=_("External payment gateway transaction id."),
    )
    cancellation_reason = models.CharField(max_length=200, blank=True)
    admin_notes = models.TextField(max_length=500, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["vehicle", "start_date", "end_date"], name="booking_vehicle_period_idx"),
            models.Index(fields=["vehicle", "status"], name="booking_vehicle_status_idx"),
            models.Index(fields=["user", "status"], name="booking_user_status_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for vehicle {self.vehicle_id} ({self.status})"

    @property
    def period(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def duration_days(self) -> int:
        if not self.start_date or not self.end_date or self.end_date <= self.start_date:
            return 0
        return self.period.nights
