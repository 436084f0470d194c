"""Models for the review domain.

Defines the ``Review`` entity: a renter's rating and comment for a
vehicle, tied to the completed booking it was left for. One user can
leave at most one review per booking. Administrators may attach a short
public response.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """Represents a review left by a renter for a vehicle."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews"
    )
    vehicle = models.ForeignKey(
        "vehicles.Vehicle", on_delete=models.CASCADE, related_name="reviews"
    )
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.CASCADE,
        related_name="reviews",
        help_text=_("Completed booking the review was left for"),
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_("Rating from 1 to 5"),
    )
    comment = models.TextField(max_length=500, blank=True)

    is_verified = models.BooleanField(default=False)
    helpful_votes = models.PositiveIntegerField(default=0)

    # Admin response
    admin_response = models.TextField(max_length=300, blank=True)
    responded_at = models.DateTimeField(null=True, blank=True)
    responded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="review_responses",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Review")
        verbose_name_plural = _("Reviews")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "booking"], name="review_unique_user_booking"),
        ]
        indexes = [
            models.Index(fields=["vehicle", "-rating"], name="review_vehicle_rating_idx"),
            models.Index(fields=["user"], name="review_user_idx"),
            models.Index(fields=["-created_at"], name="review_created_idx"),
            models.Index(fields=["is_verified"], name="review_verified_idx"),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for vehicle {self.vehicle_id} (Rating: {self.rating})"
