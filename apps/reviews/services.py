"""Review workflows and the vehicle rating rollup.

Every write path recomputes the rollup inside its own transaction so the
vehicle's ``average_rating`` and ``total_reviews`` always match its
reviews.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Avg, Count  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.bookings.models import Booking
from apps.vehicles.models import Vehicle

from .models import Review

logger = logging.getLogger(__name__)

RATING_QUANTUM = Decimal("0.1")


def recalculate_vehicle_rating(vehicle_id: int) -> tuple[Decimal, int]:
    """Recompute and store the vehicle's mean rating (one decimal) and review count."""

    stats = Review.objects.filter(vehicle_id=vehicle_id).aggregate(
        avg_rating=Avg("rating"), total=Count("id")
    )
    total = stats["total"] or 0
    if total:
        average = Decimal(str(stats["avg_rating"])).quantize(RATING_QUANTUM, rounding=ROUND_HALF_UP)
    else:
        average = Decimal("0.0")

    Vehicle.objects.filter(pk=vehicle_id).update(average_rating=average, total_reviews=total)
    logger.info(f"Vehicle {vehicle_id} rating recalculated: {average} over {total} reviews")
    return average, total


def rating_distribution(vehicle_id: int) -> list[dict]:
    """Number of reviews per rating value, highest rating first."""

    return list(
        Review.objects.filter(vehicle_id=vehicle_id)
        .values("rating")
        .annotate(count=Count("id"))
        .order_by("-rating")
    )


def ensure_reviewable(user, vehicle: Vehicle, booking: Booking) -> None:
    """Raise unless ``booking`` is the user's completed booking of ``vehicle`` and is not reviewed yet."""

    if (
        booking.user_id != user.id
        or booking.vehicle_id != vehicle.id
        or booking.status != Booking.Status.COMPLETED
    ):
        raise serializers.ValidationError("You can only review vehicles from completed bookings")
    if Review.objects.filter(user_id=user.id, booking_id=booking.id).exists():
        raise serializers.ValidationError("You have already reviewed this booking")


def create_review(user, vehicle: Vehicle, booking: Booking, rating: int, comment: str = "") -> Review:
    with transaction.atomic():
        ensure_reviewable(user, vehicle, booking)
        try:
            with transaction.atomic():
                review = Review.objects.create(
                    user=user,
                    vehicle=vehicle,
                    booking=booking,
                    rating=rating,
                    comment=comment or "",
                )
        except IntegrityError:
            raise serializers.ValidationError("You have already reviewed this booking")
        recalculate_vehicle_rating(vehicle.id)

    logger.info(f"Review {review.id} created by user {user.id} for vehicle {vehicle.id}")
    return review


def update_review(review: Review, data: dict) -> Review:
    """Apply rating/comment changes from the review's author."""

    update_fields = ["updated_at"]
    for field in ("rating", "comment"):
        if field in data:
            setattr(review, field, data[field])
            update_fields.append(field)

    with transaction.atomic():
        review.save(update_fields=update_fields)
        recalculate_vehicle_rating(review.vehicle_id)

    logger.info(f"Review {review.id} updated")
    return review


def delete_review(review: Review) -> None:
    review_id, vehicle_id = review.id, review.vehicle_id
    with transaction.atomic():
        review.delete()
        recalculate_vehicle_rating(vehicle_id)

    logger.info(f"Review {review_id} deleted")


def respond_to_review(review: Review, responder, response: str) -> Review:
    review.admin_response = response.strip()
    review.responded_at = timezone.now()
    review.responded_by = responder
    review.save(update_fields=["admin_response", "responded_at", "responded_by", "updated_at"])

    logger.info(f"Admin {responder.id} responded to review {review.id}")
    return review
