"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Count, Q, Sum  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore

from apps.vehicles.models import Vehicle
from shared.domain.value_objects import DateRange
from shared.exceptions import BookingConflictError

from .domain import lifecycle
from .models import Booking

logger = logging.getLogger(__name__)

PENDING_EXPIRED_REASON = "Pending booking expired without a decision"


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def overlapping_bookings(
    vehicle_id: int,
    start_date: datetime,
    end_date: datetime,
    statuses: Iterable[str] = lifecycle.BLOCKING_STATUSES,
    *,
    exclude_booking_id: int | None = None,
):
    """Bookings of the vehicle in ``statuses`` whose period overlaps [start_date, end_date)."""

    # Half-open overlap: existing.start < new.end AND existing.end > new.start
    overlapping_filter = Q(start_date__lt=end_date) & Q(end_date__gt=start_date)

    bookings_qs = Booking.objects.filter(
        vehicle_id=vehicle_id,
        status__in=list(statuses),
    ).filter(overlapping_filter)

    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)
    return bookings_qs


def check_availability(
    vehicle_id: int,
    start_date: datetime,
    end_date: datetime,
    exclude_booking_id: int | None = None,
) -> bool:
    """True iff no approved or active booking of the vehicle overlaps the period."""

    return not overlapping_bookings(
        vehicle_id,
        start_date,
        end_date,
        lifecycle.BLOCKING_STATUSES,
        exclude_booking_id=exclude_booking_id,
    ).exists()


def calculate_total_price(start_date: datetime, end_date: datetime, price_per_day: Decimal) -> Decimal:
    """Billable days times daily price; a started day counts as a full day."""

    return DateRange(start_date, end_date).price(price_per_day).quantize(Decimal("0.01"))


def validate_booking_period(start_date: datetime, end_date: datetime) -> None:
    if start_date <= timezone.now():
        raise serializers.ValidationError({"start_date": ["Start date cannot be in the past"]})
    if end_date <= start_date:
        raise serializers.ValidationError({"end_date": ["End date must be after start date"]})


def _lock_vehicle(vehicle_id: int) -> Vehicle:
    vehicle = _lock_queryset_if_possible(Vehicle.objects.filter(pk=vehicle_id)).first()
    if vehicle is None:
        raise NotFound("Vehicle not found")
    return vehicle


def create_booking(
    user,
    vehicle_id: int,
    start_date: datetime,
    end_date: datetime,
    pickup_location: str,
    dropoff_location: str,
    special_requests: str = "",
) -> Booking:
    """
    Create a pending booking for the vehicle.

    The vehicle row is locked for the duration of the transaction and the
    calendar is checked again under the lock, counting pending bookings as
    holds, so of two concurrent requests for the same dates only one is
    written.

    A pending hold lasts until an administrator decides on it or
    ``expire_pending_bookings`` cancels it, which happens once the booking
    is older than ``BOOKING_PENDING_TTL_HOURS`` or its start date has passed.
    """

    validate_booking_period(start_date, end_date)

    with transaction.atomic():
        vehicle = _lock_vehicle(vehicle_id)
        if not vehicle.availability:
            raise serializers.ValidationError({"non_field_errors": ["Vehicle is not available"]})

        if overlapping_bookings(vehicle.id, start_date, end_date, lifecycle.HOLDING_STATUSES).exists():
            raise BookingConflictError()

        booking = Booking.objects.create(
            user=user,
            vehicle=vehicle,
            start_date=start_date,
            end_date=end_date,
            total_price=calculate_total_price(start_date, end_date, vehicle.price_per_day),
            pickup_location=pickup_location,
            dropoff_location=dropoff_location,
            special_requests=special_requests or "",
            status=Booking.Status.PENDING,
        )

    logger.info(
        f"Booking {booking.id} created by user {user.id} for vehicle {vehicle.id} "
        f"({start_date.isoformat()} - {end_date.isoformat()}, total {booking.total_price})"
    )
    return booking


def update_booking_status(booking: Booking, new_status: str, admin_notes: str | None = None) -> Booking:
    """
    Move a booking along the lifecycle on behalf of an administrator.

    Entering a status that occupies the calendar re-checks availability
    under the vehicle lock, excluding the booking itself.
    """

    with transaction.atomic():
        _lock_vehicle(booking.vehicle_id)
        booking = _lock_queryset_if_possible(Booking.objects.filter(pk=booking.pk)).get()
        old_status = booking.status

        lifecycle.ensure_transition(old_status, new_status)

        if new_status in lifecycle.BLOCKING_STATUSES and not check_availability(
            booking.vehicle_id,
            booking.start_date,
            booking.end_date,
            exclude_booking_id=booking.pk,
        ):
            raise BookingConflictError()

        booking.status = new_status
        update_fields = ["status", "updated_at"]
        if admin_notes:
            booking.admin_notes = admin_notes
            update_fields.append("admin_notes")
        if new_status == Booking.Status.CANCELLED:
            booking.cancelled_at = timezone.now()
            update_fields.append("cancelled_at")
        booking.save(update_fields=update_fields)

    logger.info(f"Booking {booking.id} status changed: {old_status} -> {new_status}")
    return booking


def cancel_booking(booking: Booking, reason: str = "") -> Booking:
    """Cancel a pending or approved booking."""

    with transaction.atomic():
        booking = _lock_queryset_if_possible(Booking.objects.filter(pk=booking.pk)).get()
        old_status = booking.status
        lifecycle.ensure_cancellable(old_status)

        booking.status = Booking.Status.CANCELLED
        booking.cancellation_reason = reason or ""
        booking.cancelled_at = timezone.now()
        booking.save(update_fields=["status", "cancellation_reason", "cancelled_at", "updated_at"])

    logger.info(f"Booking {booking.id} cancelled (was {old_status})")
    return booking


def booking_stats() -> dict:
    """Totals over all bookings; revenue counts completed bookings only."""

    breakdown = list(
        Booking.objects.values("status")
        .annotate(count=Count("id"), total_revenue=Sum("total_price"))
        .order_by("status")
    )
    completed_revenue = Booking.objects.filter(status=Booking.Status.COMPLETED).aggregate(
        total=Sum("total_price")
    )["total"]

    return {
        "total_bookings": Booking.objects.count(),
        "total_revenue": completed_revenue or Decimal("0.00"),
        "status_breakdown": [
            {
                "status": row["status"],
                "count": row["count"],
                "total_revenue": row["total_revenue"] or Decimal("0.00"),
            }
            for row in breakdown
        ],
    }


def expire_pending_bookings(now: datetime | None = None) -> int:
    """
    Cancel pending bookings nobody acted on.

    A pending booking expires once it is older than
    ``BOOKING_PENDING_TTL_HOURS`` or once its start date has passed,
    which releases the dates it holds for new requests.

    Returns:
        int: number of bookings cancelled
    """

    now = now or timezone.now()
    cutoff = now - timedelta(hours=settings.BOOKING_PENDING_TTL_HOURS)
    stale_filter = Q(created_at__lte=cutoff) | Q(start_date__lte=now)

    with transaction.atomic():
        stale = _lock_queryset_if_possible(
            Booking.objects.filter(status=Booking.Status.PENDING).filter(stale_filter)
        )
        booking_ids = list(stale.values_list("id", flat=True))
        Booking.objects.filter(pk__in=booking_ids).update(
            status=Booking.Status.CANCELLED,
            cancellation_reason=PENDING_EXPIRED_REASON,
            cancelled_at=now,
            updated_at=now,
        )

    if booking_ids:
        logger.info(f"Expired {len(booking_ids)} pending booking(s): {booking_ids}")
    return len(booking_ids)
