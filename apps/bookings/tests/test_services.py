from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.bookings import services
from apps.bookings.models import Booking
from apps.bookings.tasks import expire_pending_bookings
from apps.users.models import User
from apps.vehicles.models import Vehicle
from shared.exceptions import BookingConflictError, InvalidStateError


@pytest.fixture
def renter():
    return User.objects.create_user(email="renter@example.com", name="Renter", password="secret123")


@pytest.fixture
def vehicle():
    owner = User.objects.create_superuser(email="admin@example.com", name="Admin", password="secret123")
    return Vehicle.objects.create(
        owner=owner,
        name="Model 3",
        brand="Tesla",
        category=Vehicle.Category.CAR,
        price_per_day=Decimal("100.00"),
        latitude=Decimal("40.712800"),
        longitude=Decimal("-74.006000"),
        address="Broadway 1, New York",
        license_plate="NY1234",
    )


@pytest.fixture
def start():
    return timezone.now() + timedelta(days=1)


def book(renter, vehicle, start, days=2):
    return services.create_booking(
        renter, vehicle.id, start, start + timedelta(days=days), "Airport", "Downtown"
    )


@pytest.mark.django_db
def test_check_availability_counts_only_occupying_statuses(renter, vehicle, start):
    booking = book(renter, vehicle, start)
    end = start + timedelta(days=2)

    assert services.check_availability(vehicle.id, start, end)

    services.update_booking_status(booking, Booking.Status.APPROVED)
    assert not services.check_availability(vehicle.id, start, end)
    assert services.check_availability(vehicle.id, start, end, exclude_booking_id=booking.id)
    assert services.check_availability(vehicle.id, end, end + timedelta(days=1))


@pytest.mark.django_db
def test_total_price_uses_daily_rate(renter, vehicle, start):
    booking = book(renter, vehicle, start, days=3)

    assert booking.total_price == Decimal("300.00")
    assert booking.status == Booking.Status.PENDING
    assert booking.duration_days == 3


@pytest.mark.django_db
def test_pending_booking_holds_its_dates(renter, vehicle, start):
    book(renter, vehicle, start)

    with pytest.raises(BookingConflictError):
        book(renter, vehicle, start + timedelta(hours=12))
    assert Booking.objects.count() == 1


@pytest.mark.django_db
def test_booking_in_past_rejected(renter, vehicle):
    with pytest.raises(ValidationError):
        book(renter, vehicle, timezone.now() - timedelta(days=1))


@pytest.mark.django_db
def test_approval_rechecks_calendar(renter, vehicle, start):
    first = book(renter, vehicle, start)
    services.cancel_booking(first)
    second = book(renter, vehicle, start)
    services.update_booking_status(second, Booking.Status.APPROVED)

    # A booking written before the calendar filled up cannot be approved into a conflict.
    stale = Booking.objects.create(
        user=renter,
        vehicle=vehicle,
        start_date=start,
        end_date=start + timedelta(days=1),
        pickup_location="Airport",
        dropoff_location="Downtown",
    )
    with pytest.raises(BookingConflictError):
        services.update_booking_status(stale, Booking.Status.APPROVED)


@pytest.mark.django_db
def test_cancel_sets_timestamp_and_refuses_terminal_bookings(renter, vehicle, start):
    booking = book(renter, vehicle, start)

    booking = services.cancel_booking(booking, "No longer needed")
    assert booking.status == Booking.Status.CANCELLED
    assert booking.cancelled_at is not None

    with pytest.raises(InvalidStateError):
        services.cancel_booking(booking)


@pytest.mark.django_db
def test_same_status_transition_rejected(renter, vehicle, start):
    booking = book(renter, vehicle, start)

    with pytest.raises(InvalidStateError):
        services.update_booking_status(booking, Booking.Status.PENDING)


@pytest.mark.django_db
def test_stale_pending_booking_expires_and_releases_dates(renter, vehicle, start, settings):
    settings.BOOKING_PENDING_TTL_HOURS = 24
    stale = book(renter, vehicle, start)
    Booking.objects.filter(pk=stale.pk).update(created_at=timezone.now() - timedelta(hours=25))
    fresh = book(renter, vehicle, start + timedelta(days=5))

    with pytest.raises(BookingConflictError):
        book(renter, vehicle, start)

    assert services.expire_pending_bookings() == 1

    stale.refresh_from_db()
    fresh.refresh_from_db()
    assert stale.status == Booking.Status.CANCELLED
    assert stale.cancellation_reason == services.PENDING_EXPIRED_REASON
    assert stale.cancelled_at is not None
    assert fresh.status == Booking.Status.PENDING
    assert book(renter, vehicle, start).status == Booking.Status.PENDING


@pytest.mark.django_db
def test_pending_booking_past_its_start_expires(renter, vehicle, start):
    pending = book(renter, vehicle, start)
    approved = book(renter, vehicle, start + timedelta(days=5))
    services.update_booking_status(approved, Booking.Status.APPROVED)

    later = start + timedelta(days=10)

    with mock.patch("apps.bookings.services.timezone.now", return_value=later):
        result = expire_pending_bookings()

    assert result == {"expired": 1}
    pending.refresh_from_db()
    approved.refresh_from_db()
    assert pending.status == Booking.Status.CANCELLED
    assert approved.status == Booking.Status.APPROVED
