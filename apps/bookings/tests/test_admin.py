"""Django admin cannot move bookings on the vehicle calendar."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.bookings.models import Booking
from apps.users.models import User
from apps.vehicles.models import Vehicle


class BookingAdminTests(TestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_superuser(email="admin@example.com", name="Admin", password="secret123")
        renter = User.objects.create_user(email="renter@example.com", name="Renter", password="secret123")
        vehicle = Vehicle.objects.create(
            owner=self.admin,
            name="Transit",
            brand="Ford",
            category=Vehicle.Category.VAN,
            price_per_day=Decimal("90.00"),
            latitude=Decimal("51.507351"),
            longitude=Decimal("-0.127758"),
            address="Strand 1, London",
            license_plate="LN70ABC",
        )
        start = (timezone.now() + timedelta(days=2)).replace(microsecond=0)
        self.first = Booking.objects.create(
            user=renter,
            vehicle=vehicle,
            start_date=start,
            end_date=start + timedelta(days=1),
            total_price=Decimal("90.00"),
            pickup_location="Depot",
            dropoff_location="Depot",
            status=Booking.Status.APPROVED,
        )
        self.second = Booking.objects.create(
            user=renter,
            vehicle=vehicle,
            start_date=start + timedelta(days=5),
            end_date=start + timedelta(days=6),
            total_price=Decimal("90.00"),
            pickup_location="Depot",
            dropoff_location="Depot",
            status=Booking.Status.APPROVED,
        )
        self.client.force_login(self.admin)

    def test_change_form_ignores_calendar_fields(self) -> None:
        target_start = timezone.localtime(self.first.start_date)
        target_end = timezone.localtime(self.first.end_date)

        response = self.client.post(
            reverse("admin:bookings_booking_change", args=[self.second.id]),
            {
                "start_date_0": target_start.strftime("%Y-%m-%d"),
                "start_date_1": target_start.strftime("%H:%M:%S"),
                "end_date_0": target_end.strftime("%Y-%m-%d"),
                "end_date_1": target_end.strftime("%H:%M:%S"),
                "pickup_location": "Depot",
                "dropoff_location": "Depot",
                "special_requests": "",
                "payment_status": Booking.PaymentStatus.PENDING,
                "payment_method": "",
                "payment_id": "",
                "cancellation_reason": "",
                "admin_notes": "Customer called",
                "_save": "Save",
            },
        )

        self.assertEqual(response.status_code, 302)
        original_start, original_end = self.second.start_date, self.second.end_date
        self.second.refresh_from_db()
        self.assertEqual(self.second.admin_notes, "Customer called")
        self.assertEqual(self.second.start_date, original_start)
        self.assertEqual(self.second.end_date, original_end)

    def test_bookings_cannot_be_added_or_deleted_in_admin(self) -> None:
        self.assertEqual(self.client.get(reverse("admin:bookings_booking_add")).status_code, 403)
        self.assertEqual(
            self.client.post(reverse("admin:bookings_booking_delete", args=[self.first.id]), {"post": "yes"}).status_code,
            403,
        )
        self.assertTrue(Booking.objects.filter(pk=self.first.pk).exists())
