"""Review moderation in the Django admin keeps the rating rollup current."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.bookings.models import Booking
from apps.reviews.models import Review
from apps.reviews.services import create_review
from apps.users.models import User
from apps.vehicles.models import Vehicle


class ReviewAdminTests(TestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_superuser(email="admin@example.com", name="Admin", password="secret123")
        self.renter = User.objects.create_user(email="renter@example.com", name="Renter", password="secret123")
        self.vehicle = Vehicle.objects.create(
            owner=self.admin,
            name="Brompton",
            brand="Brompton",
            category=Vehicle.Category.BICYCLE,
            price_per_day=Decimal("15.00"),
            latitude=Decimal("48.856613"),
            longitude=Decimal("2.352222"),
            address="Rue de Rivoli 1, Paris",
            license_plate="PARIS-B1",
        )
        self.reviews = [self._review(rating, offset) for offset, rating in enumerate((5, 4, 3))]
        self.client.force_login(self.admin)

    def _review(self, rating: int, offset: int) -> Review:
        start = timezone.now() - timedelta(days=20 - offset * 3)
        booking = Booking.objects.create(
            user=self.renter,
            vehicle=self.vehicle,
            start_date=start,
            end_date=start + timedelta(days=1),
            total_price=Decimal("15.00"),
            pickup_location="Hotel de Ville",
            dropoff_location="Hotel de Ville",
            status=Booking.Status.COMPLETED,
        )
        return create_review(self.renter, self.vehicle, booking, rating)

    def _assert_rollup(self, average: str, total: int) -> None:
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.average_rating, Decimal(average))
        self.assertEqual(self.vehicle.total_reviews, total)

    def test_single_delete_recomputes_rating(self) -> None:
        worst = next(review for review in self.reviews if review.rating == 3)

        response = self.client.post(reverse("admin:reviews_review_delete", args=[worst.id]), {"post": "yes"})

        self.assertEqual(response.status_code, 302)
        self._assert_rollup("4.5", 2)

    def test_bulk_delete_recomputes_rating(self) -> None:
        selected = [review.id for review in self.reviews if review.rating != 5]

        response = self.client.post(
            reverse("admin:reviews_review_changelist"),
            {"action": "delete_selected", "_selected_action": selected, "post": "yes"},
        )

        self.assertEqual(response.status_code, 302)
        self.assertEqual(Review.objects.count(), 1)
        self._assert_rollup("5.0", 1)

    def test_rating_is_not_editable(self) -> None:
        review = self.reviews[0]

        response = self.client.post(
            reverse("admin:reviews_review_change", args=[review.id]),
            {
                "rating": 1,
                "comment": "Edited by moderator",
                "is_verified": "on",
                "helpful_votes": 0,
                "admin_response": "",
                "_save": "Save",
            },
        )

        self.assertEqual(response.status_code, 302)
        review.refresh_from_db()
        self.assertEqual(review.rating, 5)
        self.assertTrue(review.is_verified)
        self._assert_rollup("4.0", 3)
