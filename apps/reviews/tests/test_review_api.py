"""API tests for reviews and the vehicle rating rollup."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.reviews.models import Review
from apps.users.models import User
from apps.vehicles.models import Vehicle


class ReviewAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.renter = User.objects.create_user(email="renter@example.com", name="Renter", password="secret123")
        self.other = User.objects.create_user(email="other@example.com", name="Other", password="secret123")
        self.admin = User.objects.create_superuser(email="admin@example.com", name="Admin", password="secret123")
        self.vehicle = Vehicle.objects.create(
            owner=self.admin,
            name="Vespa Primavera",
            brand="Vespa",
            category=Vehicle.Category.SCOOTER,
            price_per_day=Decimal("35.00"),
            latitude=Decimal("41.902782"),
            longitude=Decimal("12.496366"),
            address="Via del Corso 1, Rome",
            license_plate="RM555",
        )
        self.list_url = reverse("review-list")
        self.client.force_authenticate(self.renter)

    def _booking(self, user: User | None = None, status_value: str = Booking.Status.COMPLETED, offset: int = 0) -> Booking:
        start = timezone.now() - timedelta(days=30 - offset * 3)
        return Booking.objects.create(
            user=user or self.renter,
            vehicle=self.vehicle,
            start_date=start,
            end_date=start + timedelta(days=2),
            total_price=Decimal("70.00"),
            pickup_location="Termini",
            dropoff_location="Termini",
            status=status_value,
        )

    def _review(self, booking: Booking, rating: int, comment: str = ""):
        return self.client.post(
            self.list_url,
            {"vehicle": self.vehicle.id, "booking": booking.id, "rating": rating, "comment": comment},
        )

    def _assert_rollup(self, average: str, total: int) -> None:
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.average_rating, Decimal(average))
        self.assertEqual(self.vehicle.total_reviews, total)


class ReviewCreateTests(ReviewAPITestCase):
    def test_create_review_for_completed_booking(self) -> None:
        response = self._review(self._booking(), 5, "Great ride")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        data = response.json()["data"]
        self.assertEqual(data["rating"], 5)
        self.assertEqual(data["user"]["email"], self.renter.email)
        self.assertEqual(data["vehicle"], self.vehicle.id)
        self._assert_rollup("5.0", 1)

    def test_review_requires_completed_booking(self) -> None:
        response = self._review(self._booking(status_value=Booking.Status.ACTIVE), 4)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["message"], "You can only review vehicles from completed bookings")
        self.assertFalse(Review.objects.exists())
        self._assert_rollup("0.0", 0)

    def test_cannot_review_someone_elses_booking(self) -> None:
        response = self._review(self._booking(user=self.other), 4)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_booking_reviewed_only_once(self) -> None:
        booking = self._booking()
        self._review(booking, 5)

        response = self._review(booking, 1)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["message"], "You have already reviewed this booking")
        self.assertEqual(Review.objects.count(), 1)

    def test_rating_out_of_range_rejected(self) -> None:
        response = self._review(self._booking(), 6)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("rating", response.json()["errors"])

    def test_anonymous_cannot_review(self) -> None:
        booking = self._booking()
        self.client.force_authenticate(None)

        response = self._review(booking, 5)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class ReviewRollupTests(ReviewAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        for offset, rating in enumerate((5, 4, 3)):
            response = self._review(self._booking(offset=offset), rating)
            self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_average_over_all_reviews(self) -> None:
        self._assert_rollup("4.0", 3)

    def test_delete_recomputes_average(self) -> None:
        worst = Review.objects.get(rating=3)

        response = self.client.delete(reverse("review-detail", args=[worst.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self._assert_rollup("4.5", 2)

    def test_update_recomputes_average(self) -> None:
        review = Review.objects.get(rating=3)

        response = self.client.patch(reverse("review-detail", args=[review.id]), {"rating": 4})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.json()["data"]["rating"], 4)
        self._assert_rollup("4.3", 3)

    def test_deleting_all_reviews_resets_rollup(self) -> None:
        self.client.force_authenticate(self.admin)
        for review in Review.objects.all():
            self.client.delete(reverse("review-detail", args=[review.id]))

        self._assert_rollup("0.0", 0)

    def test_vehicle_reviews_include_rating_stats(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(reverse("review-vehicle", kwargs={"vehicle_id": self.vehicle.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["total"], 3)
        self.assertEqual(
            body["rating_stats"],
            [{"rating": 5, "count": 1}, {"rating": 4, "count": 1}, {"rating": 3, "count": 1}],
        )

    def test_vehicle_reviews_for_missing_vehicle(self) -> None:
        response = self.client.get(reverse("review-vehicle", kwargs={"vehicle_id": 999999}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_filters_by_rating(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.list_url, {"min_rating": 4, "sort": "rating"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["rating"] for item in response.json()["data"]], [4, 5])


class ReviewPermissionTests(ReviewAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        response = self._review(self._booking(), 4, "Fine")
        self.review = Review.objects.get(pk=response.json()["data"]["id"])
        self.detail_url = reverse("review-detail", args=[self.review.id])

    def test_retrieve_is_public(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.detail_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["comment"], "Fine")

    def test_other_user_cannot_edit_or_delete(self) -> None:
        self.client.force_authenticate(self.other)

        self.assertEqual(self.client.patch(self.detail_url, {"rating": 1}).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.delete(self.detail_url).status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_delete_but_not_edit(self) -> None:
        self.client.force_authenticate(self.admin)

        self.assertEqual(self.client.patch(self.detail_url, {"rating": 1}).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.delete(self.detail_url).status_code, status.HTTP_200_OK)
        self.assertFalse(Review.objects.exists())

    def test_admin_response(self) -> None:
        url = reverse("review-respond", args=[self.review.id])
        self.client.force_authenticate(self.admin)

        response = self.client.put(url, {"response": "  Thanks for riding with us!  "})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        data = response.json()["data"]
        self.assertEqual(data["admin_response"], "Thanks for riding with us!")
        self.assertEqual(data["responded_by"]["id"], self.admin.id)
        self.assertIsNotNone(data["responded_at"])

    def test_admin_response_length_limit(self) -> None:
        url = reverse("review-respond", args=[self.review.id])
        self.client.force_authenticate(self.admin)

        self.assertEqual(self.client.put(url, {"response": "x" * 301}).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.client.put(url, {"response": "   "}).status_code, status.HTTP_400_BAD_REQUEST)

    def test_renter_cannot_respond(self) -> None:
        url = reverse("review-respond", args=[self.review.id])
        response = self.client.put(url, {"response": "Self praise"})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
