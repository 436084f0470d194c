"""Serializers for reviews.

Read serializers embed short representations of the author and the
vehicle. Write serializers accept only the fields a renter controls; the
author is taken from the request.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.models import Booking
from apps.users.serializers import UserShortSerializer
from apps.vehicles.models import Vehicle

from .models import Review
from .services import create_review, ensure_reviewable


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews."""

    user = UserShortSerializer(read_only=True)
    vehicle = serializers.PrimaryKeyRelatedField(read_only=True)
    vehicle_name = serializers.ReadOnlyField(source="vehicle.name")
    booking = serializers.PrimaryKeyRelatedField(read_only=True)
    responded_by = UserShortSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "user",
            "vehicle",
            "vehicle_name",
            "booking",
            "rating",
            "comment",
            "is_verified",
            "helpful_votes",
            "admin_response",
            "responded_at",
            "responded_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.ModelSerializer):
    vehicle = serializers.PrimaryKeyRelatedField(queryset=Vehicle.objects.all())
    booking = serializers.PrimaryKeyRelatedField(queryset=Booking.objects.all())
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(max_length=500, required=False, allow_blank=True, trim_whitespace=True)

    class Meta:
        model = Review
        fields = ["vehicle", "booking", "rating", "comment"]
        # Duplicates are reported by ensure_reviewable with a readable message.
        validators: list = []

    def validate(self, attrs):  # type: ignore
        ensure_reviewable(self.context["request"].user, attrs["vehicle"], attrs["booking"])
        return attrs

    def create(self, validated_data):  # type: ignore
        return create_review(
            self.context["request"].user,
            validated_data["vehicle"],
            validated_data["booking"],
            validated_data["rating"],
            validated_data.get("comment", ""),
        )


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(max_length=500, required=False, allow_blank=True, trim_whitespace=True)


class AdminResponseSerializer(serializers.Serializer):
    """Administrator's public response to a review."""

    response = serializers.CharField(min_length=1, max_length=300, trim_whitespace=True)


class RatingStatSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
    count = serializers.IntegerField()
