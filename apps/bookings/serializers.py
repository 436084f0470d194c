"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore

from apps.users.serializers import UserShortSerializer
from apps.vehicles.models import Vehicle
from apps.vehicles.serializers import VehicleShortSerializer
from shared.exceptions import BookingConflictError

from .models import Booking
from .services import check_availability, create_booking, validate_booking_period


class BookingCreateSerializer(serializers.ModelSerializer):
    """Booking request from a renter."""

    vehicle = serializers.IntegerField()

    class Meta:
        model = Booking
        fields = [
            "vehicle",
            "start_date",
            "end_date",
            "pickup_location",
            "dropoff_location",
            "special_requests",
        ]
        extra_kwargs = {
            "special_requests": {"required": False, "allow_blank": True},
        }

    def validate_vehicle(self, value: int) -> Vehicle:
        try:
            return Vehicle.objects.get(pk=value)
        except Vehicle.DoesNotExist:
            raise NotFound("Vehicle not found")

    def validate(self, attrs):  # type: ignore
        validate_booking_period(attrs["start_date"], attrs["end_date"])
        vehicle: Vehicle = attrs["vehicle"]
        if not vehicle.availability:
            raise serializers.ValidationError("Vehicle is not available")
        if not check_availability(vehicle.id, attrs["start_date"], attrs["end_date"]):
            raise BookingConflictError()
        return attrs

    def create(self, validated_data):  # type: ignore
        request = self.context["request"]
        return create_booking(
            request.user,
            validated_data["vehicle"].id,
            validated_data["start_date"],
            validated_data["end_date"],
            validated_data["pickup_location"],
            validated_data["dropoff_location"],
            validated_data.get("special_requests", ""),
        )


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking serializer."""

    user = UserShortSerializer(read_only=True)
    vehicle = VehicleShortSerializer(read_only=True)
    duration_days = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "user",
            "vehicle",
            "start_date",
            "end_date",
            "duration_days",
            "total_price",
            "status",
            "pickup_location",
            "dropoff_location",
            "special_requests",
            "payment_status",
            "payment_method",
            "payment_id",
            "cancellation_reason",
            "admin_notes",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices)
    admin_notes = serializers.CharField(max_length=500, required=False, allow_blank=True)


class BookingCancelSerializer(serializers.Serializer):
    cancellation_reason = serializers.CharField(max_length=200, required=False, allow_blank=True)


class StatusBreakdownSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class BookingStatsSerializer(serializers.Serializer):
    total_bookings = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    status_breakdown = StatusBreakdownSerializer(many=True)
