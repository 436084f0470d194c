"""Serializers for the vehicles domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import Vehicle, VehicleImage, max_vehicle_year
from .services import create_vehicle, update_vehicle


class VehicleImageSerializer(serializers.ModelSerializer):
    url = serializers.SerializerMethodField()
    filename = serializers.ReadOnlyField()

    class Meta:
        model = VehicleImage
        fields = ["id", "url", "filename", "uploaded_at"]
        read_only_fields = fields

    def get_url(self, obj: VehicleImage) -> str:
        request = self.context.get("request")
        url = obj.image.url
        return request.build_absolute_uri(url) if request else url


class VehicleShortSerializer(serializers.ModelSerializer):
    """Compact vehicle representation embedded in bookings and reviews."""

    class Meta:
        model = Vehicle
        fields = ["id", "name", "brand", "category", "price_per_day", "address", "license_plate"]
        read_only_fields = fields


class VehicleSerializer(serializers.ModelSerializer):
    """Vehicle as shown in listings."""

    owner = UserShortSerializer(read_only=True)
    images = VehicleImageSerializer(many=True, read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            "id",
            "owner",
            "name",
            "brand",
            "category",
            "description",
            "price_per_day",
            "latitude",
            "longitude",
            "address",
            "availability",
            "features",
            "fuel_type",
            "seating_capacity",
            "transmission",
            "year",
            "license_plate",
            "average_rating",
            "total_reviews",
            "images",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class VehicleDetailSerializer(VehicleSerializer):
    """Vehicle with the reviews left for it."""

    reviews = serializers.SerializerMethodField()

    class Meta(VehicleSerializer.Meta):
        fields = VehicleSerializer.Meta.fields + ["reviews"]
        read_only_fields = fields

    def get_reviews(self, obj: Vehicle) -> list[dict]:
        from apps.reviews.serializers import ReviewSerializer  # Local import to prevent circular dependency

        reviews = obj.reviews.select_related("user", "responded_by").order_by("-created_at")
        return ReviewSerializer(reviews, many=True, context=self.context).data


class VehicleWriteSerializer(serializers.ModelSerializer):
    """Create and update payload, JSON or multipart with ``images`` files."""

    category = serializers.CharField(max_length=20)
    fuel_type = serializers.CharField(max_length=10, required=False, allow_blank=True)
    transmission = serializers.CharField(max_length=10, required=False, allow_blank=True)
    license_plate = serializers.CharField(max_length=20)
    availability = serializers.BooleanField(required=False, default=True)
    year = serializers.IntegerField(min_value=1900, required=False, allow_null=True)
    features = serializers.ListField(
        child=serializers.CharField(max_length=100, allow_blank=False),
        required=False,
    )
    images = serializers.ListField(
        child=serializers.ImageField(),
        required=False,
        write_only=True,
    )
    replace_images = serializers.BooleanField(required=False, default=False, write_only=True)

    class Meta:
        model = Vehicle
        fields = [
            "name",
            "brand",
            "category",
            "description",
            "price_per_day",
            "latitude",
            "longitude",
            "address",
            "availability",
            "features",
            "fuel_type",
            "seating_capacity",
            "transmission",
            "year",
            "license_plate",
            "images",
            "replace_images",
        ]
        extra_kwargs = {
            "description": {"required": False, "allow_blank": True},
        }

    @staticmethod
    def _choice(value: str, choices, label: str) -> str:
        value = value.strip().lower()
        if value and value not in choices.values:
            raise serializers.ValidationError(f"Invalid {label}.")
        return value

    def validate_category(self, value: str) -> str:
        value = self._choice(value, Vehicle.Category, "category")
        if not value:
            raise serializers.ValidationError("Category is required.")
        return value

    def validate_fuel_type(self, value: str) -> str:
        return self._choice(value, Vehicle.FuelType, "fuel type")

    def validate_transmission(self, value: str) -> str:
        return self._choice(value, Vehicle.Transmission, "transmission type")

    def validate_year(self, value):  # type: ignore
        if value is not None and value > max_vehicle_year():
            raise serializers.ValidationError("Year cannot be in the future.")
        return value

    def validate_features(self, value: list[str]) -> list[str]:
        return [feature.strip() for feature in value if feature.strip()]

    def validate_license_plate(self, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise serializers.ValidationError("License plate is required.")
        qs = Vehicle.objects.filter(license_plate__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Vehicle with this license plate already exists.")
        return value

    def create(self, validated_data):  # type: ignore
        images = validated_data.pop("images", [])
        validated_data.pop("replace_images", None)
        owner = validated_data.pop("owner", None) or self.context["request"].user
        return create_vehicle(owner, validated_data, images)

    def update(self, instance, validated_data):  # type: ignore
        images = validated_data.pop("images", [])
        replace_images = validated_data.pop("replace_images", False)
        return update_vehicle(instance, validated_data, images, replace_images=replace_images)
