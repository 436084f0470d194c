"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "role",
            "avatar",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "created_at",
            "updated_at",
        ]


class UserShortSerializer(serializers.ModelSerializer):
    """Compact user representation embedded in bookings and reviews."""

    class Meta:
        model = User
        fields = ["id", "name", "email"]
        read_only_fields = fields


class UpdateDetailsSerializer(serializers.ModelSerializer):
    """Profile update: name and phone."""

    class Meta:
        model = User
        fields = ["name", "phone"]
        extra_kwargs = {
            "name": {"required": False, "min_length": 2, "max_length": 50},
            "phone": {"required": False},
        }
