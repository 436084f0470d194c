"""Serializers for authentication flows (register, login, logout, password change)."""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth import password_validation  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework_simplejwt.exceptions import TokenError  # type: ignore
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .models import PHONE_VALIDATOR

logger = logging.getLogger(__name__)

User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=50)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    phone = serializers.CharField(validators=[PHONE_VALIDATOR])

    def validate_name(self, value: str) -> str:
        return value.strip()

    def validate_email(self, value: str) -> str:
        value = User.objects.normalize_email(value).lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists with this email.")
        return value

    def validate_password(self, value: str) -> str:
        password_validation.validate_password(value)
        return value

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        user = User.objects.create_user(password=password, **validated_data)
        logger.info(f"Registered user {user.id} ({user.email})")
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs.get("email", "")
        password = attrs.get("password", "")

        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise serializers.ValidationError({"non_field_errors": ["Invalid credentials"]})

        if not user.is_active or not user.check_password(password):
            raise serializers.ValidationError({"non_field_errors": ["Invalid credentials"]})

        attrs["user"] = user
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()

    def save(self, **kwargs):  # type: ignore
        try:
            RefreshToken(self.validated_data["refresh"]).blacklist()
        except TokenError:
            raise serializers.ValidationError({"refresh": ["Token is invalid or expired."]})


class UpdatePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(min_length=6, write_only=True)

    def validate_current_password(self, value: str) -> str:
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect.")
        return value

    def validate_new_password(self, value: str) -> str:
        password_validation.validate_password(value, self.context["request"].user)
        return value

    def save(self, **kwargs):  # type: ignore
        user = self.context["request"].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password"])
        logger.info(f"Password changed for user {user.id}")
        return user
