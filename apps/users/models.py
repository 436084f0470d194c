"""User domain models for RideRent.

Renters and administrators share one model. Renters book vehicles and
review completed rentals; administrators manage the vehicle catalogue and
drive bookings through their lifecycle.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import MinLengthValidator, RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Please provide a valid phone number in international format without spaces."),
)


class CustomUserManager(BaseUserManager):
    """User manager using email as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """Strip spaces and dashes so phones are stored uniformly."""
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Platform user identified by email."""

    class RoleChoices(models.TextChoices):
        USER = "user", _("User")
        ADMIN = "admin", _("Admin")

    username = None
    first_name = None
    last_name = None

    name = models.CharField(
        _("Name"),
        max_length=50,
        validators=[MinLengthValidator(2)],
    )
    email = models.EmailField(_("Email"), unique=True)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    role = models.CharField(
        _("Role"),
        max_length=10,
        choices=RoleChoices.choices,
        default=RoleChoices.USER,
    )
    avatar = models.ImageField(_("Avatar"), upload_to="avatars/", blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def get_full_name(self) -> str:
        return self.name

    def get_short_name(self) -> str:
        return self.name

    def is_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN or self.is_staff or self.is_superuser


User = CustomUser
