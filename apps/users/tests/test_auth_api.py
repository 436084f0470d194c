"""API tests for authentication endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.password = "secret123"
        self.user = User.objects.create_user(
            email="renter@example.com",
            name="Renter",
            phone="+77001234567",
            password=self.password,
        )

    def _login(self) -> dict:
        response = self.client.post(
            reverse("auth:login"),
            {"email": self.user.email, "password": self.password},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return response.data["tokens"]

    def test_register_returns_tokens(self) -> None:
        payload = {
            "name": "New Renter",
            "email": "new@example.com",
            "phone": "+77007654321",
            "password": "secret123",
        }

        response = self.client.post(reverse("auth:register"), payload)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertIn("tokens", body["data"])
        self.assertEqual(body["data"]["user"]["email"], payload["email"])
        self.assertEqual(body["data"]["user"]["role"], User.RoleChoices.USER)
        self.assertTrue(User.objects.filter(email=payload["email"]).exists())

    def test_register_duplicate_email_rejected(self) -> None:
        payload = {
            "name": "Someone",
            "email": self.user.email,
            "phone": "+77001112233",
            "password": "secret123",
        }

        response = self.client.post(reverse("auth:register"), payload)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("email", body["errors"])

    def test_register_short_password_rejected(self) -> None:
        payload = {"name": "Short", "email": "short@example.com", "phone": "+77001112233", "password": "123"}

        response = self.client.post(reverse("auth:register"), payload)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.json()["errors"])

    def test_login_with_wrong_password(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": self.user.email, "password": "wrong-password"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["message"], "Invalid credentials")

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.json()["success"])

    def test_me_with_bearer_token(self) -> None:
        tokens = self._login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["email"], self.user.email)

    def test_update_details(self) -> None:
        self.client.force_authenticate(self.user)

        response = self.client.put(reverse("auth:update-details"), {"name": "Renamed", "phone": "+77009998877"})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, "Renamed")
        self.assertEqual(self.user.phone, "+77009998877")

    def test_update_password(self) -> None:
        self.client.force_authenticate(self.user)

        wrong = self.client.put(
            reverse("auth:update-password"),
            {"current_password": "nope", "new_password": "another123"},
        )
        self.assertEqual(wrong.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.put(
            reverse("auth:update-password"),
            {"current_password": self.password, "new_password": "another123"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("tokens", response.json()["data"])
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("another123"))

    def test_logout_blacklists_refresh_token(self) -> None:
        tokens = self._login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post(reverse("auth:logout"), {"refresh": tokens["refresh"]})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        refresh = self.client.post(reverse("auth:token_refresh"), {"refresh": tokens["refresh"]})
        self.assertEqual(refresh.status_code, status.HTTP_401_UNAUTHORIZED)
