"""URL routing for authentication endpoints (namespace: auth)."""

from __future__ import annotations

from django.urls import path  # type: ignore
from rest_framework_simplejwt.views import TokenRefreshView  # type: ignore

from .auth_views import (
    RegisterView,
    LoginView,
    LogoutView,
    MeView,
    UpdateDetailsView,
    UpdatePasswordView,
)

app_name = "auth"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("me/", MeView.as_view(), name="me"),
    path("updatedetails/", UpdateDetailsView.as_view(), name="update-details"),
    path("updatepassword/", UpdatePasswordView.as_view(), name="update-password"),
]
