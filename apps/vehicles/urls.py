"""URL routing for the vehicles domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import VehicleViewSet

app_name = "vehicles"

router = SimpleRouter()
router.register(r"", VehicleViewSet, basename="vehicle")

urlpatterns = [
    path("", include(router.urls)),
]
