from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from apps.users.models import User
from apps.vehicles.models import Vehicle
from apps.vehicles.services import bounding_box, vehicles_within_radius

ALMATY = (43.238949, 76.889709)


@pytest.fixture
def owner():
    return User.objects.create_superuser(email="admin@example.com", name="Admin", password="secret123")


@pytest.fixture
def fleet(owner):
    def make(plate, lat, lng, **extra):
        return Vehicle.objects.create(
            owner=owner,
            name=f"Vehicle {plate}",
            brand="Toyota",
            category=Vehicle.Category.CAR,
            price_per_day=Decimal("40.00"),
            latitude=Decimal(str(lat)),
            longitude=Decimal(str(lng)),
            address="Almaty",
            license_plate=plate,
            **extra,
        )

    return {
        # ~1 km north of the center
        "near": make("NEAR1", 43.247949, 76.889709),
        # ~5 km east
        "mid": make("MID1", 43.238949, 76.951500),
        # ~50 km north
        "far": make("FAR1", 43.688949, 76.889709),
        "parked": make("PARK1", 43.239949, 76.889709, availability=False),
    }


def test_bounding_box_contains_radius():
    min_lat, max_lat, min_lng, max_lng = bounding_box(*ALMATY, 10)

    assert min_lat < ALMATY[0] < max_lat
    assert min_lng < ALMATY[1] < max_lng
    assert max_lat - min_lat == pytest.approx(0.18, abs=0.01)


def test_bounding_box_drops_longitude_across_antimeridian():
    _, _, min_lng, max_lng = bounding_box(10.0, 179.99, 50)
    assert min_lng is None and max_lng is None


def test_bounding_box_drops_longitude_near_pole():
    min_lat, max_lat, min_lng, max_lng = bounding_box(89.95, 0.0, 50)
    assert max_lat == 90.0
    assert min_lng is None and max_lng is None


@pytest.mark.django_db
def test_vehicles_within_radius(fleet):
    queryset = Vehicle.objects.all()

    within_2km = set(vehicles_within_radius(queryset, *ALMATY, 2).values_list("license_plate", flat=True))
    within_10km = set(vehicles_within_radius(queryset, *ALMATY, 10).values_list("license_plate", flat=True))

    assert within_2km == {"NEAR1", "PARK1"}
    assert within_10km == {"NEAR1", "MID1", "PARK1"}


@pytest.mark.django_db
def test_list_radius_filter(fleet):
    response = APIClient().get(
        reverse("vehicles:vehicle-list"),
        {"lat": ALMATY[0], "lng": ALMATY[1], "radius": 2},
    )

    assert response.status_code == 200
    assert [item["license_plate"] for item in response.json()["data"]] == ["NEAR1"]


@pytest.mark.django_db
def test_list_radius_defaults_to_ten_km(fleet):
    response = APIClient().get(reverse("vehicles:vehicle-list"), {"lat": ALMATY[0], "lng": ALMATY[1]})

    assert {item["license_plate"] for item in response.json()["data"]} == {"NEAR1", "MID1"}


@pytest.mark.django_db
def test_near_returns_available_vehicles_in_range(fleet):
    response = APIClient().get(
        reverse("vehicles:vehicle-near"),
        {"lat": ALMATY[0], "lng": ALMATY[1], "radius": 100, "limit": 2},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert {item["license_plate"] for item in body["data"]} <= {"NEAR1", "MID1", "FAR1"}


@pytest.mark.django_db
def test_near_requires_coordinates(fleet):
    response = APIClient().get(reverse("vehicles:vehicle-near"), {"lng": ALMATY[1]})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "lat" in body["errors"]
