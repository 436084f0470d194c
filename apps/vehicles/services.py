"""Domain services for the vehicle catalogue."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any, Iterable

from django.db import transaction  # type: ignore
from django.db.models import ProtectedError  # type: ignore
from geopy.distance import EARTH_RADIUS, great_circle  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Vehicle, VehicleImage
from .tasks import purge_media_files

logger = logging.getLogger(__name__)


def bounding_box(lat: float, lng: float, radius_km: float) -> tuple[float, float, float | None, float | None]:
    """
    Latitude/longitude window enclosing a circle of ``radius_km``.

    The longitude bounds are ``None`` when the window would cross the
    antimeridian or reach a pole; callers then filter on latitude only.
    """

    lat_delta = math.degrees(radius_km / EARTH_RADIUS)
    min_lat, max_lat = lat - lat_delta, lat + lat_delta
    if min_lat <= -90 or max_lat >= 90:
        return max(min_lat, -90.0), min(max_lat, 90.0), None, None

    lng_delta = math.degrees(radius_km / (EARTH_RADIUS * math.cos(math.radians(lat))))
    min_lng, max_lng = lng - lng_delta, lng + lng_delta
    if min_lng < -180 or max_lng > 180:
        return min_lat, max_lat, None, None
    return min_lat, max_lat, min_lng, max_lng


def vehicles_within_radius(queryset, lat: float, lng: float, radius_km: float):
    """Restrict ``queryset`` to vehicles within ``radius_km`` great-circle km of the point."""

    lat, lng, radius_km = float(lat), float(lng), float(radius_km)
    min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius_km)

    candidates = queryset.filter(
        latitude__gte=Decimal(str(min_lat)),
        latitude__lte=Decimal(str(max_lat)),
    )
    if min_lng is not None and max_lng is not None:
        candidates = candidates.filter(
            longitude__gte=Decimal(str(min_lng)),
            longitude__lte=Decimal(str(max_lng)),
        )

    origin = (lat, lng)
    matching_ids = [
        pk
        for pk, v_lat, v_lng in candidates.values_list("pk", "latitude", "longitude")
        if great_circle(origin, (float(v_lat), float(v_lng))).km <= radius_km
    ]
    return queryset.filter(pk__in=matching_ids)


def schedule_media_purge(names: Iterable[str]) -> None:
    """Delete stored files once the surrounding transaction commits."""

    names = [name for name in names if name]
    if not names:
        return
    transaction.on_commit(lambda: purge_media_files.delay(names))


def _attach_images(vehicle: Vehicle, images: Iterable[Any]) -> None:
    for image in images:
        VehicleImage.objects.create(vehicle=vehicle, image=image)


@transaction.atomic
def create_vehicle(owner, data: dict[str, Any], images: Iterable[Any] = ()) -> Vehicle:
    vehicle = Vehicle.objects.create(owner=owner, **data)
    _attach_images(vehicle, images)
    logger.info(f"Vehicle {vehicle.id} ({vehicle.license_plate}) listed by user {owner.id}")
    return vehicle


@transaction.atomic
def update_vehicle(
    vehicle: Vehicle,
    data: dict[str, Any],
    images: Iterable[Any] = (),
    *,
    replace_images: bool = False,
) -> Vehicle:
    """
    Apply field changes and new uploads to a vehicle.

    New images are appended; with ``replace_images`` the existing images
    are dropped and their files purged after commit.
    """

    for field, value in data.items():
        setattr(vehicle, field, value)
    vehicle.save()

    images = list(images)
    if images and replace_images:
        old_images = list(vehicle.images.all())
        schedule_media_purge(image.image.name for image in old_images)
        VehicleImage.objects.filter(pk__in=[image.pk for image in old_images]).delete()
    _attach_images(vehicle, images)
    return vehicle


@transaction.atomic
def delete_vehicle(vehicle: Vehicle) -> None:
    names = list(vehicle.images.values_list("image", flat=True))
    vehicle_id = vehicle.id
    try:
        vehicle.delete()
    except ProtectedError:
        raise serializers.ValidationError(
            {"non_field_errors": ["Vehicle has bookings and cannot be deleted. Mark it unavailable instead."]}
        )
    schedule_media_purge(names)
    logger.info(f"Vehicle {vehicle_id} deleted, {len(names)} image file(s) scheduled for purge")
