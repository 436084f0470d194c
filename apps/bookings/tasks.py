"""Periodic Celery tasks for bookings."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from . import services

logger = logging.getLogger(__name__)


@shared_task(name="bookings.expire_pending_bookings")
def expire_pending_bookings() -> dict[str, int]:
    """
    Cancel stale pending bookings so their dates can be booked again.

    Runs periodically through Celery Beat.

    Returns:
        dict: {"expired": number of cancelled bookings}
    """
    expired = services.expire_pending_bookings()
    if expired:
        logger.info(f"Pending booking expiry run cancelled {expired} booking(s)")
    return {"expired": expired}
