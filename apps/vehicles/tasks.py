"""Celery tasks for the vehicle catalogue."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.core.files.storage import default_storage  # type: ignore

logger = logging.getLogger(__name__)


@shared_task(name="vehicles.purge_media_files")
def purge_media_files(names: list[str]) -> dict[str, int]:
    """
    Remove image files from the media store.

    A file that cannot be deleted is logged and skipped so the remaining
    files are still removed.

    Returns:
        dict: {"deleted": removed files, "failed": files left behind}
    """
    deleted = failed = 0
    for name in names:
        try:
            default_storage.delete(name)
            deleted += 1
        except Exception as e:
            failed += 1
            logger.error(f"Error deleting media file {name}: {e}", exc_info=True)

    if deleted:
        logger.info(f"Purged {deleted} media file(s)")

    return {"deleted": deleted, "failed": failed}
