"""Celery tasks for the booking domain."""

from __future__ import annotations

import structlog
from celery import shared_task  # type: ignore

from .services import expire_stale_bookings

logger = structlog.get_logger(__name__)


@shared_task(name="bookings.expire_stale_bookings")
def expire_stale_bookings_task() -> int:
    """Reject pending bookings for dates that have already gone by."""

    expired = expire_stale_bookings()
    logger.info("bookings.expire_stale_bookings.finished", expired=expired)
    return expired
