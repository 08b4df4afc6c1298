"""Message bus handlers for booking events."""

from __future__ import annotations

import structlog

from shared.application.message_bus import message_bus

from .domain.events import BookingRequested, BookingResolved

logger = structlog.get_logger(__name__)


def audit_booking_requested(event: BookingRequested) -> None:
    logger.info("audit.booking_requested", **event.to_dict())


def audit_booking_resolved(event: BookingResolved) -> None:
    logger.info("audit.booking_resolved", **event.to_dict())


def register_handlers() -> None:
    message_bus.register_event_handler(BookingRequested, audit_booking_requested)
    message_bus.register_event_handler(BookingResolved, audit_booking_resolved)
