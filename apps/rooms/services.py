"""Room workflows that span several rows."""

from __future__ import annotations

from typing import Any

import structlog
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import ProtectedError, RestrictedError  # type: ignore

from shared.domain.exceptions import ConflictError, NotFoundError
from shared.domain.value_objects import TimePeriod

from .models import DEFAULT_TIME_PERIODS, Room, TimeSlot

logger = structlog.get_logger(__name__)


def create_room(owner, data: dict[str, Any]) -> Room:
    """Create a room together with its default daily slots."""

    periods = [TimePeriod.parse(value) for value in DEFAULT_TIME_PERIODS]
    try:
        with transaction.atomic():
            room = Room.objects.create(owner=owner, **data)
            TimeSlot.objects.bulk_create(
                [TimeSlot(room=room, start_time=p.start, end_time=p.end) for p in periods]
            )
    except IntegrityError:
        raise ConflictError("A room with that name already exists.")

    logger.info("room.created", room_id=room.pk, owner_id=getattr(owner, "pk", None))
    return room


def delete_room(room_id: int) -> None:
    """Delete a room and its slots; rooms with booking history stay."""

    try:
        with transaction.atomic():
            room = Room.objects.select_for_update().filter(pk=room_id).first()
            if room is None:
                raise NotFoundError("Room not found.")
            room.delete()
    except (ProtectedError, RestrictedError):
        raise ConflictError("This room has booking history and cannot be deleted.")

    logger.info("room.deleted", room_id=room_id)


def set_slot_status(room: Room, slot_id: int, status: str) -> TimeSlot:
    with transaction.atomic():
        slot = TimeSlot.objects.select_for_update().filter(pk=slot_id, room=room).first()
        if slot is None:
            raise NotFoundError("Time slot not found.")
        slot.status = status
        slot.save(update_fields=["status"])

    logger.info("room.slot_status_changed", room_id=room.pk, slot_id=slot.pk, status=status)
    return slot
