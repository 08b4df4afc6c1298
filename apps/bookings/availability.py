"""Derived slot availability.

A slot's availability on a date is never stored. It is computed from the
static disable flags of the room and slot, the wall clock in the configured
time zone, and the active bookings for that date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from django.utils import timezone  # type: ignore

from apps.rooms.models import Room, TimeSlot

from .models import Booking

DISABLE = "Disable"
RESERVED = "Reserved"
PENDING = "Pending"
FREE = "Free"

SLOT_STATUSES = (DISABLE, RESERVED, PENDING, FREE)


def local_now() -> datetime:
    """Current aware datetime in the configured time zone."""
    return timezone.localtime(timezone.now())


def slot_has_elapsed(slot: TimeSlot, on_date: date, now: datetime) -> bool:
    """True when the slot can no longer be used on ``on_date``.

    Dates before today are always elapsed; for today the slot is elapsed
    once its end time is not after the current local time.
    """
    today = now.date()
    if on_date < today:
        return True
    if on_date > today:
        return False
    return slot.period.has_elapsed(now.time())


def resolve_slot_status(
    slot: TimeSlot,
    on_date: date,
    now: datetime,
    active_status: str | None = None,
) -> str:
    """Fold static flags, the clock and the active booking into one status."""
    if slot.room.is_disabled or slot.is_disabled:
        return DISABLE
    if slot_has_elapsed(slot, on_date, now):
        return DISABLE
    if active_status == Booking.Status.APPROVED:
        return RESERVED
    if active_status == Booking.Status.PENDING:
        return PENDING
    return FREE


def _active_statuses(slot_ids: Iterable[int], on_date: date) -> dict[int, str]:
    rows = Booking.objects.filter(
        slot_id__in=list(slot_ids),
        booking_date=on_date,
        status__in=Booking.ACTIVE_STATUSES,
    ).values_list("slot_id", "status")
    statuses: dict[int, str] = {}
    for slot_id, status in rows:
        # approved wins if bad data ever left two active rows
        if statuses.get(slot_id) != Booking.Status.APPROVED:
            statuses[slot_id] = status
    return statuses


def rooms_slot_statuses(
    rooms: Iterable[Room],
    on_date: date | None = None,
    now: datetime | None = None,
) -> dict[int, str]:
    """Map every slot id of ``rooms`` to its derived status for the date."""
    now = now or local_now()
    on_date = on_date or now.date()

    slots = list(
        TimeSlot.objects.filter(room__in=list(rooms)).select_related("room")
    )
    active = _active_statuses((slot.id for slot in slots), on_date)
    return {
        slot.id: resolve_slot_status(slot, on_date, now, active.get(slot.id))
        for slot in slots
    }


def room_slot_statuses(
    room: Room,
    on_date: date | None = None,
    now: datetime | None = None,
) -> dict[int, str]:
    return rooms_slot_statuses([room], on_date=on_date, now=now)
