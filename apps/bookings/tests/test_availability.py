from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone as dt_timezone

import pytest

from apps.bookings import availability
from apps.bookings.models import Booking
from apps.rooms.models import Room, TimeSlot
from apps.rooms.services import create_room
from apps.users.models import User

NOW = datetime(2031, 3, 10, 11, 0, tzinfo=dt_timezone.utc)
TODAY = NOW.date()


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        username="owner",
        email="owner@example.com",
        password="OwnerPass123",
        role=User.RoleChoices.STAFF,
    )


@pytest.fixture
def room(owner):
    return create_room(owner, {"name": "Seminar room"})


def _slot(room: Room, start: str) -> TimeSlot:
    return room.time_slots.select_related("room").get(start_time=start)


@pytest.mark.django_db
def test_slot_has_elapsed_compares_end_time_with_clock(room):
    morning = _slot(room, "08:00")
    late_morning = _slot(room, "10:00")

    assert availability.slot_has_elapsed(morning, TODAY, NOW)
    assert not availability.slot_has_elapsed(late_morning, TODAY, NOW)
    assert availability.slot_has_elapsed(late_morning, TODAY, NOW.replace(hour=12))


@pytest.mark.django_db
def test_slot_has_elapsed_for_other_dates(room):
    slot = _slot(room, "15:00")

    assert availability.slot_has_elapsed(slot, TODAY - timedelta(days=1), NOW)
    assert not availability.slot_has_elapsed(slot, TODAY + timedelta(days=1), NOW.replace(hour=23))


@pytest.mark.django_db
def test_resolve_slot_status_precedence(room):
    slot = _slot(room, "13:00")

    assert availability.resolve_slot_status(slot, TODAY, NOW) == availability.FREE
    assert availability.resolve_slot_status(slot, TODAY, NOW, Booking.Status.PENDING) == availability.PENDING
    assert availability.resolve_slot_status(slot, TODAY, NOW, Booking.Status.APPROVED) == availability.RESERVED

    slot.status = TimeSlot.Status.DISABLED
    assert availability.resolve_slot_status(slot, TODAY, NOW, Booking.Status.APPROVED) == availability.DISABLE

    slot.status = TimeSlot.Status.FREE
    slot.room.status = Room.Status.DISABLED
    assert availability.resolve_slot_status(slot, TODAY, NOW, Booking.Status.APPROVED) == availability.DISABLE


@pytest.mark.django_db
def test_room_slot_statuses_uses_bookings_of_the_date(room, owner):
    student = User.objects.create_user(username="s", email="s@example.com", password="StudentPass1")
    pending_slot = _slot(room, "13:00")
    approved_slot = _slot(room, "15:00")
    Booking.objects.create(user=student, room=room, slot=pending_slot, booking_date=TODAY)
    Booking.objects.create(
        user=owner,
        room=room,
        slot=approved_slot,
        booking_date=TODAY,
        status=Booking.Status.APPROVED,
    )
    Booking.objects.create(
        user=student,
        room=room,
        slot=_slot(room, "10:00"),
        booking_date=TODAY + timedelta(days=1),
    )

    statuses = availability.room_slot_statuses(room, now=NOW)

    assert statuses == {
        _slot(room, "08:00").id: availability.DISABLE,
        _slot(room, "10:00").id: availability.FREE,
        pending_slot.id: availability.PENDING,
        approved_slot.id: availability.RESERVED,
    }


@pytest.mark.django_db
def test_rejected_bookings_do_not_block(room, owner):
    student = User.objects.create_user(username="s", email="s@example.com", password="StudentPass1")
    slot = _slot(room, "13:00")
    Booking.objects.create(
        user=student,
        room=room,
        slot=slot,
        booking_date=TODAY,
        status=Booking.Status.REJECTED,
        approver=owner,
        resolution_reason="No",
    )

    assert availability.room_slot_statuses(room, now=NOW)[slot.id] == availability.FREE


@pytest.mark.django_db
def test_rooms_slot_statuses_covers_every_room(owner, room):
    second = create_room(owner, {"name": "Lecture hall"})
    second_slot = second.time_slots.first()
    second_slot.status = TimeSlot.Status.DISABLED
    second_slot.save()

    statuses = availability.rooms_slot_statuses([room, second], on_date=date(2031, 3, 11), now=NOW)

    assert len(statuses) == 8
    assert statuses[second_slot.id] == availability.DISABLE
    assert sum(1 for value in statuses.values() if value == availability.FREE) == 7


def test_local_now_is_aware(settings):
    settings.TIME_ZONE = "Asia/Bangkok"
    now = availability.local_now()
    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == 7 * 3600
    assert isinstance(now.time(), time)
