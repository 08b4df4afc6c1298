"""Domain services for booking workflows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog
from django.contrib.auth import get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.rooms.models import TimeSlot
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

from .availability import local_now, slot_has_elapsed
from .domain.events import BookingRequested, BookingResolved
from .models import Booking
from .scopes import can_resolve

logger = structlog.get_logger(__name__)

APPROVE = "approve"
REJECT = "reject"
RESOLUTION_ACTIONS = (APPROVE, REJECT)

EXPIRED_REASON = "Expired without review."


@dataclass
class BookingRequest:
    """A validated request to book one slot on one date."""

    user: object
    room_id: int
    slot_id: int
    booking_date: date
    reason: str = ""


def lock_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def create_booking(request: BookingRequest) -> Booking:
    """Store a pending booking if the slot and the user are both free.

    Rows are locked in a fixed order: the user, the slot, then any active
    booking for the date. The partial unique constraints on ``Booking``
    catch whatever slips past the locks.
    """

    User = get_user_model()

    with DjangoUnitOfWork() as uow:
        user = lock_if_possible(User.objects.filter(pk=request.user.pk)).first()
        if user is None:
            raise NotFoundError("User not found.")

        slot = (
            lock_if_possible(
                TimeSlot.objects.filter(
                    pk=request.slot_id,
                    room_id=request.room_id,
                )
            )
            .first()
        )
        if slot is None:
            raise NotFoundError("Time slot not found.")

        if slot.is_disabled:
            raise ConflictError("This time slot is permanently disabled.")
        if slot.room.is_disabled:
            raise ConflictError("This room is disabled.")

        now = local_now()
        if slot_has_elapsed(slot, request.booking_date, now):
            raise ConflictError("This time slot has already passed.")

        own_active = lock_if_possible(
            Booking.objects.filter(
                user=user,
                booking_date=request.booking_date,
                status__in=Booking.ACTIVE_STATUSES,
            )
        ).first()
        if own_active is not None:
            raise ConflictError("You already have an active booking for this date.")

        slot_active = lock_if_possible(
            Booking.objects.filter(
                slot=slot,
                booking_date=request.booking_date,
                status__in=Booking.ACTIVE_STATUSES,
            )
        ).first()
        if slot_active is not None:
            raise ConflictError("This time slot is no longer available.")

        try:
            with transaction.atomic():
                booking = Booking.objects.create(
                    user=user,
                    room=slot.room,
                    slot=slot,
                    booking_date=request.booking_date,
                    reason=request.reason or "",
                    status=Booking.Status.PENDING,
                )
        except IntegrityError:
            if Booking.objects.filter(
                user=user,
                booking_date=request.booking_date,
                status__in=Booking.ACTIVE_STATUSES,
            ).exists():
                raise ConflictError("You already have an active booking for this date.")
            raise ConflictError("This time slot is no longer available.")

        uow.record(
            BookingRequested(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                user_id=user.pk,
                room_id=slot.room_id,
                slot_id=slot.pk,
                booking_date=booking.booking_date,
            )
        )

    logger.info(
        "booking.created",
        booking_id=booking.pk,
        user_id=user.pk,
        room_id=slot.room_id,
        slot_id=slot.pk,
        booking_date=booking.booking_date.isoformat(),
    )
    return booking


def resolve_booking(
    approver,
    booking_id: int,
    action: str,
    reason: Optional[str] = None,
) -> Booking:
    """Move a pending booking to approved or rejected, exactly once."""

    if action not in RESOLUTION_ACTIONS:
        raise ValidationError("Action must be 'approve' or 'reject'.")

    reason = (reason or "").strip()
    if action == REJECT and not reason:
        raise ValidationError("A reason is required to reject a booking.")

    with DjangoUnitOfWork() as uow:
        booking = (
            lock_if_possible(Booking.objects.filter(pk=booking_id))
            .first()
        )
        if booking is None:
            raise NotFoundError("Booking not found.")

        if not can_resolve(approver, booking):
            raise AuthorizationError("You cannot resolve bookings for this room.")

        if not booking.is_pending:
            raise ConflictError("This booking has already been processed.")

        if action == APPROVE:
            booking.status = Booking.Status.APPROVED
            booking.resolution_reason = None
        else:
            booking.status = Booking.Status.REJECTED
            booking.resolution_reason = reason
        booking.approver = approver
        booking.resolved_at = timezone.now()
        booking.save(update_fields=["status", "approver", "resolution_reason", "resolved_at"])

        uow.record(
            BookingResolved(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                status=booking.status,
                approver_id=approver.pk,
                resolution_reason=booking.resolution_reason,
            )
        )

    logger.info(
        "booking.resolved",
        booking_id=booking.pk,
        approver_id=approver.pk,
        status=booking.status,
    )
    return booking


def expire_stale_bookings(today: Optional[date] = None) -> int:
    """Reject pending bookings whose date is already behind us.

    Each booking is handled in its own transaction so that one failure does
    not hold locks on the rest. Returns the number of expired bookings.
    """

    today = today or local_now().date()
    stale_ids = list(
        Booking.objects.filter(
            status=Booking.Status.PENDING,
            booking_date__lt=today,
        ).values_list("pk", flat=True)
    )

    expired = 0
    for booking_id in stale_ids:
        with DjangoUnitOfWork() as uow:
            booking = lock_if_possible(
                Booking.objects.filter(pk=booking_id, status=Booking.Status.PENDING)
            ).first()
            if booking is None:
                # resolved by someone else in the meantime
                continue
            booking.status = Booking.Status.REJECTED
            booking.resolution_reason = EXPIRED_REASON
            booking.resolved_at = timezone.now()
            booking.save(update_fields=["status", "resolution_reason", "resolved_at"])
            uow.record(
                BookingResolved(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    status=booking.status,
                    resolution_reason=EXPIRED_REASON,
                )
            )
        expired += 1
        logger.info("booking.expired", booking_id=booking_id)

    return expired
