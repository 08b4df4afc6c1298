"""Which bookings a caller may see and resolve."""

from __future__ import annotations

from django.db.models import Q, QuerySet  # type: ignore

from .models import Booking


def bookings_visible_to(user, queryset: QuerySet | None = None) -> QuerySet:
    """Restrict ``queryset`` to the bookings ``user`` is allowed to read.

    Students see their own bookings, lecturers see every pending booking
    and the ones they resolved, staff see bookings of the rooms they own.
    Superusers are not restricted.
    """
    qs = queryset if queryset is not None else Booking.objects.all()
    if not user or not user.is_authenticated:
        return qs.none()
    if user.is_superuser:
        return qs
    if user.is_staff_member():
        return qs.filter(room__owner=user)
    if user.is_lecturer():
        return qs.filter(Q(status=Booking.Status.PENDING) | Q(approver=user))
    return qs.filter(user=user)


def can_resolve(user, booking: Booking) -> bool:
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser or user.is_lecturer():
        return True
    if user.is_staff_member():
        return booking.room.owner_id == user.id
    return False
