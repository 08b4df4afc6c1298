"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class BookingRequested(DomainEvent):
    """
    Event: A booking request was stored as pending

    Triggers:
    - Audit log entry
    """
    booking_id: int
    user_id: int
    room_id: int
    slot_id: int
    booking_date: date

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=self.booking_id,
            user_id=self.user_id,
            room_id=self.room_id,
            slot_id=self.slot_id,
            booking_date=self.booking_date.isoformat(),
        )
        return data


@dataclass(kw_only=True)
class BookingResolved(DomainEvent):
    """
    Event: A pending booking was approved or rejected

    ``approver_id`` is None when the system expired the request.
    """
    booking_id: int
    status: str
    approver_id: Optional[int] = None
    resolution_reason: Optional[str] = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=self.booking_id,
            status=self.status,
            approver_id=self.approver_id,
            resolution_reason=self.resolution_reason,
        )
        return data
