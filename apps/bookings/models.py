"""Booking domain models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A request to use one time slot of a room on one date.

    Rows are never deleted. The status moves from pending to approved or
    rejected once; the partial unique constraints below back the
    one-active-booking rules at the database level.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    ACTIVE_STATUSES = (Status.PENDING, Status.APPROVED)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    slot = models.ForeignKey(
        "rooms.TimeSlot",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    booking_date = models.DateField()
    reason = models.TextField(blank=True)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    approver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="resolved_bookings",
    )
    resolution_reason = models.TextField(null=True, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("booking")
        verbose_name_plural = _("bookings")
        ordering = ["-booking_date", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["slot", "booking_date"],
                condition=models.Q(status__in=["pending", "approved"]),
                name="booking_one_active_per_slot_date",
            ),
            models.UniqueConstraint(
                fields=["user", "booking_date"],
                condition=models.Q(status__in=["pending", "approved"]),
                name="booking_one_active_per_user_date",
            ),
            models.CheckConstraint(
                condition=~models.Q(status="rejected")
                | (models.Q(resolution_reason__isnull=False) & ~models.Q(resolution_reason="")),
                name="booking_rejection_has_reason",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "booking_date"], name="booking_room_date_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.booking_date} slot {self.slot_id} ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == self.Status.PENDING
