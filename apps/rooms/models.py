"""Room domain models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimePeriod

DEFAULT_TIME_PERIODS = (
    "08:00-10:00",
    "10:00-12:00",
    "13:00-15:00",
    "15:00-17:00",
)


class Room(models.Model):
    """A bookable room owned by a staff member."""

    class Status(models.TextChoices):
        AVAILABLE = "Available", _("Available")
        DISABLED = "Disabled", _("Disabled")

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rooms",
    )
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("room")
        verbose_name_plural = _("rooms")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    @property
    def is_disabled(self) -> bool:
        return self.status == self.Status.DISABLED


class TimeSlot(models.Model):
    """Recurring daily interval of a room, not tied to a date."""

    class Status(models.TextChoices):
        FREE = "Free", _("Free")
        DISABLED = "Disabled", _("Disabled")

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="time_slots")
    start_time = models.TimeField()
    end_time = models.TimeField()
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.FREE,
    )

    class Meta:
        verbose_name = _("time slot")
        verbose_name_plural = _("time slots")
        ordering = ["start_time", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["room", "start_time", "end_time"],
                name="timeslot_unique_period_per_room",
            ),
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="timeslot_end_after_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.room_id}: {self.time_period}"

    @property
    def period(self) -> TimePeriod:
        return TimePeriod(start=self.start_time, end=self.end_time)

    @property
    def time_period(self) -> str:
        return str(self.period)

    @property
    def is_disabled(self) -> bool:
        return self.status == self.Status.DISABLED
