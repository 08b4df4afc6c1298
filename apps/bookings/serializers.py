"""Serializers for the booking domain."""

from __future__ import annotations

from typing import Any

from rest_framework import serializers  # type: ignore

from .availability import local_now
from .models import Booking
from .services import RESOLUTION_ACTIONS, BookingRequest

IDENTITY_FIELDS = ("user", "user_id", "approver", "approver_id")


class BookingCreateSerializer(serializers.Serializer):
    """Booking request made by the authenticated user."""

    room_id = serializers.IntegerField(min_value=1)
    slot_id = serializers.IntegerField(min_value=1)
    booking_date = serializers.DateField()
    reason = serializers.CharField(required=False, allow_blank=True, default="")

    def to_internal_value(self, data):  # type: ignore
        supplied = [name for name in IDENTITY_FIELDS if name in data]
        if supplied:
            raise serializers.ValidationError(
                {name: ["Identity is taken from the access token."] for name in supplied}
            )
        return super().to_internal_value(data)

    def validate_booking_date(self, value):  # type: ignore
        if value < local_now().date():
            raise serializers.ValidationError("Cannot book a date in the past.")
        return value

    def to_booking_request(self) -> BookingRequest:
        data: dict[str, Any] = self.validated_data  # type: ignore
        return BookingRequest(
            user=self.context["request"].user,
            room_id=data["room_id"],
            slot_id=data["slot_id"],
            booking_date=data["booking_date"],
            reason=data.get("reason", ""),
        )


class BookingSerializer(serializers.ModelSerializer):
    """Read model of a booking."""

    user_id = serializers.ReadOnlyField()
    username = serializers.ReadOnlyField(source="user.username")
    room_id = serializers.ReadOnlyField()
    room_name = serializers.ReadOnlyField(source="room.name")
    slot_id = serializers.ReadOnlyField()
    time_period = serializers.ReadOnlyField(source="slot.time_period")
    approver_id = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "username",
            "room_id",
            "room_name",
            "slot_id",
            "time_period",
            "booking_date",
            "reason",
            "status",
            "approver_id",
            "resolution_reason",
            "resolved_at",
            "created_at",
        ]
        read_only_fields = fields


class BookingResolveSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=RESOLUTION_ACTIONS)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):  # type: ignore
        if attrs["action"] == "reject" and not (attrs.get("reason") or "").strip():
            raise serializers.ValidationError({"reason": ["A reason is required to reject a booking."]})
        return attrs
