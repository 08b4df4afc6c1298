"""Serializers for rooms and time slots."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.domain.exceptions import ConflictError

from .models import Room, TimeSlot


class TimeSlotSerializer(serializers.ModelSerializer):
    """Slot with its stored flag and the availability derived for a date.

    The derived ``status`` is looked up in the ``slot_statuses`` mapping
    passed through the serializer context.
    """

    room_id = serializers.ReadOnlyField()
    time_period = serializers.ReadOnlyField()
    static_status = serializers.ReadOnlyField(source="status")
    status = serializers.SerializerMethodField()

    class Meta:
        model = TimeSlot
        fields = [
            "id",
            "room_id",
            "time_period",
            "start_time",
            "end_time",
            "static_status",
            "status",
        ]
        read_only_fields = fields

    def get_status(self, obj: TimeSlot) -> str | None:
        return self.context.get("slot_statuses", {}).get(obj.id)


class TimeSlotStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TimeSlot.Status.choices)


class RoomSerializer(serializers.ModelSerializer):
    owner_id = serializers.ReadOnlyField()

    class Meta:
        model = Room
        fields = [
            "id",
            "name",
            "description",
            "owner_id",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner_id", "created_at", "updated_at"]
        extra_kwargs = {
            "name": {"validators": []},
            "description": {"required": False, "allow_blank": True},
        }

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Room name cannot be blank.")
        duplicates = Room.objects.filter(name__iexact=value)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise ConflictError("A room with that name already exists.")
        return value


class RoomWithSlotsSerializer(RoomSerializer):
    """Room together with all of its slots."""

    slots = TimeSlotSerializer(source="time_slots", many=True, read_only=True)

    class Meta(RoomSerializer.Meta):
        fields = RoomSerializer.Meta.fields + ["slots"]
