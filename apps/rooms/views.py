"""API views for rooms and their time slots."""

from __future__ import annotations

from rest_framework import permissions, serializers, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.availability import local_now, room_slot_statuses, rooms_slot_statuses
from apps.bookings.models import Booking
from apps.bookings.scopes import bookings_visible_to
from apps.bookings.serializers import BookingSerializer
from shared.domain.exceptions import AuthorizationError

from .models import Room
from .permissions import IsRoomOwnerOrReadOnly
from .serializers import (
    RoomSerializer,
    RoomWithSlotsSerializer,
    TimeSlotSerializer,
    TimeSlotStatusSerializer,
)
from .services import create_room, delete_room, set_slot_status


class RoomViewSet(viewsets.ModelViewSet):
    """Rooms, their slots with derived availability, and room history."""

    queryset = Room.objects.select_related("owner").all()
    serializer_class = RoomSerializer
    permission_classes = [IsRoomOwnerOrReadOnly]
    filterset_fields = ["status"]
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve", "slots", "all_slots_today"}:
            return [permissions.AllowAny()]
        if self.action == "history":
            return [permissions.IsAuthenticated()]
        return super().get_permissions()

    def perform_create(self, serializer):  # type: ignore
        serializer.instance = create_room(self.request.user, serializer.validated_data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        room = self.get_object()
        delete_room(room.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="all-slots-today")
    def all_slots_today(self, request):  # type: ignore
        rooms = list(self.filter_queryset(self.get_queryset()).prefetch_related("time_slots"))
        statuses = rooms_slot_statuses(rooms)
        serializer = RoomWithSlotsSerializer(rooms, many=True, context={"slot_statuses": statuses})
        return Response(serializer.data)

    @action(detail=True, methods=["get"])
    def slots(self, request, pk=None):  # type: ignore
        room = self.get_object()
        on_date = None
        raw_date = request.query_params.get("date")
        if raw_date:
            on_date = serializers.DateField().to_internal_value(raw_date)
        statuses = room_slot_statuses(room, on_date=on_date)
        slots = room.time_slots.all()
        serializer = TimeSlotSerializer(slots, many=True, context={"slot_statuses": statuses})
        return Response(
            {
                "room_id": room.pk,
                "date": (on_date or local_now().date()).isoformat(),
                "slots": serializer.data,
            }
        )

    @action(detail=True, methods=["patch"], url_path=r"slots/(?P<slot_id>\d+)")
    def update_slot(self, request, pk=None, slot_id=None):  # type: ignore
        room = self.get_object()
        serializer = TimeSlotStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        slot = set_slot_status(room, int(slot_id), serializer.validated_data["status"])
        return Response(
            TimeSlotSerializer(slot, context={"slot_statuses": room_slot_statuses(room)}).data
        )

    @action(detail=True, methods=["get"])
    def history(self, request, pk=None):  # type: ignore
        """Resolved bookings of this room the caller is allowed to see."""
        room = self.get_object()
        user = request.user
        if user.is_staff_member() and not user.is_superuser and room.owner_id != user.id:
            raise AuthorizationError("You can only view the history of rooms you own.")

        bookings = (
            bookings_visible_to(user)
            .filter(room=room)
            .exclude(status=Booking.Status.PENDING)
            .select_related("user", "room", "slot", "approver")
            .order_by("-resolved_at", "-created_at")
        )
        return Response(BookingSerializer(bookings, many=True).data)
