"""API views for the booking domain."""

from __future__ import annotations

import structlog
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsApprover
from shared.domain.exceptions import AuthorizationError

from .models import Booking
from .scopes import bookings_visible_to
from .serializers import BookingCreateSerializer, BookingResolveSerializer, BookingSerializer
from .services import create_booking, resolve_booking

logger = structlog.get_logger(__name__)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Booking requests and their resolution.

    Bookings are never updated or deleted through the API; the only
    mutation after creation is ``approve``.
    """

    queryset = Booking.objects.select_related("user", "room", "slot", "approver").all()
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["status", "room", "booking_date"]
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "approve":
            return BookingResolveSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        return bookings_visible_to(self.request.user, super().get_queryset())

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = create_booking(serializer.to_booking_request())
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], permission_classes=[IsApprover])
    def approve(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = resolve_booking(
            request.user,
            int(pk),
            serializer.validated_data["action"],
            serializer.validated_data.get("reason"),
        )
        booking = self.queryset.get(pk=booking.pk)
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>\d+)")
    def by_user(self, request, user_id=None):  # type: ignore
        user_id = int(user_id)
        if user_id != request.user.id and not request.user.is_superuser:
            logger.warning("booking.list_other_user_denied", user_id=request.user.id, target_user_id=user_id)
            raise AuthorizationError("You can only list your own bookings.")

        queryset = self.filter_queryset(self.get_queryset())
        if request.user.is_superuser and user_id != request.user.id:
            queryset = queryset.filter(user_id=user_id)

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = BookingSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(BookingSerializer(queryset, many=True).data)
