"""API views for booking history.

Counts are always computed over the bookings the caller is allowed to
see, so a student only ever counts their own requests and a staff member
only the requests made for rooms they own.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.scopes import bookings_visible_to


def _status_counts():
    return {
        "pending": models.Count("id", filter=models.Q(status=Booking.Status.PENDING)),
        "approved": models.Count("id", filter=models.Q(status=Booking.Status.APPROVED)),
        "rejected": models.Count("id", filter=models.Q(status=Booking.Status.REJECTED)),
        "total": models.Count("id"),
    }


class HistorySummaryView(APIView):
    """Return booking counts by status within the caller's scope."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        booking_qs = bookings_visible_to(request.user)
        counts = booking_qs.aggregate(**_status_counts())
        return Response(counts)


class RoomHistoryCountsView(APIView):
    """Return every room with bookings in scope and its per-status counts."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        rows = (
            bookings_visible_to(request.user)
            .order_by()
            .values("room_id", "room__name")
            .annotate(**_status_counts())
            .order_by("room__name")
        )
        return Response(
            [
                {
                    "room_id": row["room_id"],
                    "room_name": row["room__name"],
                    "pending": row["pending"],
                    "approved": row["approved"],
                    "rejected": row["rejected"],
                    "total": row["total"],
                }
                for row in rows
            ]
        )
