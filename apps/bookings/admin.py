"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "slot",
        "booking_date",
        "user",
        "status",
        "approver",
        "resolved_at",
        "created_at",
    )
    list_filter = ("status", "booking_date", "room")
    search_fields = ("user__username", "user__email", "room__name")
    readonly_fields = (
        "user",
        "room",
        "slot",
        "booking_date",
        "status",
        "approver",
        "resolution_reason",
        "resolved_at",
        "created_at",
    )

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
