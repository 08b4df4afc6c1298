"""Admin registration for rooms."""

from __future__ import annotations

from django.contrib import admin

from .models import Room, TimeSlot


class TimeSlotInline(admin.TabularInline):
    model = TimeSlot
    extra = 0
    fields = ("start_time", "end_time", "status")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "owner__username")
    inlines = [TimeSlotInline]


@admin.register(TimeSlot)
class TimeSlotAdmin(admin.ModelAdmin):
    list_display = ("room", "start_time", "end_time", "status")
    list_filter = ("status", "room")
