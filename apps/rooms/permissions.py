"""Permission classes for room management."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from .models import Room


class IsRoomOwnerOrReadOnly(permissions.BasePermission):
    """Anyone may read; staff create rooms and only the owner changes them."""

    message = "Only the staff member who owns this room can change it."

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff_member())

    def has_object_permission(self, request, view, obj: Room):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if user.is_superuser:
            return True
        return obj.owner_id == user.id
