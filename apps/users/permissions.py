"""Role-based permission classes."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsStaffMember(permissions.BasePermission):
    """Only staff (room owners) and superusers."""

    message = "Only staff members can perform this action."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff_member())


class IsApprover(permissions.BasePermission):
    """Lecturers and staff may resolve booking requests."""

    message = "Only lecturers and staff can resolve bookings."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        return bool(user and user.is_authenticated and user.can_approve())
