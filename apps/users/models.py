"""User domain models for the room booking service.

Three roles exist: students request bookings, lecturers review pending
requests, and staff own rooms and resolve requests made for them. A
Django superuser is treated as staff without any scope restriction.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, UserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(UserManager):
    """User manager that assigns a default role."""

    use_in_migrations = True

    def create_user(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", CustomUser.RoleChoices.STUDENT)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", CustomUser.RoleChoices.STAFF)
        return super().create_superuser(username, email, password, **extra_fields)


class CustomUser(AbstractUser):
    """A person who books rooms, reviews requests or manages rooms."""

    class RoleChoices(models.TextChoices):
        STUDENT = "student", _("Student")
        LECTURER = "lecturer", _("Lecturer")
        STAFF = "staff", _("Staff")

    email = models.EmailField(_("email address"), unique=True)
    role = models.CharField(
        _("role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.STUDENT,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    REQUIRED_FIELDS = ["email"]

    class Meta:
        verbose_name = _("user")
        verbose_name_plural = _("users")
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.get_role_display()})"

    # --- Role helpers -------------------------------------------------------
    def is_student(self) -> bool:
        return self.role == self.RoleChoices.STUDENT

    def is_lecturer(self) -> bool:
        return self.role == self.RoleChoices.LECTURER

    def is_staff_member(self) -> bool:
        return self.role == self.RoleChoices.STAFF or self.is_superuser

    def can_approve(self) -> bool:
        return self.is_lecturer() or self.is_staff_member()


User = CustomUser
