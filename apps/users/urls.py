"""URL declarations for the users app."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import LecturerCreateView, MeView, PasswordChangeView

urlpatterns = [
    path("me/", MeView.as_view(), name="user-me"),
    path("password/", PasswordChangeView.as_view(), name="user-password"),
    path("lecturers/", LecturerCreateView.as_view(), name="lecturer-create"),
]
