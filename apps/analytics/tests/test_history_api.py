"""API tests for booking history counts."""

from __future__ import annotations

from datetime import date

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.rooms.services import create_room
from apps.users.models import User


class HistoryAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            username="owner",
            email="owner@example.com",
            password="OwnerPass123",
            role=User.RoleChoices.STAFF,
        )
        self.other_staff = User.objects.create_user(
            username="other-staff",
            email="other-staff@example.com",
            password="OtherPass123",
            role=User.RoleChoices.STAFF,
        )
        self.lecturer = User.objects.create_user(
            username="lecturer",
            email="lecturer@example.com",
            password="LecturerPass1",
            role=User.RoleChoices.LECTURER,
        )
        self.student = User.objects.create_user(
            username="student",
            email="student@example.com",
            password="StudentPass1",
        )
        self.classmate = User.objects.create_user(
            username="classmate",
            email="classmate@example.com",
            password="StudentPass1",
        )
        self.room = create_room(self.owner, {"name": "Lab 101"})
        self.other_room = create_room(self.other_staff, {"name": "Lab 202"})
        slots = list(self.room.time_slots.all())
        other_slot = self.other_room.time_slots.first()

        Booking.objects.create(user=self.student, room=self.room, slot=slots[0], booking_date=date(2031, 3, 10))
        Booking.objects.create(
            user=self.student,
            room=self.room,
            slot=slots[1],
            booking_date=date(2031, 3, 11),
            status=Booking.Status.APPROVED,
            approver=self.owner,
        )
        Booking.objects.create(
            user=self.classmate,
            room=self.room,
            slot=slots[2],
            booking_date=date(2031, 3, 10),
            status=Booking.Status.REJECTED,
            approver=self.lecturer,
            resolution_reason="Exams",
        )
        Booking.objects.create(
            user=self.classmate,
            room=self.other_room,
            slot=other_slot,
            booking_date=date(2031, 3, 11),
        )

    def test_summary_for_student(self) -> None:
        self.client.force_authenticate(self.student)
        response = self.client.get(reverse("history-summary"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"pending": 1, "approved": 1, "rejected": 0, "total": 2})

    def test_summary_for_lecturer(self) -> None:
        self.client.force_authenticate(self.lecturer)
        response = self.client.get(reverse("history-summary"))
        self.assertEqual(response.data, {"pending": 2, "approved": 0, "rejected": 1, "total": 3})

    def test_rooms_for_owner(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.get(reverse("history-rooms"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            [
                {
                    "room_id": self.room.id,
                    "room_name": "Lab 101",
                    "pending": 1,
                    "approved": 1,
                    "rejected": 1,
                    "total": 3,
                }
            ],
        )

    def test_rooms_for_superuser(self) -> None:
        admin = User.objects.create_superuser(username="admin", email="admin@example.com", password="AdminPass123")
        self.client.force_authenticate(admin)
        response = self.client.get(reverse("history-rooms"))
        self.assertEqual([row["room_name"] for row in response.data], ["Lab 101", "Lab 202"])
        self.assertEqual(sum(row["total"] for row in response.data), 4)

    def test_requires_authentication(self) -> None:
        response = self.client.get(reverse("history-summary"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
