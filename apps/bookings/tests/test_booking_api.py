"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone
from unittest import mock

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.rooms.models import Room, TimeSlot
from apps.rooms.services import create_room
from apps.users.models import User

FIXED_NOW = datetime(2031, 3, 10, 7, 0, tzinfo=dt_timezone.utc)
TODAY = FIXED_NOW.date()


@mock.patch("django.utils.timezone.now", return_value=FIXED_NOW)
class BookingAPITests(APITestCase):
    """Covers creation, conflicts and resolution of booking requests."""

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
        self.student_a = User.objects.create_user(
            username="student-a",
            email="a@example.com",
            password="StudentPass1",
        )
        self.student_b = User.objects.create_user(
            username="student-b",
            email="b@example.com",
            password="StudentPass1",
        )
        self.room = create_room(self.owner, {"name": "Lab 101"})
        self.slot = self.room.time_slots.get(start_time="08:00")
        self.list_url = reverse("booking-list")

    def _payload(self, booking_date: date = TODAY, slot: TimeSlot | None = None, **extra) -> dict:
        slot = slot or self.slot
        payload = {
            "room_id": slot.room_id,
            "slot_id": slot.id,
            "booking_date": booking_date.isoformat(),
            "reason": "Study group",
        }
        payload.update(extra)
        return payload

    def _book(self, user: User, **kwargs):
        self.client.force_authenticate(user)
        return self.client.post(self.list_url, self._payload(**kwargs), format="json")

    def _slot_status(self) -> str:
        response = self.client.get(reverse("room-slots", args=[self.room.id]))
        return {item["id"]: item["status"] for item in response.data["slots"]}[self.slot.id]

    def _resolve(self, user: User, booking_id: int, **body):
        self.client.force_authenticate(user)
        return self.client.post(reverse("booking-approve", args=[booking_id]), body, format="json")

    def test_booking_and_approval_lifecycle(self, _now) -> None:
        response = self._book(self.student_a)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Booking.Status.PENDING)
        self.assertEqual(response.data["user_id"], self.student_a.id)
        self.assertEqual(response.data["time_period"], "08:00-10:00")
        booking_id = response.data["id"]
        self.assertEqual(self._slot_status(), "Pending")

        response = self._book(self.student_b)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("no longer available", response.data["error"])

        response = self._resolve(self.owner, booking_id, action="approve")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.APPROVED)
        self.assertEqual(response.data["approver_id"], self.owner.id)
        self.assertIsNone(response.data["resolution_reason"])
        self.assertEqual(self._slot_status(), "Reserved")

        response = self._resolve(self.owner, booking_id, action="approve")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("already been processed", response.data["error"])

    def test_one_active_booking_per_user_and_date(self, _now) -> None:
        other_slot = self.room.time_slots.get(start_time="10:00")
        self.assertEqual(self._book(self.student_a).status_code, status.HTTP_201_CREATED)

        response = self._book(self.student_a, slot=other_slot)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("already have an active booking", response.data["error"])

        response = self._book(self.student_a, slot=other_slot, booking_date=TODAY + timedelta(days=1))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_rejected_booking_frees_the_slot(self, _now) -> None:
        booking_id = self._book(self.student_a).data["id"]

        response = self._resolve(self.lecturer, booking_id, action="reject", reason="Room needed for exams")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.REJECTED)
        self.assertEqual(response.data["resolution_reason"], "Room needed for exams")
        self.assertEqual(self._slot_status(), "Free")

        response = self._book(self.student_b)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_reject_requires_reason(self, _now) -> None:
        booking_id = self._book(self.student_a).data["id"]

        response = self._resolve(self.owner, booking_id, action="reject", reason="   ")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Booking.objects.get(pk=booking_id).status, Booking.Status.PENDING)

    def test_unknown_action_is_rejected(self, _now) -> None:
        booking_id = self._book(self.student_a).data["id"]
        response = self._resolve(self.owner, booking_id, action="cancel")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_approve_with_reason_discards_reason(self, _now) -> None:
        booking_id = self._book(self.student_a).data["id"]
        response = self._resolve(self.owner, booking_id, action="approve", reason="Looks good")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIsNone(Booking.objects.get(pk=booking_id).resolution_reason)

    def test_student_cannot_approve(self, _now) -> None:
        booking_id = self._book(self.student_a).data["id"]
        response = self._resolve(self.student_b, booking_id, action="approve")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_cannot_approve_outside_their_rooms(self, _now) -> None:
        booking_id = self._book(self.student_a).data["id"]
        response = self._resolve(self.other_staff, booking_id, action="approve")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Booking.objects.get(pk=booking_id).status, Booking.Status.PENDING)

    def test_approve_missing_booking(self, _now) -> None:
        response = self._resolve(self.owner, 999999, action="approve")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_identity_fields_in_body_are_rejected(self, _now) -> None:
        response = self._book(self.student_a, user_id=self.student_b.id)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("user_id", response.data["details"])
        self.assertFalse(Booking.objects.exists())

    def test_missing_fields_are_rejected(self, _now) -> None:
        self.client.force_authenticate(self.student_a)
        response = self.client.post(self.list_url, {"room_id": self.room.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("slot_id", response.data["details"])
        self.assertIn("booking_date", response.data["details"])

    def test_past_date_is_rejected(self, _now) -> None:
        response = self._book(self.student_a, booking_date=TODAY - timedelta(days=1))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_elapsed_slot_today_conflicts(self, _now) -> None:
        _now.return_value = FIXED_NOW.replace(hour=10, minute=30)
        response = self._book(self.student_a)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("already passed", response.data["error"])

    def test_disabled_slot_conflicts(self, _now) -> None:
        self.slot.status = TimeSlot.Status.DISABLED
        self.slot.save()
        response = self._book(self.student_a)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("permanently disabled", response.data["error"])

    def test_disabled_room_conflicts(self, _now) -> None:
        self.room.status = Room.Status.DISABLED
        self.room.save()
        response = self._book(self.student_a)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("room is disabled", response.data["error"])

    def test_slot_must_belong_to_room(self, _now) -> None:
        other_room = create_room(self.owner, {"name": "Lab 102"})
        response = self._book(self.student_a, room_id=other_room.id)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Time slot not found.")

    def test_booking_requires_authentication(self, _now) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_is_scoped_by_role(self, _now) -> None:
        other_room = create_room(self.other_staff, {"name": "Lab 102"})
        other_slot = other_room.time_slots.first()
        own = self._book(self.student_a).data["id"]
        foreign = self._book(self.student_b, slot=other_slot).data["id"]

        self.client.force_authenticate(self.student_a)
        ids = [item["id"] for item in self.client.get(self.list_url).data]
        self.assertEqual(ids, [own])

        self.client.force_authenticate(self.owner)
        ids = [item["id"] for item in self.client.get(self.list_url).data]
        self.assertEqual(ids, [own])

        self.client.force_authenticate(self.lecturer)
        ids = sorted(item["id"] for item in self.client.get(self.list_url).data)
        self.assertEqual(ids, sorted([own, foreign]))

        self.client.force_authenticate(self.student_a)
        response = self.client.get(reverse("booking-detail", args=[foreign]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_filter_by_status(self, _now) -> None:
        first = self._book(self.student_a).data["id"]
        self._book(self.student_a, slot=self.slot, booking_date=TODAY + timedelta(days=1))
        self._resolve(self.owner, first, action="approve")

        self.client.force_authenticate(self.owner)
        response = self.client.get(self.list_url, {"status": Booking.Status.APPROVED})
        self.assertEqual([item["id"] for item in response.data], [first])

    def test_bookings_by_user_must_match_caller(self, _now) -> None:
        own = self._book(self.student_a).data["id"]

        response = self.client.get(reverse("booking-by-user", args=[self.student_a.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [own])

        response = self.client.get(reverse("booking-by-user", args=[self.student_b.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
