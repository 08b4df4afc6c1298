"""User API views."""

from __future__ import annotations

import structlog
from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .permissions import IsStaffMember
from .serializers import LecturerCreateSerializer, PasswordChangeSerializer, UserSerializer

logger = structlog.get_logger(__name__)


class MeView(APIView):
    """Profile of the authenticated caller."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(UserSerializer(request.user).data)


class PasswordChangeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request):  # type: ignore
        serializer = PasswordChangeSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("user.password_changed", user_id=request.user.id)
        return Response({"detail": "Password updated."}, status=status.HTTP_200_OK)


class LecturerCreateView(APIView):
    """Staff create lecturer accounts; lecturers cannot self-register."""

    permission_classes = [IsStaffMember]

    def post(self, request):  # type: ignore
        serializer = LecturerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        lecturer = serializer.save()
        logger.info("user.lecturer_created", user_id=lecturer.id, created_by=request.user.id)
        return Response(UserSerializer(lecturer).data, status=status.HTTP_201_CREATED)
