"""Serializers for user accounts and authentication flows."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import authenticate, get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from rest_framework import exceptions, serializers  # type: ignore

from shared.domain.exceptions import ConflictError

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public view of an account."""

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "role",
            "created_at",
        ]
        read_only_fields = fields


class _AccountCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    confirm_password = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)

    role = User.RoleChoices.STUDENT

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("password") != attrs.get("confirm_password"):
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        if User.objects.filter(username__iexact=attrs["username"]).exists():
            raise ConflictError("A user with that username already exists.")
        if User.objects.filter(email__iexact=attrs["email"]).exists():
            raise ConflictError("A user with that email already exists.")
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        validated_data.pop("confirm_password", None)
        password = validated_data.pop("password")
        try:
            with transaction.atomic():
                return User.objects.create_user(password=password, role=self.role, **validated_data)
        except IntegrityError:
            raise ConflictError("A user with that username or email already exists.")


class RegisterSerializer(_AccountCreateSerializer):
    """Self-service registration. Always creates a student."""


class LecturerCreateSerializer(_AccountCreateSerializer):
    """Staff-only provisioning of lecturer accounts."""

    role = User.RoleChoices.LECTURER


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = authenticate(
            request=self.context.get("request"),
            username=attrs["username"],
            password=attrs["password"],
        )
        if user is None:
            raise exceptions.AuthenticationFailed("Invalid credentials.")
        attrs["user"] = user
        return attrs


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(min_length=8, write_only=True)
    confirm_password = serializers.CharField(min_length=8, write_only=True)

    def validate_current_password(self, value: str) -> str:
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs["new_password"] != attrs["confirm_password"]:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        return attrs

    def save(self, **kwargs):  # type: ignore
        user = self.context["request"].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password"])
        return user
