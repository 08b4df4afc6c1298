"""Bearer token issuing."""

from __future__ import annotations

from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore


def tokens_for_user(user) -> dict[str, str]:
    """Issue a refresh/access pair whose payload carries identity and role.

    Custom claims set on the refresh token are copied to the access token.
    """
    refresh = RefreshToken.for_user(user)
    refresh["username"] = user.username
    refresh["role"] = user.role
    return {"refresh": str(refresh), "access": str(refresh.access_token)}
