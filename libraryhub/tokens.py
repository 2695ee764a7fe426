"""Issuing and checking the bearer tokens used by the gateway."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

__all__ = ["AuthError", "issue_token", "verify_token"]

TOKEN_LIFETIME = timedelta(hours=24)
_BEARER = "Bearer "


class AuthError(Exception):
    """A request could not be authenticated."""


def issue_token(email: str, secret_key: str, now: datetime | None = None) -> str:
    """Return an HS256 token for ``email`` that expires a day after ``now``."""
    if now is None:
        now = datetime.now(timezone.utc)
    expires = int((now + TOKEN_LIFETIME).timestamp())
    return jwt.encode({"email": email, "exp": expires}, secret_key, algorithm="HS256")


def verify_token(header: str | None, secret_key: str) -> str:
    """Check an Authorization header value and return the e-mail it carries."""
    if not header:
        raise AuthError("Authorization token not provided")
    if not header.startswith(_BEARER):
        raise AuthError("Invalid token format")
    token = header[len(_BEARER):]
    try:
        claims = jwt.decode(token, secret_key, algorithms=["HS256"])
    except jwt.PyJWTError as exc:
        raise AuthError("Invalid token") from exc
    email = claims.get("email") if isinstance(claims, dict) else None
    if not isinstance(email, str):
        raise AuthError("Invalid token claims")
    return email