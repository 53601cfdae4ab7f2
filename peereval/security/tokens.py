"""Session tokens issued to registered accounts."""

from __future__ import annotations

import time
from typing import Any

import jwt

from ..config import get_settings

_ALGORITHM = "HS256"


def issue_access_token(*, google_id: str, is_instructor: bool) -> tuple[str, int]:
    """Create a signed JWT for an account.

    Parameters
    ----------
    google_id:
        Identity placed in the ``sub`` claim.
    is_instructor:
        Selects the ``role`` claim (``instructor`` or ``student``).

    Returns
    -------
    tuple[str, int]
        The encoded token and its lifetime in seconds.
    """
    settings = get_settings()
    now = int(time.time())
    expires_in = settings.jwt_ttl_seconds
    payload: dict[str, Any] = {
        "iss": settings.jwt_issuer,
        "sub": google_id,
        "role": "instructor" if is_instructor else "student",
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGORITHM), expires_in


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify ``token`` and return its claims.

    Raises
    ------
    jwt.PyJWTError
        When the signature, expiry or issuer check fails.
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[_ALGORITHM],
        issuer=settings.jwt_issuer,
    )
