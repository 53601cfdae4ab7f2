"""Storage-layer entities mirroring the ``accounts`` and ``student_profiles`` tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class StudentProfile:
    """Row projection of a student's self-maintained profile."""

    google_id: str
    short_name: str
    email: str
    institute: str
    nationality: str
    gender: str
    more_info: str
    picture_key: str
    modified_date: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class Account:
    """Row projection of a user account together with its profile, if loaded."""

    google_id: str
    name: str
    is_instructor: bool
    email: str
    institute: str
    created_at: datetime = field(default_factory=_utcnow)
    student_profile: StudentProfile | None = None
