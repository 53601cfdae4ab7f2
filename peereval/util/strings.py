"""Small string helpers shared by validators and sanitizers."""

from __future__ import annotations

import re

LONG_ID_MAX_LENGTH = 23
LONG_ID_KEEP_LENGTH = 20

_WHITESPACE = re.compile(r"\s+")


def remove_extra_space(value: str | None) -> str | None:
    """Trim ``value`` and collapse runs of whitespace into a single space."""
    if value is None:
        return None
    return _WHITESPACE.sub(" ", value).strip()


def truncate(value: str, max_length: int) -> str:
    """Cut ``value`` down to at most ``max_length`` characters."""
    if len(value) <= max_length:
        return value
    return value[:max_length]


def truncate_long_id(long_id: str) -> str:
    """Shorten an identifier for display, marking the cut with an ellipsis."""
    if len(long_id) <= LONG_ID_MAX_LENGTH:
        return long_id
    return truncate(long_id, LONG_ID_KEEP_LENGTH) + "..."


def is_matching(value: str, pattern: str | re.Pattern[str]) -> bool:
    """Return ``True`` when the whole of ``value`` matches ``pattern``."""
    return re.fullmatch(pattern, value) is not None
