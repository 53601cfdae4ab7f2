"""Sanitization helpers applied before values are stored or rendered."""

from __future__ import annotations

import re

from .strings import remove_extra_space

_GMAIL_SUFFIX = "@gmail.com"

# Order matters: ``&`` must be handled first when escaping and last when unescaping.
_HTML_ENTITIES: tuple[tuple[str, str], ...] = (
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("/", "&#x2f;"),
    ("'", "&#39;"),
)

_BARE_AMPERSAND = re.compile(r"&(?!(amp;|lt;|gt;|quot;|#x2f;|#39;))")


def sanitize_for_html(value: str | None) -> str | None:
    """Escape characters that are special in HTML.

    Ampersands that already begin one of the produced entities are left alone,
    so applying this twice gives the same result as applying it once.
    """
    if value is None:
        return None
    escaped = _BARE_AMPERSAND.sub("&amp;", value)
    for char, entity in _HTML_ENTITIES:
        escaped = escaped.replace(char, entity)
    return escaped


def desanitize_from_html(value: str | None) -> str | None:
    """Reverse :func:`sanitize_for_html`."""
    if value is None:
        return None
    unescaped = value
    for char, entity in _HTML_ENTITIES:
        unescaped = unescaped.replace(entity, char)
    return unescaped.replace("&amp;", "&")


def sanitize_google_id(raw_google_id: str | None) -> str | None:
    """Trim a Google ID and drop a trailing ``@gmail.com`` domain."""
    if raw_google_id is None:
        return None
    sanitized = raw_google_id.strip()
    if sanitized.lower().endswith(_GMAIL_SUFFIX):
        sanitized = sanitized[: -len(_GMAIL_SUFFIX)]
    return sanitized.strip()


def sanitize_email(raw_email: str | None) -> str | None:
    if raw_email is None:
        return None
    return raw_email.strip()


def sanitize_name(raw_name: str | None) -> str | None:
    return remove_extra_space(raw_name)


def sanitize_title(raw_title: str | None) -> str | None:
    return remove_extra_space(raw_title)
