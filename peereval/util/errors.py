"""Exceptions raised by the domain and storage layers."""

from __future__ import annotations

from typing import Any, Iterable


class AssumptionError(AssertionError):
    """Raised when an internal precondition does not hold (a programming error)."""


def assert_not_null(value: Any, message: str = "Non-null value expected") -> None:
    """Fail fast when ``value`` is ``None``."""
    if value is None:
        raise AssumptionError(message)


def assert_true(condition: bool, message: str = "Assumption failed") -> None:
    """Fail fast when ``condition`` is false."""
    if not condition:
        raise AssumptionError(message)


class InvalidParametersError(ValueError):
    """Raised when an entity fails field validation.

    The individual validation messages are kept on ``errors`` so callers can
    report all of them together.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class EntityAlreadyExistsError(ValueError):
    """Raised when creating an entity whose identifier is already taken."""


class EntityDoesNotExistError(ValueError):
    """Raised when an operation targets an entity that is not stored."""
