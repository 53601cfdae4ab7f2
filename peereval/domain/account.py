"""Attributes for user accounts and their builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..storage.entity import Account
from ..util import json_utils
from ..util.errors import assert_not_null, assert_true
from ..util.field_validator import FieldValidator
from ..util.sanitization import (
    sanitize_email,
    sanitize_for_html,
    sanitize_google_id,
    sanitize_name,
    sanitize_title,
)
from ..util.strings import truncate_long_id
from .attributes import EntityAttributes
from .profile import StudentProfileAttributes


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=True)
class AccountAttributes(EntityAttributes):
    """Data transfer object for ``Account`` entities.

    Field names are part of the JSON representation; renaming one changes the
    serialised form.
    """

    # required fields
    google_id: str = ""
    name: str = ""
    email: str = ""
    institute: str = ""

    # optional fields
    is_instructor: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    student_profile: StudentProfileAttributes | None = None

    @staticmethod
    def builder(google_id: str, name: str, email: str, institute: str) -> "Builder":
        return Builder(google_id, name, email, institute)

    @classmethod
    def value_of(cls, account: Account) -> "AccountAttributes":
        """Build attributes from a storage entity; a missing profile stays ``None``.

        Stored values are taken as they are, without being sanitized again.
        """
        profile = account.student_profile
        return cls(
            google_id=account.google_id,
            name=account.name,
            email=account.email,
            institute=account.institute,
            is_instructor=account.is_instructor,
            created_at=account.created_at,
            student_profile=None if profile is None else StudentProfileAttributes.value_of(profile),
        )

    def to_entity(self) -> Account:
        assert_not_null(self.student_profile, "Non-null value expected for student_profile")
        return Account(
            google_id=self.google_id,
            name=self.name,
            is_instructor=self.is_instructor,
            email=self.email,
            institute=self.institute,
            created_at=self.created_at,
            student_profile=self.student_profile.to_entity(),
        )

    def get_copy(self) -> "AccountAttributes":
        """Return a deep copy of this object."""
        profile = None if self.student_profile is None else self.student_profile.get_copy()
        return AccountAttributes(
            google_id=self.google_id,
            name=self.name,
            email=self.email,
            institute=self.institute,
            is_instructor=self.is_instructor,
            created_at=self.created_at,
            student_profile=profile,
        )

    def get_truncated_google_id(self) -> str:
        return truncate_long_id(self.google_id)

    def is_user_registered(self) -> bool:
        return bool(self.google_id)

    def get_invalidity_info(self) -> list[str]:
        validator = FieldValidator()
        errors: list[str] = []

        self.add_non_empty_error(validator.get_invalidity_info_for_person_name(self.name), errors)
        self.add_non_empty_error(validator.get_invalidity_info_for_google_id(self.google_id), errors)
        self.add_non_empty_error(validator.get_invalidity_info_for_email(self.email), errors)
        self.add_non_empty_error(validator.get_invalidity_info_for_institute_name(self.institute), errors)

        assert_true(self.student_profile is not None, "Non-null value expected for student_profile")
        # only check the profile once the account itself is proper
        if not errors:
            errors.extend(self.student_profile.get_invalidity_info())

        # is_instructor and created_at are not validated
        return errors

    def sanitize_for_saving(self) -> None:
        self.google_id = sanitize_for_html(self.google_id)
        self.name = sanitize_for_html(self.name)
        self.email = sanitize_for_html(self.email)
        self.institute = sanitize_for_html(self.institute)
        if self.student_profile is None:
            return
        self.student_profile.sanitize_for_saving()

    def get_identification_string(self) -> str:
        return self.google_id

    def get_entity_type_as_string(self) -> str:
        return "Account"

    def get_backup_identifier(self) -> str:
        return "Account"

    def get_json_string(self) -> str:
        return json_utils.to_json(self, AccountAttributes)

    def __str__(self) -> str:
        return self.get_json_string()


class Builder:
    """Assembles an :class:`AccountAttributes` through chained ``with_*`` calls.

    Defaults: ``is_instructor=True``, ``created_at`` set to now and an empty
    profile owned by the same Google ID.
    """

    def __init__(self, google_id: str, name: str, email: str, institute: str) -> None:
        self._account = AccountAttributes(
            google_id=sanitize_google_id(google_id),
            name=sanitize_name(name),
            email=sanitize_email(email),
            institute=sanitize_title(institute),
            is_instructor=True,
            created_at=_utcnow(),
        )
        self._account.student_profile = StudentProfileAttributes(google_id=self._account.google_id)

    def with_student_profile_attributes(
        self, student_profile: StudentProfileAttributes | None
    ) -> "Builder":
        self._account.student_profile = student_profile
        return self

    def with_is_instructor(self, is_instructor: bool) -> "Builder":
        self._account.is_instructor = is_instructor
        return self

    def with_created_at(self, created_at: datetime) -> "Builder":
        self._account.created_at = created_at
        return self

    def build(self) -> AccountAttributes:
        return self._account
