"""Attributes for the student profile embedded in an account."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from ..storage.entity import StudentProfile
from ..util import json_utils
from ..util.errors import assert_not_null
from ..util.field_validator import FieldValidator
from ..util.sanitization import (
    sanitize_email,
    sanitize_for_html,
    sanitize_google_id,
    sanitize_name,
    sanitize_title,
)
from .attributes import EntityAttributes


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=True)
class StudentProfileAttributes(EntityAttributes):
    """Profile details a student maintains about themselves.

    Empty strings mean the student has not filled the field in; those fields
    are skipped during validation.
    """

    google_id: str = ""
    short_name: str = ""
    email: str = ""
    institute: str = ""
    nationality: str = ""
    gender: str = "other"
    more_info: str = ""
    picture_key: str = ""
    modified_date: datetime = field(default_factory=_utcnow)

    @classmethod
    def value_of(cls, profile: StudentProfile) -> "StudentProfileAttributes":
        """Build attributes from a storage entity."""
        return cls(
            google_id=profile.google_id,
            short_name=profile.short_name,
            email=profile.email,
            institute=profile.institute,
            nationality=profile.nationality,
            gender=profile.gender,
            more_info=profile.more_info,
            picture_key=profile.picture_key,
            modified_date=profile.modified_date,
        )

    @classmethod
    def create(
        cls,
        google_id: str,
        short_name: str,
        email: str,
        institute: str,
        nationality: str,
        gender: str,
        more_info: str,
        picture_key: str,
    ) -> "StudentProfileAttributes":
        """Build attributes from raw form values, normalising names and email."""
        return cls(
            google_id=google_id,
            short_name=sanitize_name(short_name),
            email=sanitize_email(email),
            institute=sanitize_title(institute),
            nationality=sanitize_name(nationality),
            gender=gender,
            more_info=more_info,
            picture_key=picture_key,
        )

    def get_copy(self) -> "StudentProfileAttributes":
        return replace(self)

    def to_entity(self) -> StudentProfile:
        return StudentProfile(
            google_id=self.google_id,
            short_name=self.short_name,
            email=self.email,
            institute=self.institute,
            nationality=self.nationality,
            gender=self.gender,
            more_info=self.more_info,
            picture_key=self.picture_key,
            modified_date=self.modified_date,
        )

    def get_invalidity_info(self) -> list[str]:
        validator = FieldValidator()
        errors: list[str] = []

        self.add_non_empty_error(validator.get_invalidity_info_for_google_id(self.google_id), errors)

        # empty values mean the student has not entered anything
        if self.short_name:
            self.add_non_empty_error(validator.get_invalidity_info_for_person_name(self.short_name), errors)
        if self.email:
            self.add_non_empty_error(validator.get_invalidity_info_for_email(self.email), errors)
        if self.institute:
            self.add_non_empty_error(
                validator.get_invalidity_info_for_institute_name(self.institute), errors
            )
        if self.nationality:
            self.add_non_empty_error(validator.get_invalidity_info_for_nationality(self.nationality), errors)

        self.add_non_empty_error(validator.get_invalidity_info_for_gender(self.gender), errors)

        assert_not_null(self.picture_key, "Non-null value expected for picture_key")
        return errors

    def sanitize_for_saving(self) -> None:
        self.google_id = sanitize_google_id(self.google_id)
        self.short_name = sanitize_for_html(sanitize_name(self.short_name))
        self.email = sanitize_for_html(sanitize_email(self.email))
        self.institute = sanitize_for_html(sanitize_title(self.institute))
        self.nationality = sanitize_for_html(sanitize_name(self.nationality))
        self.gender = sanitize_for_html(sanitize_name(self.gender))
        self.more_info = sanitize_for_html(self.more_info)

    def get_identification_string(self) -> str:
        return self.google_id

    def get_entity_type_as_string(self) -> str:
        return "StudentProfile"

    def get_backup_identifier(self) -> str:
        return "Updated Student Profile"

    def get_json_string(self) -> str:
        return json_utils.to_json(self, StudentProfileAttributes)

    def __str__(self) -> str:
        return self.get_json_string()
