"""Field-level validity checks for account and profile values.

Every ``get_invalidity_info_for_*`` method returns an empty string when the
value is acceptable and a single human-readable message otherwise. Values are
HTML-escaped before being echoed back inside a message.
"""

from __future__ import annotations

import re

from .errors import assert_not_null
from .sanitization import sanitize_for_html
from .strings import is_matching

PERSON_NAME_FIELD_NAME = "person name"
PERSON_NAME_MAX_LENGTH = 100

INSTITUTE_NAME_FIELD_NAME = "institute name"
INSTITUTE_NAME_MAX_LENGTH = 64

NATIONALITY_FIELD_NAME = "nationality"
NATIONALITY_MAX_LENGTH = 55

EMAIL_FIELD_NAME = "email"
EMAIL_MAX_LENGTH = 254

GOOGLE_ID_FIELD_NAME = "Google ID"
GOOGLE_ID_MAX_LENGTH = 254

GENDER_ACCEPTED_VALUES = ("male", "female", "other")

REASON_EMPTY = "is empty"
REASON_TOO_LONG = "is too long"
REASON_INCORRECT_FORMAT = "is not in the correct format"
REASON_START_WITH_NON_ALPHANUMERIC_CHAR = "starts with a non-alphanumeric character"
REASON_CONTAINS_INVALID_CHAR = "contains invalid characters"

EMPTY_STRING_ERROR_MESSAGE = (
    "The field '{field_name}' is empty. The value of a/an {field_name} should be no longer "
    "than {max_length} characters. It should not be empty."
)
SIZE_CAPPED_NON_EMPTY_STRING_ERROR_MESSAGE = (
    '"{value}" is not acceptable to PeerEval as a/an {field_name} because it {reason}. '
    "The value of a/an {field_name} should be no longer than {max_length} characters. "
    "It should not be empty."
)
WHITESPACE_ONLY_OR_EXTRA_WHITESPACE_ERROR_MESSAGE = (
    "The provided {field_name} is not acceptable to PeerEval as it contains only whitespace "
    "or contains extra spaces at the beginning or at the end of the text."
)
INVALID_NAME_ERROR_MESSAGE = (
    '"{value}" is not acceptable to PeerEval as a/an {field_name} because it {reason}. '
    "All {field_name} must start with an alphanumeric character, and cannot contain any "
    "vertical bar (|) or percent sign (%)."
)
EMAIL_ERROR_MESSAGE = (
    '"{value}" is not acceptable to PeerEval as a/an ' + EMAIL_FIELD_NAME + " because it {reason}. "
    "An email address contains some text followed by one '@' sign followed by some more text. "
    "It cannot be longer than " + str(EMAIL_MAX_LENGTH) + " characters, cannot be empty and "
    "cannot contain spaces."
)
GOOGLE_ID_ERROR_MESSAGE = (
    '"{value}" is not acceptable to PeerEval as a/an ' + GOOGLE_ID_FIELD_NAME + " because it {reason}. "
    "A Google ID must be a valid id already registered with Google. It cannot be longer than "
    + str(GOOGLE_ID_MAX_LENGTH) + " characters, cannot be empty and cannot contain spaces."
)
GENDER_ERROR_MESSAGE = (
    '"{value}" is not an accepted gender to PeerEval. Values have to be one of: '
    + ", ".join(GENDER_ACCEPTED_VALUES) + "."
)

REGEX_EMAIL = re.compile(
    r"[\w+-][\w+!#$%&'*/=?^_`{}~-]*(\.[\w+!#$%&'*/=?^_`{}~-]+)*@([A-Za-z0-9-]+\.)*[A-Za-z]+",
    re.ASCII,
)
REGEX_GOOGLE_ID_NON_EMAIL = re.compile(r"[a-zA-Z0-9_.-]+")

_FORBIDDEN_NAME_CHARS = ("|", "%")


class FieldValidator:
    """Validates individual fields of accounts and student profiles."""

    def get_invalidity_info_for_person_name(self, name: str) -> str:
        return self._get_validity_info_for_allowed_name(
            PERSON_NAME_FIELD_NAME, PERSON_NAME_MAX_LENGTH, name
        )

    def get_invalidity_info_for_institute_name(self, institute_name: str) -> str:
        return self._get_validity_info_for_allowed_name(
            INSTITUTE_NAME_FIELD_NAME, INSTITUTE_NAME_MAX_LENGTH, institute_name
        )

    def get_invalidity_info_for_nationality(self, nationality: str) -> str:
        return self._get_validity_info_for_allowed_name(
            NATIONALITY_FIELD_NAME, NATIONALITY_MAX_LENGTH, nationality
        )

    def get_invalidity_info_for_email(self, email: str) -> str:
        assert_not_null(email, "Non-null value expected for email")
        sanitized = sanitize_for_html(email)

        if not email:
            return EMPTY_STRING_ERROR_MESSAGE.format(
                field_name=EMAIL_FIELD_NAME, max_length=EMAIL_MAX_LENGTH
            )
        if _is_untrimmed(email):
            return WHITESPACE_ONLY_OR_EXTRA_WHITESPACE_ERROR_MESSAGE.format(field_name=EMAIL_FIELD_NAME)
        if len(email) > EMAIL_MAX_LENGTH:
            return EMAIL_ERROR_MESSAGE.format(value=sanitized, reason=REASON_TOO_LONG)
        if not is_valid_email_address(email):
            return EMAIL_ERROR_MESSAGE.format(value=sanitized, reason=REASON_INCORRECT_FORMAT)
        return ""

    def get_invalidity_info_for_google_id(self, google_id: str) -> str:
        """Accept either a full email address or a bare id made of ``[a-zA-Z0-9_.-]``."""
        assert_not_null(google_id, "Non-null value expected for Google ID")
        sanitized = sanitize_for_html(google_id)

        if not google_id:
            return EMPTY_STRING_ERROR_MESSAGE.format(
                field_name=GOOGLE_ID_FIELD_NAME, max_length=GOOGLE_ID_MAX_LENGTH
            )
        if _is_untrimmed(google_id):
            return WHITESPACE_ONLY_OR_EXTRA_WHITESPACE_ERROR_MESSAGE.format(
                field_name=GOOGLE_ID_FIELD_NAME
            )
        if len(google_id) > GOOGLE_ID_MAX_LENGTH:
            return GOOGLE_ID_ERROR_MESSAGE.format(value=sanitized, reason=REASON_TOO_LONG)

        is_valid_full_email = is_valid_email_address(google_id)
        is_valid_email_without_domain = is_matching(google_id, REGEX_GOOGLE_ID_NON_EMAIL)
        if not (is_valid_full_email or is_valid_email_without_domain):
            return GOOGLE_ID_ERROR_MESSAGE.format(value=sanitized, reason=REASON_INCORRECT_FORMAT)
        return ""

    def get_invalidity_info_for_gender(self, gender: str) -> str:
        assert_not_null(gender, "Non-null value expected for gender")
        if gender in GENDER_ACCEPTED_VALUES:
            return ""
        return GENDER_ERROR_MESSAGE.format(value=sanitize_for_html(gender))

    def _get_validity_info_for_allowed_name(
        self, field_name: str, max_length: int, value: str
    ) -> str:
        assert_not_null(value, f"Non-null value expected for {field_name}")
        sanitized = sanitize_for_html(value)

        if not value:
            return EMPTY_STRING_ERROR_MESSAGE.format(field_name=field_name, max_length=max_length)
        if _is_untrimmed(value):
            return WHITESPACE_ONLY_OR_EXTRA_WHITESPACE_ERROR_MESSAGE.format(field_name=field_name)
        if len(value) > max_length:
            return SIZE_CAPPED_NON_EMPTY_STRING_ERROR_MESSAGE.format(
                value=sanitized,
                field_name=field_name,
                reason=REASON_TOO_LONG,
                max_length=max_length,
            )
        if not value[0].isalnum():
            return INVALID_NAME_ERROR_MESSAGE.format(
                value=sanitized,
                field_name=field_name,
                reason=REASON_START_WITH_NON_ALPHANUMERIC_CHAR,
            )
        if any(char in value for char in _FORBIDDEN_NAME_CHARS):
            return INVALID_NAME_ERROR_MESSAGE.format(
                value=sanitized,
                field_name=field_name,
                reason=REASON_CONTAINS_INVALID_CHAR,
            )
        return ""


def is_valid_email_address(email: str) -> bool:
    return is_matching(email, REGEX_EMAIL)


def _is_untrimmed(value: str) -> bool:
    return len(value.strip()) < len(value)
