from __future__ import annotations

import pytest

from peereval.util import field_validator as fv
from peereval.util.errors import AssumptionError
from peereval.util.field_validator import FieldValidator


@pytest.fixture
def validator() -> FieldValidator:
    return FieldValidator()


def test_person_name_valid(validator):
    assert validator.get_invalidity_info_for_person_name("Alice Tan") == ""
    assert validator.get_invalidity_info_for_person_name("Ünal Çelik") == ""


def test_person_name_empty(validator):
    assert validator.get_invalidity_info_for_person_name("") == fv.EMPTY_STRING_ERROR_MESSAGE.format(
        field_name=fv.PERSON_NAME_FIELD_NAME, max_length=fv.PERSON_NAME_MAX_LENGTH
    )


def test_person_name_untrimmed(validator):
    message = validator.get_invalidity_info_for_person_name(" Alice")
    assert message == fv.WHITESPACE_ONLY_OR_EXTRA_WHITESPACE_ERROR_MESSAGE.format(
        field_name=fv.PERSON_NAME_FIELD_NAME
    )
    assert validator.get_invalidity_info_for_person_name("   ") == message


def test_person_name_too_long(validator):
    name = "a" * (fv.PERSON_NAME_MAX_LENGTH + 1)
    message = validator.get_invalidity_info_for_person_name(name)
    assert fv.REASON_TOO_LONG in message
    assert validator.get_invalidity_info_for_person_name("a" * fv.PERSON_NAME_MAX_LENGTH) == ""


def test_person_name_must_start_alphanumeric(validator):
    message = validator.get_invalidity_info_for_person_name("|Alice")
    assert fv.REASON_START_WITH_NON_ALPHANUMERIC_CHAR in message


def test_person_name_forbidden_characters(validator):
    assert fv.REASON_CONTAINS_INVALID_CHAR in validator.get_invalidity_info_for_person_name("Alice|Tan")
    assert fv.REASON_CONTAINS_INVALID_CHAR in validator.get_invalidity_info_for_person_name("100%")


def test_message_escapes_value(validator):
    message = validator.get_invalidity_info_for_person_name("<b>")
    assert '"&lt;b&gt;"' in message


def test_institute_and_nationality_limits(validator):
    assert validator.get_invalidity_info_for_institute_name("i" * fv.INSTITUTE_NAME_MAX_LENGTH) == ""
    assert fv.REASON_TOO_LONG in validator.get_invalidity_info_for_institute_name(
        "i" * (fv.INSTITUTE_NAME_MAX_LENGTH + 1)
    )
    assert fv.REASON_TOO_LONG in validator.get_invalidity_info_for_nationality(
        "n" * (fv.NATIONALITY_MAX_LENGTH + 1)
    )


@pytest.mark.parametrize("email", ["alice@example.com", "a.b+c@mail.example.org", "x_y@z.co"])
def test_email_valid(validator, email):
    assert validator.get_invalidity_info_for_email(email) == ""


def test_email_invalid_format(validator):
    for email in ("alice", "alice@@example.com", "a b@example.com", "alice@example.123"):
        assert validator.get_invalidity_info_for_email(email) == fv.EMAIL_ERROR_MESSAGE.format(
            value=email.replace("&", "&amp;"), reason=fv.REASON_INCORRECT_FORMAT
        )


def test_email_too_long_and_empty(validator):
    long_email = "a" * 250 + "@x.com"
    assert validator.get_invalidity_info_for_email(long_email) == fv.EMAIL_ERROR_MESSAGE.format(
        value=long_email, reason=fv.REASON_TOO_LONG
    )
    assert validator.get_invalidity_info_for_email("") == fv.EMPTY_STRING_ERROR_MESSAGE.format(
        field_name=fv.EMAIL_FIELD_NAME, max_length=fv.EMAIL_MAX_LENGTH
    )


def test_google_id_accepts_email_or_bare_id(validator):
    assert validator.get_invalidity_info_for_google_id("user@example.com") == ""
    assert validator.get_invalidity_info_for_google_id("user.name-1_x") == ""


def test_google_id_rejects_spaces(validator):
    assert validator.get_invalidity_info_for_google_id("bad id") == fv.GOOGLE_ID_ERROR_MESSAGE.format(
        value="bad id", reason=fv.REASON_INCORRECT_FORMAT
    )


def test_gender(validator):
    for gender in fv.GENDER_ACCEPTED_VALUES:
        assert validator.get_invalidity_info_for_gender(gender) == ""
    assert validator.get_invalidity_info_for_gender("unknown") == fv.GENDER_ERROR_MESSAGE.format(
        value="unknown"
    )


def test_none_is_a_programming_error(validator):
    with pytest.raises(AssumptionError):
        validator.get_invalidity_info_for_email(None)  # type: ignore[arg-type]
