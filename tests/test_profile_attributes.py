from __future__ import annotations

from datetime import datetime, timezone

import pytest

from peereval.domain.profile import StudentProfileAttributes
from peereval.storage.entity import StudentProfile
from peereval.util import field_validator as fv
from peereval.util.errors import AssumptionError


def _profile(**overrides) -> StudentProfileAttributes:
    values = {
        "google_id": "valid.id",
        "short_name": "Val",
        "email": "val@personal.tmt",
        "institute": "Test Institute",
        "nationality": "Singaporean",
        "gender": "male",
        "more_info": "",
        "picture_key": "",
    }
    values.update(overrides)
    return StudentProfileAttributes(**values)


def test_defaults():
    profile = StudentProfileAttributes()
    assert profile.gender == "other"
    assert profile.short_name == ""
    assert profile.modified_date.tzinfo is not None


def test_create_normalises_input():
    profile = StudentProfileAttributes.create(
        "valid.id", "  Val  ", " val@personal.tmt ", " Test   Institute ", " New   Zealander ", "other", "", ""
    )
    assert profile.short_name == "Val"
    assert profile.email == "val@personal.tmt"
    assert profile.institute == "Test Institute"
    assert profile.nationality == "New Zealander"


def test_valid_profile():
    assert _profile().get_invalidity_info() == []


def test_empty_optional_fields_are_skipped():
    profile = _profile(short_name="", email="", institute="", nationality="")
    assert profile.get_invalidity_info() == []


def test_google_id_always_checked():
    errors = StudentProfileAttributes().get_invalidity_info()
    assert errors == [
        fv.EMPTY_STRING_ERROR_MESSAGE.format(
            field_name=fv.GOOGLE_ID_FIELD_NAME, max_length=fv.GOOGLE_ID_MAX_LENGTH
        )
    ]


def test_each_invalid_field_reported():
    profile = _profile(short_name="|Val", email="not-an-email", institute="%Inst", nationality="#1", gender="x")
    assert len(profile.get_invalidity_info()) == 5


def test_picture_key_must_not_be_none():
    with pytest.raises(AssumptionError):
        _profile(picture_key=None).get_invalidity_info()


def test_sanitize_for_saving_is_idempotent():
    profile = _profile(google_id=" val@gmail.com ", short_name=" Val  <3 ", more_info="a/b & 'c'")
    profile.sanitize_for_saving()
    once = profile.get_copy()
    profile.sanitize_for_saving()

    assert profile == once
    assert profile.google_id == "val"
    assert profile.short_name == "Val &lt;3"
    assert profile.more_info == "a&#x2f;b &amp; &#39;c&#39;"


def test_entity_round_trip():
    profile = _profile(modified_date=datetime(2021, 3, 4, tzinfo=timezone.utc), picture_key="pic-1")
    entity = profile.to_entity()
    assert isinstance(entity, StudentProfile)
    assert StudentProfileAttributes.value_of(entity) == profile


def test_copy_is_independent():
    profile = _profile()
    copy = profile.get_copy()
    copy.short_name = "Other"
    assert profile.short_name == "Val"


def test_identity_helpers():
    profile = _profile()
    assert profile.get_identification_string() == "valid.id"
    assert profile.get_entity_type_as_string() == "StudentProfile"
    assert profile.get_backup_identifier() == "Updated Student Profile"
    assert '"gender": "male"' in str(profile)
