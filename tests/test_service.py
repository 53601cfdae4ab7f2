from __future__ import annotations

import pytest

from peereval.domain.profile import StudentProfileAttributes
from peereval.util.errors import (
    EntityAlreadyExistsError,
    EntityDoesNotExistError,
    InvalidParametersError,
)


def test_create_and_get_round_trip(service, valid_account):
    expected = valid_account.get_copy()
    service.create_account(valid_account)
    assert service.get_account("valid.id") == expected


def test_create_sanitizes_before_saving(service, valid_account):
    valid_account.student_profile.more_info = "<script>"
    service.create_account(valid_account)
    assert service.get_student_profile("valid.id").more_info == "&lt;script&gt;"


def test_create_rejects_invalid_account(service, valid_account):
    valid_account.email = "not an email"
    valid_account.institute = ""
    with pytest.raises(InvalidParametersError) as exc_info:
        service.create_account(valid_account)
    assert len(exc_info.value.errors) == 2
    assert not service.is_account_present("valid.id")


def test_create_rejects_duplicate(service, valid_account):
    service.create_account(valid_account.get_copy())
    with pytest.raises(EntityAlreadyExistsError):
        service.create_account(valid_account)


def test_update_student_profile_stamps_modified_date(service, valid_account):
    service.create_account(valid_account)
    before = service.get_student_profile("valid.id").modified_date

    updated = service.update_student_profile(
        StudentProfileAttributes(google_id="valid.id", short_name="New", gender="male")
    )
    assert updated.modified_date >= before
    assert service.get_student_profile("valid.id").short_name == "New"


def test_operations_on_missing_account(service):
    with pytest.raises(EntityDoesNotExistError):
        service.make_account_instructor("missing")
    with pytest.raises(EntityDoesNotExistError):
        service.downgrade_instructor_to_student("missing")
    with pytest.raises(EntityDoesNotExistError):
        service.issue_token("missing")
    assert service.get_account("missing") is None
    service.delete_account("missing")


def test_instructor_accounts(service, valid_account):
    service.create_account(valid_account)
    assert [a.google_id for a in service.get_instructor_accounts()] == ["valid.id"]
    service.downgrade_instructor_to_student("valid.id")
    assert service.get_instructor_accounts() == []
