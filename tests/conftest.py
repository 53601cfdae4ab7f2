from __future__ import annotations

import copy

import pytest

from peereval.domain.account import AccountAttributes
from peereval.domain.profile import StudentProfileAttributes
from peereval.domain.service import AccountService
from peereval.storage.entity import Account, StudentProfile


class FakeAccountsDb:
    """In-memory repository mimicking the Postgres-backed ``AccountsDb``."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    def create_account(self, account: Account) -> Account:
        self._accounts[account.google_id] = copy.deepcopy(account)
        return account

    def get_account(self, google_id: str, retrieve_profile: bool = True) -> Account | None:
        stored = self._accounts.get(google_id)
        if stored is None:
            return None
        account = copy.deepcopy(stored)
        if not retrieve_profile:
            account.student_profile = None
        return account

    def get_instructor_accounts(self) -> list[Account]:
        return [
            copy.deepcopy(account)
            for _, account in sorted(self._accounts.items())
            if account.is_instructor
        ]

    def update_account(self, account: Account) -> None:
        stored = copy.deepcopy(account)
        if stored.student_profile is None:
            stored.student_profile = self._accounts[account.google_id].student_profile
        self._accounts[account.google_id] = stored

    def get_student_profile(self, google_id: str) -> StudentProfile | None:
        stored = self._accounts.get(google_id)
        if stored is None or stored.student_profile is None:
            return None
        return copy.deepcopy(stored.student_profile)

    def update_student_profile(self, profile: StudentProfile) -> None:
        self._accounts[profile.google_id].student_profile = copy.deepcopy(profile)

    def delete_account(self, google_id: str) -> None:
        self._accounts.pop(google_id, None)


@pytest.fixture
def repository() -> FakeAccountsDb:
    return FakeAccountsDb()


@pytest.fixture
def service(repository: FakeAccountsDb) -> AccountService:
    return AccountService(repository)


@pytest.fixture
def valid_account() -> AccountAttributes:
    """A well-formed instructor account with a filled-in profile."""
    profile = StudentProfileAttributes(
        google_id="valid.id",
        short_name="Val",
        email="val@personal.tmt",
        institute="Test Institute",
        nationality="Singaporean",
        gender="female",
        more_info="Likes team projects.",
        picture_key="",
    )
    return (
        AccountAttributes.builder("valid.id", "Valid Name", "valid@email.tmt", "Test Institute")
        .with_student_profile_attributes(profile)
        .build()
    )
