"""Account service orchestrating validation, sanitization and persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from ..security.tokens import issue_access_token
from ..storage.entity import Account, StudentProfile
from ..util.errors import (
    EntityAlreadyExistsError,
    EntityDoesNotExistError,
    InvalidParametersError,
)
from .account import AccountAttributes
from .profile import StudentProfileAttributes

logger = logging.getLogger(__name__)


class AccountStore(Protocol):
    """Persistence operations the service relies on (see ``AccountsDb``)."""

    def create_account(self, account: Account) -> Account: ...

    def get_account(self, google_id: str, retrieve_profile: bool = True) -> Account | None: ...

    def get_instructor_accounts(self) -> list[Account]: ...

    def update_account(self, account: Account) -> None: ...

    def get_student_profile(self, google_id: str) -> StudentProfile | None: ...

    def update_student_profile(self, profile: StudentProfile) -> None: ...

    def delete_account(self, google_id: str) -> None: ...


@dataclass(slots=True)
class SessionToken:
    """Access token returned to an authenticated account holder."""

    access_token: str
    expires_in: int
    google_id: str
    is_instructor: bool


class AccountService:
    """Account workflows backed by Postgres storage."""

    def __init__(self, repository: AccountStore) -> None:
        self._repository = repository

    def create_account(self, account: AccountAttributes) -> AccountAttributes:
        """Sanitize, validate and persist a new account.

        Raises
        ------
        InvalidParametersError
            When any field is malformed; all messages are carried together.
        EntityAlreadyExistsError
            When the Google ID is already registered.
        """
        account.sanitize_for_saving()
        self._validate(account)

        if self._repository.get_account(account.google_id, retrieve_profile=False) is not None:
            raise EntityAlreadyExistsError(f"account already exists: {account.google_id}")

        self._repository.create_account(account.to_entity())
        logger.info("account created: %s", account.get_truncated_google_id())
        return account

    def get_account(self, google_id: str) -> AccountAttributes | None:
        entity = self._repository.get_account(google_id)
        return None if entity is None else AccountAttributes.value_of(entity)

    def is_account_present(self, google_id: str) -> bool:
        return self._repository.get_account(google_id, retrieve_profile=False) is not None

    def get_instructor_accounts(self) -> list[AccountAttributes]:
        return [AccountAttributes.value_of(entity) for entity in self._repository.get_instructor_accounts()]

    def update_account(self, account: AccountAttributes) -> AccountAttributes:
        """Overwrite a stored account after sanitizing and validating it."""
        existing = self._require_account(account.google_id)
        if account.student_profile is None:
            account.student_profile = existing.student_profile or StudentProfileAttributes(
                google_id=account.google_id
            )
        # creation time is owned by storage
        account.created_at = existing.created_at
        account.sanitize_for_saving()
        self._validate(account)

        self._repository.update_account(account.to_entity())
        logger.info("account updated: %s", account.get_truncated_google_id())
        return account

    def make_account_instructor(self, google_id: str) -> AccountAttributes:
        account = self._require_account(google_id)
        account.is_instructor = True
        self._repository.update_account(account.to_entity())
        logger.info("account promoted to instructor: %s", account.get_truncated_google_id())
        return account

    def downgrade_instructor_to_student(self, google_id: str) -> AccountAttributes:
        account = self._require_account(google_id)
        account.is_instructor = False
        self._repository.update_account(account.to_entity())
        logger.info("instructor downgraded to student: %s", account.get_truncated_google_id())
        return account

    def get_student_profile(self, google_id: str) -> StudentProfileAttributes | None:
        entity = self._repository.get_student_profile(google_id)
        return None if entity is None else StudentProfileAttributes.value_of(entity)

    def update_student_profile(self, profile: StudentProfileAttributes) -> StudentProfileAttributes:
        """Sanitize, validate and store a profile, stamping its modification time."""
        self._require_account(profile.google_id)
        profile.sanitize_for_saving()
        errors = profile.get_invalidity_info()
        if errors:
            logger.info("rejected profile for %s: %d invalid field(s)", profile.google_id, len(errors))
            raise InvalidParametersError(errors)

        profile.modified_date = datetime.now(timezone.utc)
        self._repository.update_student_profile(profile.to_entity())
        return profile

    def delete_account(self, google_id: str) -> None:
        """Delete an account together with its profile; unknown IDs are ignored."""
        self._repository.delete_account(google_id)
        logger.info("account deleted: %s", google_id)

    def issue_token(self, google_id: str) -> SessionToken:
        """Issue a session token for a registered account."""
        account = self._require_account(google_id)
        access_token, expires_in = issue_access_token(
            google_id=account.google_id, is_instructor=account.is_instructor
        )
        return SessionToken(
            access_token=access_token,
            expires_in=expires_in,
            google_id=account.google_id,
            is_instructor=account.is_instructor,
        )

    def _require_account(self, google_id: str) -> AccountAttributes:
        account = self.get_account(google_id)
        if account is None:
            raise EntityDoesNotExistError(f"account not found: {google_id}")
        if account.student_profile is None:
            account.student_profile = StudentProfileAttributes(google_id=account.google_id)
        return account

    def _validate(self, account: AccountAttributes) -> None:
        errors = account.get_invalidity_info()
        if errors:
            logger.info(
                "rejected account %s: %d invalid field(s)", account.get_truncated_google_id(), len(errors)
            )
            raise InvalidParametersError(errors)
