"""Database repository for accounts and student profiles."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from .entity import Account, StudentProfile

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
    google_id       VARCHAR(254) PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    email           VARCHAR(254) NOT NULL,
    institute       VARCHAR(64) NOT NULL,
    is_instructor   BOOLEAN NOT NULL DEFAULT TRUE,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS student_profiles (
    google_id       VARCHAR(254) PRIMARY KEY REFERENCES accounts(google_id) ON DELETE CASCADE,
    short_name      TEXT NOT NULL DEFAULT '',
    email           TEXT NOT NULL DEFAULT '',
    institute       TEXT NOT NULL DEFAULT '',
    nationality     TEXT NOT NULL DEFAULT '',
    gender          VARCHAR(16) NOT NULL DEFAULT 'other',
    more_info       TEXT NOT NULL DEFAULT '',
    picture_key     TEXT NOT NULL DEFAULT '',
    modified_date   TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""

_ACCOUNT_COLUMNS = "a.google_id, a.name, a.is_instructor, a.email, a.institute, a.created_at"
_PROFILE_COLUMNS = (
    "p.google_id, p.short_name, p.email, p.institute, p.nationality, "
    "p.gender, p.more_info, p.picture_key, p.modified_date"
)


class AccountsDb:
    """Postgres-backed persistence for accounts and their profiles."""

    def __init__(self, pool: ConnectionPool) -> None:
        """Store the connection pool used for all database interactions."""
        self._pool = pool

    def ensure_schema(self) -> None:
        """Create the tables if they do not exist yet."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                conn.commit()
        logger.info("account tables verified")

    def create_account(self, account: Account) -> Account:
        """Insert an account and its profile in a single transaction."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    """
                    INSERT INTO accounts (google_id, name, is_instructor, email, institute, created_at)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (
                        account.google_id,
                        account.name,
                        account.is_instructor,
                        account.email,
                        account.institute,
                        account.created_at,
                    ),
                )
                if account.student_profile is not None:
                    self._upsert_profile(cur, account.student_profile)
                conn.commit()
        return account

    def get_account(self, google_id: str, retrieve_profile: bool = True) -> Account | None:
        """Fetch an account (optionally with its profile) or return ``None``."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_ACCOUNT_COLUMNS}, {_PROFILE_COLUMNS}
                    FROM accounts a
                    LEFT JOIN student_profiles p ON p.google_id = a.google_id
                    WHERE a.google_id = %s
                    """,
                    (google_id,),
                )
                row = cur.fetchone()
                if not row:
                    return None
        account = map_account_row(row)
        if not retrieve_profile:
            account.student_profile = None
        return account

    def get_instructor_accounts(self) -> list[Account]:
        """Return every account flagged as an instructor, ordered by Google ID."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_ACCOUNT_COLUMNS}, {_PROFILE_COLUMNS}
                    FROM accounts a
                    LEFT JOIN student_profiles p ON p.google_id = a.google_id
                    WHERE a.is_instructor
                    ORDER BY a.google_id
                    """
                )
                rows = cur.fetchall()
        return [map_account_row(row) for row in rows]

    def update_account(self, account: Account) -> None:
        """Overwrite the stored account fields; the profile is written only when present."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE accounts
                    SET name = %s, is_instructor = %s, email = %s, institute = %s
                    WHERE google_id = %s
                    """,
                    (
                        account.name,
                        account.is_instructor,
                        account.email,
                        account.institute,
                        account.google_id,
                    ),
                )
                if account.student_profile is not None:
                    self._upsert_profile(cur, account.student_profile)
                conn.commit()

    def get_student_profile(self, google_id: str) -> StudentProfile | None:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"SELECT {_PROFILE_COLUMNS} FROM student_profiles p WHERE p.google_id = %s",
                    (google_id,),
                )
                row = cur.fetchone()
                if not row:
                    return None
        return map_profile_row(row)

    def update_student_profile(self, profile: StudentProfile) -> None:
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                self._upsert_profile(cur, profile)
                conn.commit()

    def delete_account(self, google_id: str) -> None:
        """Remove the account; its profile goes with it through the cascading key."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM accounts WHERE google_id = %s", (google_id,))
                conn.commit()

    def _upsert_profile(self, cur, profile: StudentProfile) -> None:
        cur.execute(
            """
            INSERT INTO student_profiles (
                google_id, short_name, email, institute, nationality,
                gender, more_info, picture_key, modified_date
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (google_id) DO UPDATE SET
                short_name = EXCLUDED.short_name,
                email = EXCLUDED.email,
                institute = EXCLUDED.institute,
                nationality = EXCLUDED.nationality,
                gender = EXCLUDED.gender,
                more_info = EXCLUDED.more_info,
                picture_key = EXCLUDED.picture_key,
                modified_date = EXCLUDED.modified_date
            """,
            (
                profile.google_id,
                profile.short_name,
                profile.email,
                profile.institute,
                profile.nationality,
                profile.gender,
                profile.more_info,
                profile.picture_key,
                profile.modified_date or datetime.now(timezone.utc),
            ),
        )


def map_profile_row(row: tuple) -> StudentProfile:
    """Convert the nine profile columns into a ``StudentProfile`` entity."""
    return StudentProfile(
        google_id=row[0],
        short_name=row[1],
        email=row[2],
        institute=row[3],
        nationality=row[4],
        gender=row[5],
        more_info=row[6],
        picture_key=row[7],
        modified_date=row[8],
    )


def map_account_row(row: tuple) -> Account:
    """Convert an account row, optionally followed by joined profile columns."""
    profile = None
    if len(row) > 6 and row[6] is not None:
        profile = map_profile_row(row[6:])
    return Account(
        google_id=row[0],
        name=row[1],
        is_instructor=row[2],
        email=row[3],
        institute=row[4],
        created_at=row[5],
        student_profile=profile,
    )
