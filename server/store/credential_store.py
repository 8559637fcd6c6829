"""
Credential store module.

This module persists username/password records in a single-file sqlite3
database. Every logical operation runs inside one transaction: reads in a
deferred transaction, writes in an immediate (exclusive-writer) one, so two
concurrent registrations of the same name can never both succeed.
"""

import sqlite3
import threading
from contextlib import contextmanager
from typing import List, Optional

from common.constants import USERS_TABLE
from server.utils.logger import logger


class StoreError(Exception):
    """Raised when the credential store cannot complete an operation."""


class UserExistsError(StoreError):
    """Raised when creating a user whose name is already taken."""

    def __init__(self, username: str):
        super().__init__(f"User '{username}' already exists")
        self.username = username


class CredentialStore:
    """Durable username -> password mapping."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        try:
            # Autocommit mode; transactions are opened explicitly below.
            self._conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False)
            self._conn.execute("PRAGMA synchronous = FULL")
            self._conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {USERS_TABLE} (
                    username TEXT PRIMARY KEY,
                    password TEXT NOT NULL
                )
            """)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open credential store at {path}: {e}") from e
        self._closed = False
        logger.info(f"Credential store opened at {path}")

    @contextmanager
    def _transaction(self, write: bool = False):
        """Run a block inside a single transaction, rolling back on failure."""
        with self._lock:
            if self._closed:
                raise StoreError("Credential store is closed")
            try:
                self._conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
            except sqlite3.Error as e:
                raise StoreError(f"Cannot begin transaction: {e}") from e
            try:
                yield self._conn
            except BaseException:
                self._conn.execute("ROLLBACK")
                raise
            try:
                self._conn.execute("COMMIT")
            except sqlite3.Error as e:
                self._conn.execute("ROLLBACK")
                raise StoreError(f"Cannot commit transaction: {e}") from e

    def lookup(self, username: str) -> Optional[str]:
        """Return the stored password for username, or None if there is no such user."""
        try:
            with self._transaction() as conn:
                row = conn.execute(
                    f"SELECT password FROM {USERS_TABLE} WHERE username = ?", (username,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Lookup of '{username}' failed: {e}") from e
        return row[0] if row else None

    def create(self, username: str, password: str):
        """Create a user; raises UserExistsError if the name is taken."""
        try:
            with self._transaction(write=True) as conn:
                row = conn.execute(
                    f"SELECT 1 FROM {USERS_TABLE} WHERE username = ?", (username,)
                ).fetchone()
                if row is not None:
                    raise UserExistsError(username)
                conn.execute(
                    f"INSERT INTO {USERS_TABLE} (username, password) VALUES (?, ?)",
                    (username, password)
                )
        except sqlite3.IntegrityError as e:
            raise UserExistsError(username) from e
        except sqlite3.Error as e:
            raise StoreError(f"Create of '{username}' failed: {e}") from e

    def list_usernames(self) -> List[str]:
        """Return every registered username in key order."""
        try:
            with self._transaction() as conn:
                rows = conn.execute(
                    f"SELECT username FROM {USERS_TABLE} ORDER BY username"
                ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Listing users failed: {e}") from e
        return [row[0] for row in rows]

    def close(self):
        """Close the database; safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._conn.close()
        logger.info(f"Credential store at {self.path} closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
