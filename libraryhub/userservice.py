"""User accounts: registration, lookup and login."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator

import bcrypt

from libraryhub.db import NotFoundError, ServiceError
from libraryhub.tokens import issue_token

__all__ = ["UserService"]

log = logging.getLogger(__name__)

_BCRYPT_COST = 10
_INSERT_USER = "INSERT INTO users (name, password, email) VALUES (?, ?, ?);"
_LOOKUPS = {
    "id": "SELECT id FROM users WHERE email = ?;",
    "hash": "SELECT password FROM users WHERE email = ?;",
}
_MISMATCH = "crypto/bcrypt: hashedPassword is not the hash of the given password"


@contextmanager
def _translated(action: str) -> Iterator[None]:
    """Turn database and hashing failures into ServiceError."""
    try:
        yield
    except (sqlite3.Error, ValueError) as exc:
        log.warning("%s: %s", action, exc)
        raise ServiceError(str(exc)) from exc


class UserService:
    """Stores users and issues login tokens."""

    def __init__(self, db: sqlite3.Connection, secret_key: str) -> None:
        self._db = db
        self._secret_key = secret_key

    def register_user(self, name: str, password: str, email: str) -> str:
        """Store a new user with a hashed password."""
        with _translated("error hashing password"):
            hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=_BCRYPT_COST))
        with _translated("error inserting user"), self._db:
            self._db.execute(_INSERT_USER, (name, hashed.decode("ascii"), email))
        return "User created!"

    def _lookup(self, column: str, email: str):
        with _translated("error while scanning row"):
            row = self._db.execute(_LOOKUPS[column], (email,)).fetchone()
        if row is None:
            log.info("no user found with email %s", email)
            raise NotFoundError("no user found with that email")
        return row[0]

    def get_user_id_by_email(self, email: str) -> str:
        """Return the id of the user with ``email``."""
        return str(self._lookup("id", email))

    def login(self, email: str, password: str) -> str:
        """Check the credentials and return a signed token."""
        stored = self._lookup("hash", email)
        with _translated("error comparing password"):
            matches = bcrypt.checkpw(password.encode(), stored.encode())
        if not matches:
            raise ServiceError(_MISMATCH)
        return issue_token(email, self._secret_key)