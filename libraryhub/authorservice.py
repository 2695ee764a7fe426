"""Authors: users who are registered to publish books."""

from __future__ import annotations

import logging
import sqlite3

from libraryhub.db import NotFoundError, ServiceError

__all__ = ["AuthorService"]

log = logging.getLogger(__name__)

_INSERT_AUTHOR = "INSERT INTO authors (user_id) VALUES (?);"
_GET_AUTHOR_ID_BY_USER_ID = "SELECT id FROM authors WHERE user_id = ?;"


class AuthorService:
    """Registers users as authors and looks authors up."""

    def __init__(self, db: sqlite3.Connection, user_client) -> None:
        self._db = db
        self._user_client = user_client

    def _sql(self, query: str, params: tuple, *, write: bool = False):
        try:
            if write:
                with self._db:
                    self._db.execute(query, params)
                return None
            return self._db.execute(query, params).fetchone()
        except sqlite3.Error as exc:
            log.warning("author query failed: %s", exc)
            raise ServiceError(str(exc)) from exc

    def register_user_as_author(self, user_email: str) -> str:
        """Make the user with ``user_email`` an author."""
        user_id = self._user_client.get_user_id_by_email(user_email)
        self._sql(_INSERT_AUTHOR, (user_id,), write=True)
        return "Success insert Author"

    def get_author_id_by_user_id(self, user_id: str) -> str:
        """Return the author id belonging to ``user_id``."""
        row = self._sql(_GET_AUTHOR_ID_BY_USER_ID, (user_id,))
        if row is None:
            raise NotFoundError("no author found for that user")
        return str(row[0])