"""Categories and the books filed under them."""

from __future__ import annotations

import logging
import sqlite3

from libraryhub.db import NotFoundError, ServiceError

__all__ = ["CategoryService"]

log = logging.getLogger(__name__)

_INSERT_CATEGORY = "INSERT INTO category (name) VALUES (?);"
_GET_CATEGORY_ID_BY_NAME = "SELECT id FROM category WHERE name = ?;"
_INSERT_BOOK_CATEGORY = "INSERT INTO book_category (category_id, book_id) VALUES (?, ?);"


class CategoryService:
    """Creates categories and links books to them."""

    def __init__(self, db: sqlite3.Connection, book_client) -> None:
        self._db = db
        self._book_client = book_client

    def _run(self, action, *args):
        try:
            return action(*args)
        except sqlite3.Error as exc:
            log.warning("category statement failed: %s", exc)
            raise ServiceError(str(exc)) from exc

    def _write(self, query: str, params: tuple) -> None:
        with self._db:
            self._db.execute(query, params)

    def insert_category(self, name: str) -> str:
        """Create a category called ``name``."""
        self._run(self._write, _INSERT_CATEGORY, (name,))
        return "Success insert category"

    def link_book_with_category(self, book_title: str, name: str) -> str:
        """File the book ``book_title`` under the category ``name``."""
        book_id = self._book_client.get_book_id_by_title(book_title)
        cursor = self._run(self._db.execute, _GET_CATEGORY_ID_BY_NAME, (name,))
        row = cursor.fetchone()
        if row is None:
            log.info("no category named %s", name)
            raise NotFoundError("no category found with that name")
        self._run(self._write, _INSERT_BOOK_CATEGORY, (row[0], book_id))
        return "Success link category with book"