"""Books: stock keeping, borrowing, returning and recommendations."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass

from libraryhub.db import NotFoundError, ServiceError

__all__ = ["SearchResult", "BookService"]

log = logging.getLogger(__name__)

_INSERT_BOOK = "INSERT INTO books (title, stock, author_id) VALUES (?, ?, ?);"
_GET_BOOK_DATA_BY_TITLE = "SELECT id, stock FROM books WHERE title = ?;"
_UPDATE_BOOK_STOCK = "UPDATE books SET stock = ? WHERE id = ?;"
_CHECK_BOOK_RETURNED = (
    "SELECT return_date FROM borrow_records WHERE user_id = ? AND book_id = ?;"
)
_INSERT_BORROW_BOOK = "INSERT INTO borrow_records (user_id, book_id) VALUES (?, ?);"
_RETURN_BOOK = (
    "UPDATE borrow_records SET return_date = CURRENT_TIMESTAMP "
    "WHERE user_id = ? AND book_id = ?;"
)
_GET_MOST_BORROWED_BOOK = """
    SELECT b.title, COUNT(br.book_id) AS borrow_count
    FROM borrow_records br
    JOIN books b ON br.book_id = b.id
    GROUP BY b.title
    ORDER BY borrow_count DESC
    LIMIT 1;
"""

NO_BOOK_FOUND = "No book with the provided title found!"


@dataclass(frozen=True)
class SearchResult:
    """The outcome of a title search."""

    book_id: str = ""
    book_title: str = ""
    stock: int = 0
    message: str = ""


class _Abort(Exception):
    """Raised inside a transaction to roll it back."""


class BookService:
    """Manages books and the records of who borrowed them."""

    def __init__(self, db: sqlite3.Connection, author_client, user_client) -> None:
        self._db = db
        self._author_client = author_client
        self._user_client = user_client

    def _query_one(self, query: str, params: tuple = ()):
        try:
            return self._db.execute(query, params).fetchone()
        except sqlite3.Error as exc:
            log.warning("error reading row: %s", exc)
            raise ServiceError(str(exc)) from exc

    def _book_data(self, title: str) -> tuple[str, int]:
        row = self._query_one(_GET_BOOK_DATA_BY_TITLE, (title,))
        if row is None:
            log.info("no book found with title %s", title)
            raise NotFoundError("no book found with that title")
        return str(row[0]), int(row[1])

    def _execute(self, query: str, params: tuple) -> None:
        try:
            with self._db:
                self._db.execute(query, params)
        except sqlite3.Error as exc:
            log.warning("error writing row: %s", exc)
            raise ServiceError(str(exc)) from exc

    def insert_book(self, title: str, stock: int, author_email: str) -> str:
        """Add a book written by the author with ``author_email``."""
        user_id = self._user_client.get_user_id_by_email(author_email)
        author_id = self._author_client.get_author_id_by_user_id(user_id)
        self._execute(_INSERT_BOOK, (title, stock, author_id))
        return "Success insert Book"

    def borrow_book(self, title: str, borrower_email: str) -> str:
        """Lend one copy of ``title`` to the user with ``borrower_email``."""
        user_id = self._user_client.get_user_id_by_email(borrower_email)
        book_id, stock = self._book_data(title)
        if stock <= 0:
            log.info("book stock not enough for borrowing")
            raise ServiceError("book stock not enough for borrowing")
        try:
            with self._db:
                self._db.execute(_UPDATE_BOOK_STOCK, (stock - 1, book_id))
                self._db.execute(_INSERT_BORROW_BOOK, (user_id, book_id))
        except sqlite3.Error as exc:
            log.warning("error borrowing book: %s", exc)
            raise ServiceError(str(exc)) from exc
        return "Success borrow book"

    def return_book(self, title: str, returner_email: str) -> str:
        """Take back ``title`` from the user with ``returner_email``."""
        user_id = self._user_client.get_user_id_by_email(returner_email)
        book_id, stock = self._book_data(title)
        record = self._query_one(_CHECK_BOOK_RETURNED, (user_id, book_id))
        if record is None:
            log.info("user has not borrowed this book")
            raise NotFoundError("user has not borrowed this book")
        if record[0] is not None:
            return "failed to return book because Book has been returned"
        try:
            with self._db:
                self._db.execute(_UPDATE_BOOK_STOCK, (stock + 1, book_id))
                cursor = self._db.execute(_RETURN_BOOK, (user_id, book_id))
                if cursor.rowcount == 0:
                    raise _Abort
        except _Abort:
            log.info("user has not borrowed this book")
            raise ServiceError("user has not borrowed this book") from None
        except sqlite3.Error as exc:
            log.warning("error returning book: %s", exc)
            raise ServiceError(str(exc)) from exc
        return "Success return book"

    def get_book_id_by_title(self, title: str) -> str:
        """Return the id of the book called ``title``."""
        book_id, _ = self._book_data(title)
        return book_id

    def recommend_book(self) -> str:
        """Recommend the book that has been borrowed the most."""
        row = self._query_one(_GET_MOST_BORROWED_BOOK)
        if row is None:
            log.info("no borrowed books to recommend")
            raise NotFoundError("no borrowed books to recommend")
        title, count = row
        return f"Recommend {title}, has been borrowed the most {count}"

    def search_book(self, book_title: str) -> SearchResult:
        """Look a book up by title; a miss is reported in the message."""
        row = self._query_one(_GET_BOOK_DATA_BY_TITLE, (book_title,))
        if row is None:
            return SearchResult(message=NO_BOOK_FOUND)
        return SearchResult(book_id=str(row[0]), book_title=book_title, stock=int(row[1]))

    def edit_book_stock(self, title: str, stock: int) -> str:
        """Set the stock of the book called ``title``."""
        book_id, _ = self._book_data(title)
        self._execute(_UPDATE_BOOK_STOCK, (stock, book_id))
        return "Success update book stock"