"""SQLite storage and the errors shared by the library services."""

from __future__ import annotations

import sqlite3

__all__ = ["ServiceError", "NotFoundError", "connect", "init_schema"]


class ServiceError(Exception):
    """A service request could not be completed."""


class NotFoundError(ServiceError):
    """A requested record does not exist."""


_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    password TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS authors (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL UNIQUE REFERENCES users(id)
);
CREATE TABLE IF NOT EXISTS books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL UNIQUE,
    stock INTEGER NOT NULL,
    author_id INTEGER NOT NULL REFERENCES authors(id)
);
CREATE TABLE IF NOT EXISTS borrow_records (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id),
    book_id INTEGER NOT NULL REFERENCES books(id),
    borrow_date TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    return_date TIMESTAMP
);
CREATE TABLE IF NOT EXISTS category (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS book_category (
    category_id INTEGER NOT NULL REFERENCES category(id),
    book_id INTEGER NOT NULL REFERENCES books(id)
);
"""


def connect(dsn: str) -> sqlite3.Connection:
    """Open the database at ``dsn`` with foreign keys enforced."""
    try:
        conn = sqlite3.connect(dsn, check_same_thread=False)
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as exc:
        raise ServiceError(f"failed to connect to database: {exc}") from exc
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create every table the services use, if missing."""
    try:
        conn.executescript(_SCHEMA)
    except sqlite3.Error as exc:
        raise ServiceError(f"failed to create schema: {exc}") from exc