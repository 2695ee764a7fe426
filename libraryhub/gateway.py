"""HTTP gateway that exposes the library services as a JSON API."""

from __future__ import annotations

import argparse
import os
from typing import Any, Callable

from flask import Flask, g, jsonify, request

from libraryhub.authorservice import AuthorService
from libraryhub.bookservice import BookService
from libraryhub.categoryservice import CategoryService
from libraryhub.db import ServiceError, connect, init_schema
from libraryhub.tokens import AuthError, verify_token
from libraryhub.userservice import UserService

__all__ = ["create_app", "main"]

DEFAULT_PORT = 8080


class _BindError(Exception):
    """A request body could not be bound to the expected fields."""


def _bind(fields: dict[str, type]) -> dict[str, Any]:
    """Read the JSON body and return the named fields, defaulting missing ones."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise _BindError("invalid JSON request body")
    bound: dict[str, Any] = {}
    for name, kind in fields.items():
        value = body.get(name)
        if value is None:
            bound[name] = kind()
            continue
        if kind is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise _BindError(f"field {name!r} must be an integer")
        if kind is str and not isinstance(value, str):
            raise _BindError(f"field {name!r} must be a string")
        bound[name] = value
    return bound


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _handle(action: Callable[[], dict[str, Any]]):
    try:
        return jsonify(action()), 200
    except _BindError as exc:
        return _error(str(exc), 400)
    except ServiceError as exc:
        return _error(str(exc), 500)


def create_app(
    user_service: UserService,
    author_service: AuthorService,
    book_service: BookService,
    category_service: CategoryService,
    secret_key: str,
) -> Flask:
    """Build the Flask application routing requests to the given services."""
    app = Flask(__name__)

    def protected(view: Callable[[], Any]) -> Callable[[], Any]:
        def wrapper():
            try:
                g.email = verify_token(request.headers.get("Authorization"), secret_key)
            except AuthError as exc:
                return _error(str(exc), 401)
            return view()

        wrapper.__name__ = view.__name__
        return wrapper

    # Users

    @app.get("/users/<email>")
    def get_user_id_by_email(email: str):
        return _handle(lambda: {"id": user_service.get_user_id_by_email(email)})

    @app.post("/users")
    def register_user():
        def action():
            body = _bind({"name": str, "password": str, "email": str})
            if not (body["password"] and body["name"] and body["email"]):
                raise _BindError("Missing required fields")
            message = user_service.register_user(
                body["name"], body["password"], body["email"]
            )
            return {"message": message}

        return _handle(action)

    @app.post("/login")
    def login():
        def action():
            body = _bind({"email": str, "password": str})
            return {"token": user_service.login(body["email"], body["password"])}

        return _handle(action)

    # Authors

    @app.post("/authors/protected/")
    @protected
    def register_user_as_author():
        return _handle(
            lambda: {"message": author_service.register_user_as_author(g.email)}
        )

    # Books

    @app.get("/books/recommend-book")
    def recommend_book():
        return _handle(lambda: {"message": book_service.recommend_book()})

    @app.get("/books/search-book")
    def search_book():
        def action():
            body = _bind({"book_title": str})
            result = book_service.search_book(body["book_title"])
            return {
                "book_id": result.book_id,
                "book_title": result.book_title,
                "stock": result.stock,
                "message": result.message,
            }

        return _handle(action)

    @app.post("/books/protected/")
    @protected
    def insert_book():
        def action():
            body = _bind({"title": str, "stock": int})
            message = book_service.insert_book(body["title"], body["stock"], g.email)
            return {"message": message}

        return _handle(action)

    @app.post("/books/protected/borrow-book")
    @protected
    def borrow_book():
        def action():
            body = _bind({"title": str})
            return {"message": book_service.borrow_book(body["title"], g.email)}

        return _handle(action)

    @app.post("/books/protected/return-book")
    @protected
    def return_book():
        def action():
            body = _bind({"title": str})
            return {"message": book_service.return_book(body["title"], g.email)}

        return _handle(action)

    @app.put("/books/protected/edit-stock")
    @protected
    def edit_stock():
        def action():
            body = _bind({"title": str, "stock": int})
            return {"message": book_service.edit_book_stock(body["title"], body["stock"])}

        return _handle(action)

    # Categories

    @app.post("/category/protected/")
    @protected
    def insert_category():
        def action():
            body = _bind({"name": str})
            return {"message": category_service.insert_category(body["name"])}

        return _handle(action)

    @app.post("/category/protected/link-book")
    @protected
    def link_book_with_category():
        def action():
            body = _bind({"book_title": str, "name": str})
            message = category_service.link_book_with_category(
                body["book_title"], body["name"]
            )
            return {"message": message}

        return _handle(action)

    return app


def main(argv: list[str] | None = None) -> None:
    """Start the gateway together with the services it fronts."""
    parser = argparse.ArgumentParser(description="Run the library API gateway.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--database",
        default=os.environ.get("DATABASE_URL", "libraryhub.db"),
        help="path of the SQLite database file",
    )
    args = parser.parse_args(argv)

    secret_key = os.environ.get("JWT_SECRET_KEY", "")
    db = connect(args.database)
    init_schema(db)

    users = UserService(db, secret_key)
    authors = AuthorService(db, users)
    books = BookService(db, authors, users)
    categories = CategoryService(db, books)

    app = create_app(users, authors, books, categories, secret_key)
    print(f"API Gateway running on port {args.port}")
    app.run(host=args.host, port=args.port)