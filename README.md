# libraryhub

A small library-management backend: four services that share one SQLite
database, and a Flask HTTP gateway that exposes them as a JSON API.

- `libraryhub.userservice.UserService` registers users (passwords stored as
  bcrypt hashes), looks up a user's id by e-mail and logs users in, returning
  an HS256 token that expires 24 hours after it is issued.
- `libraryhub.authorservice.AuthorService` turns a registered user into an
  author and looks up an author's id by user id.
- `libraryhub.bookservice.BookService` adds books with a stock count, lends
  and takes back books, searches by title, edits stock and recommends the
  most borrowed book.
- `libraryhub.categoryservice.CategoryService` creates categories and links
  books to them.
- `libraryhub.gateway` builds the Flask application (`create_app`) and runs
  it (`main`), checking `Authorization: Bearer <token>` headers on protected
  routes.
- `libraryhub.tokens` issues and verifies the tokens (`issue_token`,
  `verify_token`).
- `libraryhub.db` opens the database (`connect`), creates the tables
  (`init_schema`) and defines the shared errors.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running the gateway

```
libraryhub
```

This opens (and if needed creates) the SQLite database, wires the four
services together and serves the gateway with Flask's built-in server.

Options:

- `--host` (default `0.0.0.0`)
- `--port` (default `8080`)
- `--database`: path of the SQLite file; defaults to the `DATABASE_URL`
  environment variable, or `libraryhub.db` when it is unset.

Tokens are signed and checked with the key in the `JWT_SECRET_KEY`
environment variable (an empty key when it is unset).

## Endpoints

Request bodies are JSON objects. A field that is missing or `null` is taken
as an empty string, or as `0` for `stock`; a field of the wrong type, or a
body that is not a JSON object, is answered with 400.

Public:

| Method | Path                    | Body                                 | Answer                                         |
|--------|-------------------------|--------------------------------------|------------------------------------------------|
| POST   | `/users`                | `name`, `email`, `password`          | `message`                                      |
| POST   | `/login`                | `email`, `password`                  | `token`                                        |
| GET    | `/users/<email>`        |                                      | `id`                                           |
| GET    | `/books/recommend-book` |                                      | `message`                                      |
| GET    | `/books/search-book`    | `book_title`                         | `book_id`, `book_title`, `stock`, `message`    |

`POST /users` answers 400 with `Missing required fields` when any of the
three fields is empty. A search for an unknown title is not an error: it
answers 200 with empty fields and the message
`No book with the provided title found!`.

Protected (need `Authorization: Bearer <token>`):

| Method | Path                            | Body                 |
|--------|---------------------------------|----------------------|
| POST   | `/authors/protected/`           |                      |
| POST   | `/books/protected/`             | `title`, `stock`     |
| POST   | `/books/protected/borrow-book`  | `title`              |
| POST   | `/books/protected/return-book`  | `title`              |
| PUT    | `/books/protected/edit-stock`   | `title`, `stock`     |
| POST   | `/category/protected/`          | `name`               |
| POST   | `/category/protected/link-book` | `book_title`, `name` |

On protected routes the acting user is the e-mail carried in the token, not
anything in the request body. Successful calls answer 200 with
`{"message": ...}`. A missing header, a header without the `Bearer ` prefix,
a token that fails verification or one without an `email` claim answers 401.
Failures inside a service (unknown user, book or category, no stock left,
duplicate records, wrong password) answer 500. Every error body has the form
`{"error": ...}`.

## Using the services from Python

```python
from libraryhub.db import connect, init_schema
from libraryhub.userservice import UserService
from libraryhub.authorservice import AuthorService
from libraryhub.bookservice import BookService
from libraryhub.categoryservice import CategoryService
from libraryhub.gateway import create_app

db = connect(":memory:")
init_schema(db)

users = UserService(db, "secret")
authors = AuthorService(db, users)
books = BookService(db, authors, users)
categories = CategoryService(db, books)

users.register_user("Ada", "password", "ada@example.com")
authors.register_user_as_author("ada@example.com")
books.insert_book("Notes on Engines", 3, "ada@example.com")
books.borrow_book("Notes on Engines", "ada@example.com")

categories.insert_category("Engineering")
categories.link_book_with_category("Notes on Engines", "Engineering")

print(books.search_book("Notes on Engines"))  # a SearchResult
print(books.recommend_book())

app = create_app(users, authors, books, categories, "secret")
```

Each service method returns its message or value, or raises
`libraryhub.db.ServiceError`; records that do not exist raise its subclass
`libraryhub.db.NotFoundError`. `libraryhub.tokens.verify_token` raises
`libraryhub.tokens.AuthError`. Returning a book that was already returned is
not an error: `return_book` answers
`failed to return book because Book has been returned`.

## What this package does not do

The services are plain Python objects that call one another directly in one
process and share a single SQLite database; they are not separate network
services and there is no way to run them on their own. The gateway is served
by Flask's development server only.