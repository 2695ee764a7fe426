import pytest

from libraryhub.authorservice import AuthorService
from libraryhub.bookservice import NO_BOOK_FOUND, BookService, SearchResult
from libraryhub.db import NotFoundError, ServiceError, connect, init_schema
from libraryhub.userservice import UserService

AUTHOR = "author@example.com"
READER = "reader@example.com"
OTHER = "other@example.com"


@pytest.fixture
def books():
    conn = connect(":memory:")
    init_schema(conn)
    password = "password"
    users = UserService(conn, "secret")
    for name, email in (("Ann", AUTHOR), ("Rob", READER), ("Olga", OTHER)):
        users.register_user(name, password, email)
    authors = AuthorService(conn, users)
    authors.register_user_as_author(AUTHOR)
    yield BookService(conn, authors, users)
    conn.close()


def _stock(books, title="Dune"):
    return books.search_book(title).stock


def test_insert_and_search(books):
    assert books.insert_book("Dune", 3, AUTHOR) == "Success insert Book"
    result = books.search_book("Dune")
    assert (result.book_title, result.stock, result.message) == ("Dune", 3, "")
    assert result.book_id == books.get_book_id_by_title("Dune")


def test_search_missing_book(books):
    assert books.search_book("Nothing") == SearchResult(message=NO_BOOK_FOUND)
    assert NO_BOOK_FOUND == "No book with the provided title found!"


@pytest.mark.parametrize(
    "call",
    [
        lambda b: b.insert_book("Dune", 3, READER),
        lambda b: b.insert_book("Dune", 3, "nobody@example.com"),
        lambda b: b.get_book_id_by_title("Nothing"),
        lambda b: b.borrow_book("Nothing", READER),
        lambda b: b.edit_book_stock("Nothing", 7),
    ],
    ids=["non-author", "unknown-user", "id-missing", "borrow-missing", "edit-missing"],
)
def test_not_found(books, call):
    with pytest.raises(NotFoundError):
        call(books)
    assert books.search_book("Dune") == SearchResult(message=NO_BOOK_FOUND)
    assert books.search_book("Nothing") == SearchResult(message=NO_BOOK_FOUND)


def test_insert_duplicate_title_fails(books):
    books.insert_book("Dune", 3, AUTHOR)
    with pytest.raises(ServiceError):
        books.insert_book("Dune", 1, AUTHOR)
    assert _stock(books) == 3


def test_borrow_and_return_adjust_stock(books):
    books.insert_book("Dune", 2, AUTHOR)
    assert books.borrow_book("Dune", READER) == "Success borrow book"
    assert _stock(books) == 1
    assert books.return_book("Dune", READER) == "Success return book"
    assert _stock(books) == 2
    message = books.return_book("Dune", READER)
    assert message == "failed to return book because Book has been returned"
    assert _stock(books) == 2


def test_borrow_without_stock_fails(books):
    books.insert_book("Dune", 0, AUTHOR)
    with pytest.raises(ServiceError, match="stock not enough"):
        books.borrow_book("Dune", READER)
    assert _stock(books) == 0
    with pytest.raises(NotFoundError):
        books.return_book("Dune", READER)
    assert _stock(books) == 0


def test_return_without_borrowing_fails(books):
    books.insert_book("Dune", 2, AUTHOR)
    with pytest.raises(NotFoundError):
        books.return_book("Dune", READER)
    assert _stock(books) == 2


def test_recommend_most_borrowed(books):
    for title in ("Dune", "Emma"):
        books.insert_book(title, 5, AUTHOR)
    for title, email in (("Dune", READER), ("Emma", READER), ("Emma", OTHER)):
        books.borrow_book(title, email)
    assert books.recommend_book() == "Recommend Emma, has been borrowed the most 2"


def test_recommend_without_borrows_fails(books):
    books.insert_book("Dune", 5, AUTHOR)
    with pytest.raises(NotFoundError):
        books.recommend_book()
    assert _stock(books) == 5


def test_edit_stock(books):
    books.insert_book("Dune", 1, AUTHOR)
    assert books.edit_book_stock("Dune", 7) == "Success update book stock"
    assert _stock(books) == 7