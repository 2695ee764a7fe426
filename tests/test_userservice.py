import pytest

from libraryhub.db import NotFoundError, ServiceError, connect, init_schema
from libraryhub.tokens import verify_token
from libraryhub.userservice import UserService

SECRET = "secret"
PASSWORD = "password"
EMAIL = "reader@example.com"
OTHER = "other@example.com"


@pytest.fixture
def conn():
    connection = connect(":memory:")
    init_schema(connection)
    yield connection
    connection.close()


@pytest.fixture
def service(conn):
    users = UserService(conn, SECRET)
    assert users.register_user("Reader", PASSWORD, EMAIL) == "User created!"
    return users


def _stored(conn, column):
    return conn.execute(f"SELECT {column} FROM users WHERE email = ?", (EMAIL,)).fetchone()[0]


def test_password_is_stored_hashed(service, conn):
    stored = _stored(conn, "password")
    assert stored.startswith("$2")
    assert PASSWORD not in stored


def test_duplicate_email_is_rejected(service, conn):
    with pytest.raises(ServiceError):
        service.register_user("Other", PASSWORD, EMAIL)
    count = conn.execute("SELECT COUNT(*) FROM users WHERE email = ?", (EMAIL,)).fetchone()[0]
    assert count == 1


def test_user_ids(service, conn):
    service.register_user("Other", PASSWORD, OTHER)
    first = service.get_user_id_by_email(EMAIL)
    assert first == str(_stored(conn, "id"))
    assert first.isdigit()
    assert first != service.get_user_id_by_email(OTHER)


def test_login_returns_token_for_email(service):
    token = service.login(EMAIL, PASSWORD)
    assert verify_token(f"Bearer {token}", SECRET) == EMAIL


@pytest.mark.parametrize(
    "call, error, match",
    [
        (lambda s: s.get_user_id_by_email("nobody@example.com"), NotFoundError, "no user"),
        (lambda s: s.login("nobody@example.com", PASSWORD), NotFoundError, "no user"),
        (lambda s: s.login(EMAIL, "secret"), ServiceError, "not the hash"),
    ],
    ids=["lookup-unknown", "login-unknown", "login-wrong"],
)
def test_failures(service, conn, call, error, match):
    with pytest.raises(error, match=match) as excinfo:
        call(service)
    assert match in str(excinfo.value)
    assert service.get_user_id_by_email(EMAIL) == str(_stored(conn, "id"))
    token = service.login(EMAIL, PASSWORD)
    assert verify_token(f"Bearer {token}", SECRET) == EMAIL