from __future__ import annotations
import json
import pytest

from construmator import NotAuthenticatedError, ValidationError
from construmator.auth import check_password, hash_password


def test_register_and_login(auth):
    user = auth.register("Alice@Example.com ", "secret1", "Alice")
    assert user.email == "alice@example.com"
    assert not auth.is_logged_in()
    assert auth.login("alice@example.com", "secret1").id == user.id
    assert auth.current_user().name == "Alice"


def test_password_is_not_stored_in_clear(auth, tmp_path):
    auth.register("alice@example.com", "secret1", "Alice")
    rec = json.loads((tmp_path / "users.json").read_text(encoding="utf-8"))[0]
    assert rec["password"] != "secret1"
    assert check_password("secret1", rec["password"])
    assert rec["userType"] == "customer"
    assert auth.list_users()[0].created_at == rec["createdAt"]


@pytest.mark.parametrize("email,password,name,user_type", [
    ("", "secret1", "A", "customer"),
    ("a@b.c", "", "A", "customer"),
    ("a@b.c", "secret1", "", "customer"),
    ("a@b.c", "short", "A", "customer"),
    ("a@b.c", "secret1", "A", "superuser"),
])
def test_register_validation(auth, email, password, name, user_type):
    with pytest.raises(ValidationError):
        auth.register(email, password, name, user_type)


def test_duplicate_email_is_rejected(auth):
    auth.register("alice@example.com", "secret1", "Alice")
    with pytest.raises(ValidationError):
        auth.register("ALICE@example.com", "secret2", "Other")


def test_wrong_password(auth):
    auth.register("alice@example.com", "secret1", "Alice")
    with pytest.raises(NotAuthenticatedError):
        auth.login("alice@example.com", "nope123")
    with pytest.raises(NotAuthenticatedError):
        auth.login("nobody@example.com", "secret1")


def test_session_expires(auth, clock):
    auth.register("alice@example.com", "secret1", "Alice")
    auth.login("alice@example.com", "secret1")
    clock.advance(23.5)
    assert auth.is_logged_in()
    clock.advance(1)
    assert not auth.is_logged_in()
    assert auth.current_user() is None


def test_logout(auth):
    auth.register("alice@example.com", "secret1", "Alice")
    auth.login("alice@example.com", "secret1")
    auth.logout()
    assert auth.current_user() is None


def test_admin_accounts(auth):
    auth.register("root@example.com", "secret1", "Root", "admin")
    auth.register("alice@example.com", "secret1", "Alice")
    users = auth.list_users()
    assert [u.is_admin for u in users] == [True, False]


def test_hash_is_salted():
    assert hash_password("secret1") != hash_password("secret1")
    assert not check_password("secret1", "garbage")
