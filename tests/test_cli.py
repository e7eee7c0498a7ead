"""Tests for the operator CLI in main.py (user and state provisioning)."""

import os

os.environ.setdefault("DEBUG", "true")

import pytest

from auth.store import UserStore
from auth.tokens import verify_password
from main import main
from portal.store import PortalStore


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'cli.db'}"


def test_init_db(db_url: str, capsys) -> None:
    assert main(["--db-url", db_url, "init-db"]) == 0
    assert "Tables created" in capsys.readouterr().out


def test_create_user_stores_bcrypt_hash(db_url: str) -> None:
    assert main(["--db-url", db_url, "create-user", "alice", "--password", "pw-123456"]) == 0
    store = UserStore(db_url)
    try:
        user = store.get_by_username("alice")
    finally:
        store.close()
    assert user is not None
    assert user.hashed_password != "pw-123456"
    assert verify_password("pw-123456", user.hashed_password)


def test_create_duplicate_user_fails(db_url: str, capsys) -> None:
    assert main(["--db-url", db_url, "create-user", "alice", "--password", "one"]) == 0
    assert main(["--db-url", db_url, "create-user", "alice", "--password", "two"]) == 1
    assert "already exists" in capsys.readouterr().out


def test_create_user_prompts_for_password(db_url: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("getpass.getpass", lambda prompt="": "typed-secret")
    assert main(["--db-url", db_url, "create-user", "bob"]) == 0
    store = UserStore(db_url)
    try:
        assert verify_password("typed-secret", store.get_by_username("bob").hashed_password)
    finally:
        store.close()


def test_create_user_prompt_mismatch(db_url: str, monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(["first", "second"])
    monkeypatch.setattr("getpass.getpass", lambda prompt="": next(answers))
    assert main(["--db-url", db_url, "create-user", "bob"]) == 1


def test_set_password(db_url: str) -> None:
    main(["--db-url", db_url, "create-user", "alice", "--password", "old-password"])
    assert main(["--db-url", db_url, "set-password", "alice", "--password", "new-password"]) == 0
    store = UserStore(db_url)
    try:
        hashed = store.get_by_username("alice").hashed_password
    finally:
        store.close()
    assert verify_password("new-password", hashed)
    assert not verify_password("old-password", hashed)


def test_set_password_unknown_user(db_url: str) -> None:
    assert main(["--db-url", db_url, "set-password", "ghost", "--password", "x"]) == 1


def test_add_state(db_url: str) -> None:
    assert main(["--db-url", db_url, "add-state", "Goa", "1586000"]) == 0
    store = PortalStore(db_url)
    try:
        assert [(s.state_name, s.population) for s in store.list_states()] == [("Goa", 1586000)]
    finally:
        store.close()
