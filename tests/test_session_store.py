from __future__ import annotations

import json
from pathlib import Path

from fumotion.models.user import User
from fumotion.session import Session, SessionStore


def _user() -> User:
    return User(id=1, email="ann@example.com", first_name="Ann", last_name="Driver", is_admin=True)


def test_session_round_trips_through_disk(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    SessionStore(path).set_session("abc", _user())

    reloaded = SessionStore(path)
    session = reloaded.load()

    assert session.token == "abc"
    assert session.user is not None
    assert session.user.model_dump() == _user().model_dump()
    assert reloaded.is_authenticated()


def test_missing_file_yields_empty_session(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "nowhere" / "config.json")
    assert store.load() == Session()
    assert store.get_token() is None
    assert store.get_user() is None
    assert not store.is_authenticated()


def test_corrupted_file_yields_empty_session(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    store = SessionStore(path)
    assert store.load() == Session()
    assert not store.is_authenticated()


def test_partial_session_is_not_authenticated(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"token": "abc"}), encoding="utf-8")

    store = SessionStore(path)
    store.load()

    assert store.get_token() == "abc"
    assert not store.is_authenticated()


def test_every_mutation_writes_through(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    store = SessionStore(path)

    store.set_token("abc")
    assert json.loads(path.read_text(encoding="utf-8"))["token"] == "abc"

    store.set_user(_user())
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk["token"] == "abc"
    assert on_disk["user"]["email"] == "ann@example.com"
    assert "raw" not in on_disk["user"]

    store.clear()
    assert SessionStore(path).load() == Session()


def test_write_failure_keeps_in_memory_session(tmp_path: Path) -> None:
    # The target path is a directory, so every write fails.
    store = SessionStore(tmp_path)
    store.set_session("abc", _user())

    assert store.get_token() == "abc"
    assert store.is_authenticated()
