"""Tests for the local state file (login flag and session id)."""

import json

import pytest

from kb_chat.chat.state import AUTH_KEY, SESSION_KEY, LocalStateStore, check_password


@pytest.fixture
def store(tmp_path):
    return LocalStateStore(tmp_path / "nested" / "state.json")


class TestLocalStateStore:

    def test_empty_when_missing(self, store):
        assert store.get(SESSION_KEY) is None
        assert store.is_authenticated() is False

    def test_set_creates_file(self, store):
        store.set("key", "value")

        assert json.loads(store.path.read_text()) == {"key": "value"}
        assert store.get("key") == "value"

    def test_mark_authenticated(self, store):
        store.mark_authenticated()

        assert store.is_authenticated() is True
        assert store.get(AUTH_KEY) == "true"

    def test_load_session_id_creates_and_persists(self, store):
        first = store.load_session_id()

        assert first
        assert store.load_session_id() == first
        assert LocalStateStore(store.path).get(SESSION_KEY) == first

    def test_save_session_id_keeps_other_keys(self, store):
        store.mark_authenticated()
        store.save_session_id("s-2")

        assert store.get(SESSION_KEY) == "s-2"
        assert store.is_authenticated() is True

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_corrupt_file_reads_as_empty(self, tmp_path, content, caplog):
        path = tmp_path / "state.json"
        path.write_text(content)
        store = LocalStateStore(path)

        assert store.get(SESSION_KEY) is None
        assert any(r.name == "state" for r in caplog.records)

        store.save_session_id("fresh")
        assert store.get(SESSION_KEY) == "fresh"


@pytest.mark.parametrize(
    "candidate,expected,ok",
    [("secret", "secret", True), ("Secret", "secret", False), ("", "secret", False), ("sécret", "sécret", True)],
)
def test_check_password(candidate, expected, ok):
    assert check_password(candidate, expected) is ok
