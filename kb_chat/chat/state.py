"""Client-local persisted state: the login flag and the current session id, kept in a small JSON file."""
from __future__ import annotations

import hmac
import json
import logging
from pathlib import Path

from kb_chat.chat.session import new_session_id

log = logging.getLogger("state")

AUTH_KEY = "opera_kb_auth"
SESSION_KEY = "opera_kb_session_id"


def check_password(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


class LocalStateStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring state file %s: expected a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def is_authenticated(self) -> bool:
        return self.get(AUTH_KEY) == "true"

    def mark_authenticated(self) -> None:
        self.set(AUTH_KEY, "true")

    def load_session_id(self) -> str:
        """Stored session id, or a fresh one (which is stored)."""
        session_id = self.get(SESSION_KEY)
        if not session_id:
            session_id = new_session_id()
            self.save_session_id(session_id)
        return session_id

    def save_session_id(self, session_id: str) -> None:
        self.set(SESSION_KEY, session_id)
