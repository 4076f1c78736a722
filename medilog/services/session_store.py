from __future__ import annotations

import json
import os
import secrets
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from medilog.core.config import settings
from medilog.models.user import User
from medilog.services.logger import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Key-value pairs kept in one JSON file on disk.
    The whole file is rewritten on every change.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %r", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class SessionStore:
    """
    The identity of the signed-in user, cached in memory and persisted
    under a single key of the backing store.
    """

    def __init__(self, store: KeyValueStore, key: str = "medilog-user"):
        self.store = store
        self.key = key
        self._user: Optional[User] = None

    @property
    def current(self) -> Optional[User]:
        return self._user

    def load(self) -> Optional[User]:
        raw = self.store.get(self.key)
        if not raw:
            self._user = None
            return None

        try:
            self._user = User.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable session: %s", e)
            self._user = None
        return self._user

    def save(self, user: User) -> None:
        self._user = user
        self.store.set(self.key, user.model_dump_json())

    def clear(self) -> None:
        self._user = None
        self.store.delete(self.key)


class SessionManager:
    """
    Hands out one SessionStore per client session token. All sessions
    share the backing store, each under "<prefix>:<token>".
    """

    def __init__(self, store: KeyValueStore, key_prefix: str = "medilog-user"):
        self.store = store
        self.key_prefix = key_prefix

    @staticmethod
    def new_token() -> str:
        return secrets.token_urlsafe(32)

    def open(self, token: Optional[str]) -> SessionStore:
        """
        The session for `token`, loaded from the store. Without a token the
        client gets an empty session that is never persisted.
        """
        if not token:
            return SessionStore(MemoryStore(), key=self.key_prefix)
        session = SessionStore(self.store, key=f"{self.key_prefix}:{token}")
        session.load()
        return session


def build_session_manager() -> SessionManager:
    """Sessions backed by SESSION_FILE, or in memory when it is empty."""
    store: KeyValueStore
    if settings.SESSION_FILE:
        store = JsonFileStore(settings.SESSION_FILE)
    else:
        store = MemoryStore()
    return SessionManager(store, key_prefix=settings.SESSION_KEY)
