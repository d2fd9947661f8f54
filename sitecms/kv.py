"""
Key-value store abstraction: Redis when configured, a local JSON file otherwise.

Every content entity lives under a single string key as one JSON value. Remote
failures (connection, auth, timeout) never propagate to callers; they are logged
and the local file store takes over for that call.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Protocol

import redis

logger = logging.getLogger(__name__)


def _copy(value: Any) -> Any:
    # Round-trip through JSON so stored state is never shared with callers.
    if value is None:
        return None
    return json.loads(json.dumps(value, default=str))


class KeyValueClient(Protocol):
    """Operations the API needs from a key-value backend."""

    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


@dataclass
class InMemoryKeyValueClient:
    """Dict-backed store for tests and local development."""

    items: dict = field(default_factory=dict)

    def get(self, key: str) -> Any:
        return _copy(self.items.get(key))

    def set(self, key: str, value: Any) -> None:
        self.items[key] = _copy(value)

    def reset(self) -> None:
        self.items.clear()


class LocalFileStore:
    """
    File-backed JSON map, loaded lazily on first access and cached in memory.

    Each write persists the whole map, creating parent directories as needed.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._cache: Optional[dict] = None
        self._lock = threading.Lock()

    def _set_aside(self) -> None:
        # Keep the unreadable file so the next write cannot destroy it.
        target = self.path.with_name(self.path.name + ".corrupt")
        try:
            os.replace(self.path, target)
        except OSError:
            logger.error(
                "Could not move unreadable store %s aside", self.path, exc_info=True
            )
        else:
            logger.warning("Moved unreadable store %s to %s", self.path, target)

    def _load(self) -> dict:
        if self._cache is not None:
            return self._cache
        data: dict = {}
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8") or "{}")
            except (OSError, ValueError):
                logger.warning(
                    "Local store %s is unreadable; starting empty",
                    self.path,
                    exc_info=True,
                )
                self._set_aside()
            else:
                if isinstance(loaded, dict):
                    data = loaded
                else:
                    logger.warning("Local store %s is not a JSON object", self.path)
                    self._set_aside()
        self._cache = data
        return data

    def _persist(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Any:
        with self._lock:
            return _copy(self._load().get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            updated = {**self._load(), key: _copy(value)}
            # The cache only changes once the file holds the new map.
            self._persist(updated)
            self._cache = updated


@dataclass
class RedisKeyValueClient:
    """Redis-backed store; values are JSON strings."""

    url: str
    timeout_seconds: float = 2.0

    def __post_init__(self):
        # Socket deadlines keep a hung server from blocking a request forever.
        self.client = redis.Redis.from_url(
            self.url,
            socket_timeout=self.timeout_seconds,
            socket_connect_timeout=self.timeout_seconds,
            decode_responses=True,
        )

    def get(self, key: str) -> Any:
        raw = self.client.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self.client.set(key, json.dumps(value, default=str))


class KeyValueStore:
    """
    Facade used by the routes: remote first, local fallback on any remote error.
    """

    def __init__(
        self,
        local: KeyValueClient,
        remote: Optional[KeyValueClient] = None,
    ):
        self.local = local
        self.remote = remote

    def is_configured(self) -> bool:
        """Whether a remote backend is configured (diagnostics only)."""
        return self.remote is not None

    def get(self, key: str) -> Any:
        if self.remote is not None:
            try:
                return self.remote.get(key)
            except Exception:
                logger.warning(
                    "Remote get failed for %s; using local store", key, exc_info=True
                )
        return self.local.get(key)

    def set(self, key: str, value: Any) -> None:
        if self.remote is not None:
            try:
                self.remote.set(key, value)
                return
            except Exception:
                logger.warning(
                    "Remote set failed for %s; using local store", key, exc_info=True
                )
        self.local.set(key, value)
