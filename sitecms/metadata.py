"""
Last-updated timestamps for stored content, kept in one side map.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sitecms.kv import KeyValueStore

META_KEY = "admin_meta"


def now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def get_meta(store: KeyValueStore) -> dict[str, str]:
    meta = store.get(META_KEY)
    return meta if isinstance(meta, dict) else {}


def set_updated_at(store: KeyValueStore, key: str) -> str:
    """Stamp `key` as updated now and return the timestamp."""
    meta = get_meta(store)
    stamp = now_iso()
    meta[key] = stamp
    store.set(META_KEY, meta)
    return stamp


def get_updated_at(store: KeyValueStore, key: str) -> Optional[str]:
    return get_meta(store).get(key)
