"""
Write default (or exported) content into the store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from sitecms.catalog import ALL_RESOURCES, RESOURCES_BY_KEY
from sitecms.kv import KeyValueStore
from sitecms.metadata import set_updated_at
from sitecms.resources import Resource

logger = logging.getLogger(__name__)


def seed_store(
    store: KeyValueStore,
    resources: Iterable[Resource] = ALL_RESOURCES,
    *,
    force: bool = False,
    only: Optional[set[str]] = None,
) -> list[str]:
    """
    Store each resource's default value. Keys that already hold a value are
    left alone unless ``force`` is set. Returns the keys written.
    """
    written = []
    for resource in resources:
        if only and resource.name not in only and resource.key not in only:
            continue
        if not force and store.get(resource.key) is not None:
            logger.info("Skipping %s: already populated", resource.key)
            continue
        store.set(resource.key, resource.default())
        set_updated_at(store, resource.key)
        written.append(resource.key)
    return written


def import_dump(
    store: KeyValueStore, path: str | Path, *, force: bool = False
) -> list[str]:
    """
    Import a JSON object of ``{storage_key: value}``. Each value goes through
    its resource's sanitization, so a dump can never store malformed content.
    """
    dump = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(dump, dict):
        raise ValueError(f"{path} must contain a JSON object keyed by storage key")

    written = []
    for key, value in dump.items():
        resource = RESOURCES_BY_KEY.get(key)
        if resource is None:
            logger.warning("Ignoring unknown key %s in %s", key, path)
            continue
        if not force and store.get(key) is not None:
            logger.info("Skipping %s: already populated", key)
            continue
        resource.write(store, value)
        written.append(key)
    return written
