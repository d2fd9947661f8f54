"""
CLI helper to populate the content store with default or exported content.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sitecms.config import get_settings
from sitecms.dependencies import build_store
from sitecms.seeding import import_dump, seed_store


def main() -> int:
    parser = argparse.ArgumentParser(description="Import site content")
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="JSON dump of {storage_key: value} to import instead of defaults",
    )
    parser.add_argument(
        "--only",
        action="append",
        default=None,
        help="Resource name or storage key to seed (repeatable)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite keys that already hold a value",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    store = build_store(get_settings())
    if not store.is_configured():
        logging.warning("No Redis URL configured; writing to the local store")

    try:
        if args.file:
            written = import_dump(store, args.file, force=args.force)
        else:
            written = seed_store(
                store, force=args.force, only=set(args.only) if args.only else None
            )
    except (OSError, ValueError) as exc:
        logging.error("Import failed: %s", exc)
        return 1

    for key in written:
        print(key)
    return 0


if __name__ == "__main__":
    sys.exit(main())
