"""
Run the content API under uvicorn: ``python -m sitecms``.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from sitecms.config import get_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the site content API")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)"
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(), format="%(levelname)s:%(name)s:%(message)s"
    )
    uvicorn.run(
        "sitecms.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
