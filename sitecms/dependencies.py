"""
Dependency wiring for the FastAPI app.

Backends are built once by the app factory and kept on ``app.state``; the
``get_*`` functions hand them to routes so tests can inject fakes.
"""

from __future__ import annotations

import logging

from fastapi import Request

from sitecms.config import Settings
from sitecms.kv import (
    InMemoryKeyValueClient,
    KeyValueClient,
    KeyValueStore,
    LocalFileStore,
    RedisKeyValueClient,
)
from sitecms.uploads import (
    InMemoryUploadStorage,
    LocalUploadStorage,
    S3UploadStorage,
    UploadStorage,
)

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> KeyValueStore:
    if settings.use_in_memory_backends:
        return KeyValueStore(local=InMemoryKeyValueClient())

    local = LocalFileStore(settings.local_store_path)
    remote: KeyValueClient | None = None
    if settings.redis_url:
        try:
            remote = RedisKeyValueClient(
                url=settings.redis_url,
                timeout_seconds=settings.redis_timeout_seconds,
            )
        except ValueError:
            logger.error("Invalid REDIS_URL; using local store only", exc_info=True)
    else:
        logger.info(
            "No Redis URL configured; content is stored in %s",
            settings.local_store_path,
        )
    return KeyValueStore(local=local, remote=remote)


def build_upload_storage(settings: Settings) -> UploadStorage:
    if settings.use_in_memory_backends:
        return InMemoryUploadStorage(url_prefix=settings.upload_url_prefix)
    if settings.upload_bucket:
        return S3UploadStorage(
            bucket=settings.upload_bucket,
            region=settings.upload_region or "",
            endpoint=settings.upload_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.upload_public_base_url or "",
        )
    return LocalUploadStorage(
        directory=settings.upload_dir, url_prefix=settings.upload_url_prefix
    )


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_upload_storage(request: Request) -> UploadStorage:
    return request.app.state.uploads
