"""
Image upload validation and storage (local public directory or S3-compatible bucket).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

import boto3
from botocore.config import Config

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}
ALLOWED_CONTENT_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp"}
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class UploadRejected(ValueError):
    """Raised when an uploaded file fails validation."""


def validate_image(
    filename: Optional[str],
    content_type: Optional[str],
    size: int,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str:
    """Check an upload and return its normalized extension."""
    if size == 0:
        raise UploadRejected("Uploaded file is empty")
    if size > max_bytes:
        raise UploadRejected(
            f"File too large (max {max_bytes // (1024 * 1024)} MB)"
        )
    extension = Path(filename or "").suffix.lower().lstrip(".")
    if extension not in ALLOWED_EXTENSIONS:
        raise UploadRejected("Unsupported file type")
    if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
        raise UploadRejected("Uploaded file must be an image")
    return extension


def generate_filename(extension: str) -> str:
    return f"{uuid.uuid4().hex}.{extension}"


class UploadStorage(Protocol):
    """Writes an uploaded file and returns its public URL."""

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        ...


@dataclass
class InMemoryUploadStorage:
    """Test double for upload storage."""

    url_prefix: str = "/uploads"
    stored_objects: dict = field(default_factory=dict)

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        self.stored_objects[filename] = data
        return f"{self.url_prefix.rstrip('/')}/{filename}"


@dataclass
class LocalUploadStorage:
    """Writes uploads under a directory served as static files."""

    directory: str
    url_prefix: str = "/uploads"

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        target_dir = Path(self.directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / filename).write_bytes(data)
        return f"{self.url_prefix.rstrip('/')}/{filename}"


@dataclass
class S3UploadStorage:
    """
    S3-compatible bucket storage (AWS, Tencent COS, R2, MinIO).
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    public_base_url: str = ""
    key_prefix: str = "uploads"

    def __post_init__(self):
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
            config=config,
        )

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        key = f"{self.key_prefix}/{filename}"
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        return self._client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=7 * 24 * 3600,
        )
