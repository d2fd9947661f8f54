"""
Configuration and settings for the content API.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AUTH_SECRET = "fallback-secret-change-me-before-deploying"


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")
    log_level: str = Field(default="INFO")

    # Key-value store (Redis / Upstash / Vercel KV all speak the Redis protocol)
    redis_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_URL", "KV_URL", "UPSTASH_REDIS_URL"),
    )
    redis_timeout_seconds: float = Field(default=2.0)
    local_store_path: str = Field(default="data/local_store.json")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False,
        validation_alias="SITECMS_USE_IN_MEMORY_BACKENDS",
    )

    # Admin mutation guard; unset means mutations are unprotected.
    admin_api_token: Optional[str] = Field(default=None)

    # Admin UI session login
    admin_email: Optional[str] = Field(default=None)
    admin_password: Optional[str] = Field(default=None)
    auth_secret: str = Field(default=DEFAULT_AUTH_SECRET)
    session_max_age_seconds: int = Field(default=60 * 60 * 24)
    session_cookie_secure: bool = Field(default=False)
    admin_ui_dir: Optional[str] = Field(default=None)

    # Image uploads
    upload_dir: str = Field(default="public/uploads")
    upload_url_prefix: str = Field(default="/uploads")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024)

    # Optional S3-compatible bucket for uploads
    upload_bucket: Optional[str] = Field(default=None)
    upload_region: Optional[str] = Field(default=None)
    upload_endpoint: Optional[str] = Field(default=None)
    upload_public_base_url: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
