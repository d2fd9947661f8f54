"""
Generic read / validate / persist handling shared by every content entity.

A ``Resource`` binds a storage key to its default value and its pydantic
schema. ``add_resource_routes`` exposes it as an admin GET/POST pair plus an
optional public read-only GET.
"""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from sitecms.auth import require_admin
from sitecms.dependencies import get_store
from sitecms.kv import KeyValueStore
from sitecms.metadata import set_updated_at

logger = logging.getLogger(__name__)

# Error type used by schema validators whose message is meant for the user.
CONTENT_ERROR = "content_error"


class PayloadError(ValueError):
    """Raised when a submitted payload cannot be stored."""


def _humanize(name: str) -> str:
    return re.sub(r"(?<!^)([A-Z])", r" \1", name).lower().capitalize()


def describe_validation_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    loc = [str(part) for part in error["loc"]]
    label = _humanize(loc[-1]) if loc else "Payload"
    if error["type"] == CONTENT_ERROR:
        return error["msg"]
    if error["type"] in ("missing", "string_too_short") or (
        error["type"] == "string_type" and error.get("input") is None
    ):
        return f"{label} is required"
    return f"Invalid value for {'.'.join(loc) or 'payload'}"


@dataclass
class Resource:
    name: str
    key: str
    label: str
    schema: type[BaseModel]
    default: Callable[[], Any]
    collection: bool = True
    public: bool = True
    variants: dict[str, "Resource"] = field(default_factory=dict)

    def variant(self, kind: Optional[str]) -> "Resource":
        if kind and kind in self.variants:
            return self.variants[kind]
        return self

    def shape(self, stored: Any) -> Any:
        """Fill in defaults for a stored value (or its absence)."""
        default = self.default()
        if stored is None:
            return default
        if self.collection:
            if isinstance(stored, list):
                return stored
        elif isinstance(stored, dict):
            return {**default, **stored}
        logger.warning(
            "Stored value for %s has unexpected type %s; serving defaults",
            self.key,
            type(stored).__name__,
        )
        return default

    def read(self, store: KeyValueStore) -> Any:
        try:
            stored = store.get(self.key)
        except Exception:
            logger.warning(
                "Reading %s failed; serving defaults", self.key, exc_info=True
            )
            stored = None
        return self.shape(stored)

    def _validate(self, payload: dict) -> dict:
        try:
            model = self.schema.model_validate(payload)
        except ValidationError as exc:
            raise PayloadError(describe_validation_error(exc)) from exc
        return model.model_dump(exclude_none=True)

    def sanitize(self, payload: Any) -> Any:
        if not self.collection:
            if not isinstance(payload, dict):
                raise PayloadError("Payload must be an object")
            return {**self.default(), **self._validate(payload)}

        if not isinstance(payload, list):
            raise PayloadError("Payload must be an array")
        items = []
        for index, raw in enumerate(payload):
            if not isinstance(raw, dict):
                raise PayloadError(
                    f"Invalid item at index {index}: expected an object"
                )
            try:
                item = self._validate(raw)
            except PayloadError as exc:
                raise PayloadError(f"Invalid item at index {index}: {exc}") from exc
            if item.get("id") is None:
                item["id"] = uuid.uuid4().hex
            items.append(item)
        return items

    def write(self, store: KeyValueStore, payload: Any) -> Any:
        """Sanitize, replace the stored value and stamp the update time."""
        value = self.sanitize(payload)
        store.set(self.key, value)
        set_updated_at(store, self.key)
        return value


async def read_json_body(request: Request) -> Any:
    """Parse the request body after guards have run; 400 on malformed JSON."""
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Bad Request: Invalid JSON")


def add_resource_routes(
    admin_router: APIRouter, public_router: APIRouter, resource: Resource
) -> None:
    def read_value(
        kind: Optional[str] = Query(None, alias="type"),
        store: KeyValueStore = Depends(get_store),
    ):
        return resource.variant(kind).read(store)

    async def save_value(
        request: Request,
        kind: Optional[str] = Query(None, alias="type"),
        _: None = Depends(require_admin),
        store: KeyValueStore = Depends(get_store),
    ):
        target = resource.variant(kind)
        payload = await read_json_body(request)
        try:
            await run_in_threadpool(target.write, store, payload)
        except PayloadError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except Exception:
            logger.exception("POST %s failed", target.key)
            raise HTTPException(
                status_code=500, detail="Internal Server Error saving data"
            )
        return {"message": f"{target.label} saved successfully"}

    path = f"/{resource.name}"
    admin_router.add_api_route(
        path, read_value, methods=["GET"], name=f"admin_{resource.name}_get"
    )
    admin_router.add_api_route(
        path, save_value, methods=["POST"], name=f"admin_{resource.name}_post"
    )
    if resource.public:
        public_router.add_api_route(
            path, read_value, methods=["GET"], name=f"public_{resource.name}_get"
        )
