"""
HTTP routes for the content API.

Generic content entities are registered from ``sitecms.catalog``; the routes
below are the ones that do not fit the read / replace pattern.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Request,
    Response,
    UploadFile,
)
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from sitecms.auth import (
    SESSION_COOKIE,
    credentials_match,
    issue_session_token,
    require_admin,
    verify_session_token,
)
from sitecms.catalog import (
    ALL_RESOURCES,
    CONTACT,
    CONTENT_RESOURCES,
    MESSAGES,
    PARTNERS,
    PRODUCTS,
    SETTINGS,
)
from sitecms.config import Settings
from sitecms.dependencies import get_app_settings, get_store, get_upload_storage
from sitecms.kv import KeyValueStore
from sitecms.metadata import get_meta, now_iso
from sitecms.resources import add_resource_routes, read_json_body
from sitecms.schemas import (
    EMAIL_PATTERN,
    ContactFormPayload,
    LoginPayload,
    MessageDeletePayload,
    MessageUpdatePayload,
)
from sitecms.uploads import (
    UploadRejected,
    UploadStorage,
    generate_filename,
    validate_image,
)

logger = logging.getLogger(__name__)

public_router = APIRouter()
admin_router = APIRouter(prefix="/admin")
auth_router = APIRouter(prefix="/auth")

ADMIN_ONLY_CONTACT_FIELDS = ("emailNotifications",)

for _resource in CONTENT_RESOURCES:
    add_resource_routes(admin_router, public_router, _resource)


@public_router.get("/health")
def health(store: KeyValueStore = Depends(get_store)):
    return {"status": "ok", "remoteStore": store.is_configured()}


@public_router.get("/contact/data")
def public_contact(store: KeyValueStore = Depends(get_store)):
    contact = CONTACT.read(store)
    for name in ADMIN_ONLY_CONTACT_FIELDS:
        contact.pop(name, None)
    return contact


def _append_message(store: KeyValueStore, form: ContactFormPayload) -> dict:
    message = {
        "id": uuid.uuid4().hex,
        "name": form.name,
        "email": form.email,
        "subject": form.subject or "",
        "message": form.message,
        "date": now_iso(),
        "read": False,
    }
    MESSAGES.write(store, [message] + MESSAGES.read(store))
    return message


@public_router.post("/contact")
async def submit_contact_form(
    request: Request, store: KeyValueStore = Depends(get_store)
):
    payload = await read_json_body(request)
    try:
        form = ContactFormPayload.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid request payload")
    if not form.name or not form.email or not form.message:
        raise HTTPException(
            status_code=400, detail="Name, email and message are required"
        )
    if not EMAIL_PATTERN.match(form.email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    try:
        await run_in_threadpool(_append_message, store, form)
    except Exception:
        logger.exception("Saving contact form message failed")
        raise HTTPException(
            status_code=500, detail="Failed to send message. Please try again."
        )
    return {"success": True, "message": "Your message has been sent successfully!"}


# Inbox


def _save_messages(store: KeyValueStore, messages: list) -> None:
    try:
        MESSAGES.write(store, messages)
    except Exception:
        logger.exception("Saving %s failed", MESSAGES.key)
        raise HTTPException(
            status_code=500, detail="Internal Server Error saving data"
        )


def _update_read_flag(store: KeyValueStore, message_id: str, read: bool) -> None:
    messages = MESSAGES.read(store)
    matched = False
    for message in messages:
        if str(message.get("id")) == message_id:
            message["read"] = read
            matched = True
    if not matched:
        raise HTTPException(status_code=404, detail="Message not found")
    _save_messages(store, messages)


def _delete_message(store: KeyValueStore, message_id: str) -> None:
    messages = MESSAGES.read(store)
    remaining = [m for m in messages if str(m.get("id")) != message_id]
    if len(remaining) == len(messages):
        raise HTTPException(status_code=404, detail="Message not found")
    _save_messages(store, remaining)


@admin_router.get("/messages", dependencies=[Depends(require_admin)])
def list_messages(store: KeyValueStore = Depends(get_store)):
    return MESSAGES.read(store)


@admin_router.put("/messages", dependencies=[Depends(require_admin)])
async def update_message(request: Request, store: KeyValueStore = Depends(get_store)):
    payload = await read_json_body(request)
    try:
        update = MessageUpdatePayload.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid request payload")
    if update.id is None:
        raise HTTPException(status_code=400, detail="Message ID is required")
    await run_in_threadpool(_update_read_flag, store, str(update.id), update.read)
    return {"success": True, "message": "Message updated successfully"}


@admin_router.delete("/messages", dependencies=[Depends(require_admin)])
async def delete_message(request: Request, store: KeyValueStore = Depends(get_store)):
    payload = await read_json_body(request)
    try:
        target = MessageDeletePayload.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid request payload")
    if target.id is None:
        raise HTTPException(status_code=400, detail="Message ID is required")
    await run_in_threadpool(_delete_message, store, str(target.id))
    return {"success": True, "message": "Message deleted successfully"}


# Dashboard


@admin_router.get("/stats")
def dashboard_stats(store: KeyValueStore = Depends(get_store)):
    partners = PARTNERS.read(store)
    products = PRODUCTS.read(store)
    settings = SETTINGS.read(store)
    contact = CONTACT.read(store)
    try:
        meta = get_meta(store)
    except Exception:
        logger.warning("Reading update timestamps failed", exc_info=True)
        meta = {}

    recent = [
        {
            "section": resource.label,
            "key": resource.key,
            "updatedAt": meta[resource.key],
        }
        for resource in ALL_RESOURCES
        if meta.get(resource.key)
    ]
    recent.sort(key=lambda item: item["updatedAt"], reverse=True)

    payload = {
        "stats": [
            {"id": "partners", "title": "Partners", "value": str(len(partners))},
            {"id": "products", "title": "Products", "value": str(len(products))},
            {
                "id": "site",
                "title": "Site name",
                "value": settings.get("siteName", ""),
            },
            {
                "id": "contact",
                "title": "Primary contact",
                "value": contact.get("email") or "Not set",
            },
        ],
        "recentUpdates": recent,
    }
    if recent:
        payload["lastUpdated"] = recent[0]["updatedAt"]
    return payload


# Uploads


@admin_router.post("/upload", dependencies=[Depends(require_admin)])
async def upload_image(
    file: Optional[UploadFile] = File(None),
    uploads: UploadStorage = Depends(get_upload_storage),
    settings: Settings = Depends(get_app_settings),
):
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    # Read one byte past the limit so oversized files are caught without
    # buffering the whole body.
    data = await file.read(settings.max_upload_bytes + 1)
    try:
        extension = validate_image(
            file.filename, file.content_type, len(data), settings.max_upload_bytes
        )
    except UploadRejected as exc:
        logger.info("Rejected upload %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    filename = generate_filename(extension)
    try:
        url = await run_in_threadpool(uploads.save, filename, data, file.content_type)
    except Exception:
        logger.exception("Saving upload %s failed", filename)
        raise HTTPException(status_code=500, detail="Error saving file")
    return {"imageUrl": url, "success": True}


# Admin UI sessions


@auth_router.post("/login")
def login(
    payload: LoginPayload,
    response: Response,
    settings: Settings = Depends(get_app_settings),
):
    if not credentials_match(settings, payload.email, payload.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = issue_session_token(settings.auth_secret, settings.session_max_age_seconds)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )
    return {"success": True}


@auth_router.post("/logout")
def logout(response: Response):
    response.delete_cookie(SESSION_COOKIE, path="/")
    return {"success": True}


@auth_router.get("/session")
def session_status(request: Request, settings: Settings = Depends(get_app_settings)):
    token = request.cookies.get(SESSION_COOKIE)
    return {"authenticated": verify_session_token(token, settings.auth_secret)}
