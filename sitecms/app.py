"""
FastAPI application entry point.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitecms.auth import SESSION_COOKIE, verify_session_token
from sitecms.config import DEFAULT_AUTH_SECRET, Settings, get_settings
from sitecms.dependencies import build_store, build_upload_storage
from sitecms.kv import KeyValueStore
from sitecms.routes import admin_router, auth_router, public_router
from sitecms.uploads import UploadStorage

logger = logging.getLogger(__name__)

ADMIN_UI_PREFIX = "/admin"
ADMIN_LOGIN_PATH = "/admin/login"


def _needs_admin_session(path: str) -> bool:
    if path != ADMIN_UI_PREFIX and not path.startswith(ADMIN_UI_PREFIX + "/"):
        return False
    is_login = path == ADMIN_LOGIN_PATH or path.startswith(ADMIN_LOGIN_PATH + "/")
    return not is_login


def _warn_on_permissive_defaults(settings: Settings) -> None:
    if not settings.admin_api_token:
        logger.warning("ADMIN_API_TOKEN is not set; admin mutations are unprotected")
    if settings.auth_secret == DEFAULT_AUTH_SECRET:
        logger.warning("AUTH_SECRET is not set; admin sessions use a fallback secret")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    uploads: Optional[UploadStorage] = None,
) -> FastAPI:
    settings = settings or get_settings()
    _warn_on_permissive_defaults(settings)

    app = FastAPI(title="Site CMS", version="0.1.0")
    app.state.settings = settings
    app.state.store = store or build_store(settings)
    app.state.uploads = uploads or build_upload_storage(settings)

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(admin_router, prefix=settings.api_prefix)
    app.include_router(public_router, prefix=settings.api_prefix)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            message = "Bad Request: Invalid JSON"
        else:
            message = "Invalid request payload"
        return JSONResponse({"error": message}, status_code=400)

    @app.middleware("http")
    async def admin_session(request: Request, call_next):
        path = request.url.path
        if _needs_admin_session(path):
            token = request.cookies.get(SESSION_COOKIE)
            if not verify_session_token(token, settings.auth_secret):
                logger.info("Redirecting unauthenticated request for %s", path)
                return RedirectResponse(ADMIN_LOGIN_PATH)
        return await call_next(request)

    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )
    if settings.admin_ui_dir:
        app.mount(
            ADMIN_UI_PREFIX,
            StaticFiles(directory=settings.admin_ui_dir, html=True),
            name="admin-ui",
        )
    return app


app = create_app()
