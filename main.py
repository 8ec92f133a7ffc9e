"""
Main API module for Edgelink.

Responsibilities:
    - Serve the static shortener page at / and /index.html
    - POST /api/create: allocate a short id (custom or generated) for a long URL
    - GET /{short_id}: 302 to the stored long URL
    - Translate allocator/resolver/store errors to status codes with plain-text bodies

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory store by default; Postgres via EDGELINK_STORAGE_BACKEND.
    - IdentifierAllocator and RedirectResolver share one injected store.
    - Everything outside the short-id keyspace (health, docs) lives under /api/,
      since short ids can never contain "/".
"""

import logging
from typing import Optional

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse
from pydantic import BaseModel

from edgelink.config import settings
from edgelink.errors import IdConflict, MalformedRequest, NotFound, ShortLinkError, StoreError
from edgelink.manager.allocator import IdentifierAllocator
from edgelink.manager.resolver import RedirectResolver
from edgelink.static_page import INDEX_HTML
from edgelink.storage.base import BaseStorage
from edgelink.storage.storage_factory import get_storage


# Every method except GET; GET on any path is either the page or a redirect
OTHER_METHODS = ["HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


class CreateRequest(BaseModel):
    """Request payload for creating a new short link."""
    longUrl: Optional[str] = None
    customId: Optional[str] = None


def create_app(
    storage: Optional[BaseStorage] = None,
    write_mode: Optional[str] = None,
    public_origin: Optional[str] = None,
) -> FastAPI:
    """
    Build and configure a new FastAPI app instance.

    Args:
        storage (Optional[BaseStorage]): Mapping store; defaults to `get_storage()`,
            which picks the backend from the environment.
        write_mode (Optional[str]): "background" or "sync"; defaults to settings.WRITE_MODE.
        public_origin (Optional[str]): Origin for short URLs; defaults to
            settings.PUBLIC_ORIGIN, then to the request's base URL.

    Returns:
        FastAPI: An application with its own store, allocator and resolver.
    """
    app = FastAPI(
        title="Edgelink",
        description="URL shortener: custom or random short ids, 302 redirects",
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
    )
    log = logging.getLogger("edgelink")

    if not logging.getLogger().handlers:
        logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    if storage is None:
        storage = get_storage()
    allocator = IdentifierAllocator(storage=storage)
    resolver = RedirectResolver(storage=storage)
    mode = (write_mode or settings.WRITE_MODE).strip().lower()
    origin = (public_origin or settings.PUBLIC_ORIGIN).rstrip("/")

    app.state.storage = storage
    app.state.allocator = allocator
    app.state.resolver = resolver

    log.info("Edgelink storage backend: %s, write mode: %s", type(storage).__name__, mode)

    def _short_url(request: Request, short_id: str) -> str:
        base = origin or str(request.base_url).rstrip("/")
        return f"{base}/{short_id}"

    def _error_response(err: ShortLinkError, status_code: int) -> PlainTextResponse:
        return PlainTextResponse(str(err), status_code=status_code)

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError):
        # Only /api/create takes a body; bad JSON or wrong field types end up here
        log.debug("malformed request to %s: %s", request.url.path, exc.errors())
        return _error_response(MalformedRequest(), 400)

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    @app.get("/index.html", response_class=HTMLResponse)
    def index():
        return HTMLResponse(INDEX_HTML)

    @app.post("/api/create", status_code=201)
    def create_link(req: CreateRequest, request: Request, background_tasks: BackgroundTasks):
        """
        Create a short link.

        Returns 201 with {"shortUrl", "longUrl"}; 400 for a bad URL, custom id or
        body; 409 when the custom id is taken; 500 when the store fails.
        """
        defer = background_tasks.add_task if mode == "background" else None
        try:
            link = allocator.create(req.longUrl, req.customId, defer=defer)
        except ValueError as ve:
            # InvalidUrl / InvalidCustomId
            return PlainTextResponse(str(ve), status_code=400)
        except IdConflict as conflict:
            return _error_response(conflict, 409)
        except StoreError:
            log.exception("store write failed while creating a short link")
            return PlainTextResponse("Internal Server Error", status_code=500)

        return JSONResponse(
            {"shortUrl": _short_url(request, link.short_id), "longUrl": link.long_url},
            status_code=201,
        )

    @app.api_route(
        "/api/create",
        methods=[m for m in OTHER_METHODS if m != "POST"] + ["GET"],
        include_in_schema=False,
    )
    def create_link_wrong_method():
        return PlainTextResponse("Method not allowed", status_code=405)

    @app.get("/{short_id:path}")
    def redirect_link(short_id: str):
        """302 to the stored long URL, 404 if unknown, 500 if the store read fails."""
        try:
            long_url = resolver.resolve(short_id)
        except NotFound as nf:
            return _error_response(nf, 404)
        except StoreError:
            log.exception("store read failed for short id %r", short_id)
            return PlainTextResponse("Internal Server Error", status_code=500)
        return RedirectResponse(url=long_url, status_code=302)

    # Registered last: only requests no route above matched end up here
    @app.api_route("/{rest:path}", methods=OTHER_METHODS, include_in_schema=False)
    def not_found(rest: str):
        return PlainTextResponse("Not Found", status_code=404)

    return app


# `uvicorn main:app` and `from main import app` continue to work.
app = create_app()
