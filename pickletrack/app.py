"""
Web server for Pickletrack.

Serves a couple of static pages plus ``/locate``, which picks a nearby bar for
the caller's position. The bar listing is loaded from disk at startup and
reloaded once a day; a separate batch job replaces the file atomically.

Browser geolocation needs HTTPS, so in production the app sits behind a TLS
terminator that sets ``X-Forwarded-Proto``; plain-HTTP and apex-domain requests
are redirected to ``https://www.``.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import FileResponse, RedirectResponse

from .catalog.config import DEFAULT_SERVER_CONFIG, ServerConfig
from .catalog.models import LocateResponse
from .catalog.scheduler import ReloadScheduler
from .catalog.scorer import locate as locate_bar
from .catalog.store import BarCatalog
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def get_catalog(request: Request) -> BarCatalog:
    """Return the catalog loaded during startup."""
    return request.app.state.catalog


def _https_www_redirect(request: Request) -> str | None:
    """Return the URL to redirect to, or ``None`` to let the request through."""
    proto = request.headers.get("x-forwarded-proto")
    if proto is None:
        # Not behind the HTTPS proxy. Allow everything.
        return None

    host = request.headers.get("host", "")
    if proto == "https" and host.startswith("www."):
        return None

    if not host.startswith("www."):
        return f"https://www.{host}"

    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return f"https://{host}{path}"


def create_app(config: ServerConfig | None = None) -> FastAPI:
    config = config or DEFAULT_SERVER_CONFIG

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        scheduler = ReloadScheduler()
        # A startup failure propagates: there is nothing to serve without data.
        app.state.catalog = BarCatalog(
            config.bars_path,
            scheduler=scheduler,
            reload_interval_seconds=config.reload_interval_seconds,
        )
        try:
            yield
        finally:
            scheduler.shutdown()

    app = FastAPI(title="Pickletrack", version="1.0.0", lifespan=lifespan)

    @app.middleware("http")
    async def https_www_only(request: Request, call_next):
        target = _https_www_redirect(request)
        if target is not None:
            return RedirectResponse(target, status_code=308)
        return await call_next(request)

    # ── Public endpoints ─────────────────────────────────────────────────

    @app.get("/health")
    def health(catalog: BarCatalog = Depends(get_catalog)) -> dict:
        return {"status": "ok", "bars": len(catalog.snapshot())}

    @app.get("/locate", response_model=LocateResponse)
    def locate(
        lat: float = Query(..., ge=-90.0, le=90.0),
        lng: float = Query(..., ge=-180.0, le=180.0),
        catalog: BarCatalog = Depends(get_catalog),
    ) -> LocateResponse:
        try:
            found = locate_bar(lat, lng, catalog.snapshot(), config.max_distance_miles)
        except Exception:
            logger.exception("Locate failed for (%s, %s)", lat, lng)
            found = None

        if found is None:
            return LocateResponse()
        bar_id, name, comment = found
        return LocateResponse(id=bar_id, name=name, comment=comment)

    # ── Static pages ────────────────────────────────────────────────────

    def index():
        return FileResponse(str(config.static_dir / "index.html"))

    # We used to have a bad permanent redirect to //, so keep answering it
    # until client caches expire.
    app.add_api_route("/", index, methods=["GET"])
    app.add_api_route("//", index, methods=["GET"], include_in_schema=False)

    @app.get("/about")
    def about():
        return FileResponse(str(config.static_dir / "about.html"))

    return app


app = create_app()
