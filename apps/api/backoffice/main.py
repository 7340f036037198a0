from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice import __version__
from backoffice.core.config import Settings, get_settings, setup_logging
from backoffice.core.exceptions import BackOfficeError
from backoffice.routers.health import router as health_router
from backoffice.routers.menu import router as menu_router
from backoffice.routers.orders import router as orders_router
from backoffice.routers.reservations import router as reservations_router
from backoffice.routers.stats import router as stats_router
from backoffice.schemas.common import fail

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as ``{success: false, error}``."""

    @app.exception_handler(BackOfficeError)
    async def backoffice_error_handler(request: Request, exc: BackOfficeError):
        return JSONResponse(status_code=exc.status_code, content=fail(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content=fail(_validation_message(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=fail(str(exc.detail)))

    # Global exception handler for unhandled errors
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content=fail(str(exc)))


def register_frontend(app: FastAPI, dist_dir: Path) -> None:
    """
    Serve the built dashboard when it is on disk.

    Known files are returned as-is, any other non-API path gets index.html
    so client-side routing works. Without a build, ``/`` answers with a
    plain status message.
    """
    index_html = dist_dir / "index.html"

    if not index_html.is_file():
        @app.get("/", include_in_schema=False, response_class=PlainTextResponse)
        def backend_status():
            return "Backend API running. Use /api/* endpoints."
        return

    dist_root = dist_dir.resolve()
    logger.info("Serving frontend bundle from %s", dist_root)

    @app.get("/{full_path:path}", include_in_schema=False)
    def spa_fallback(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            raise StarletteHTTPException(status_code=404, detail="Not Found")

        candidate = (dist_root / full_path).resolve()
        if full_path and candidate.is_file() and dist_root in candidate.parents:
            return FileResponse(candidate)
        return FileResponse(index_html)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Restaurant back-office API - menu, orders and reservations.",
        version=__version__,
    )

    register_exception_handlers(app)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(menu_router, prefix="/api")
    app.include_router(orders_router, prefix="/api")
    app.include_router(reservations_router, prefix="/api")
    app.include_router(stats_router, prefix="/api")

    # Must come last: the SPA fallback matches every path
    register_frontend(app, Path(settings.FRONTEND_DIST))

    return app


app = create_app()
