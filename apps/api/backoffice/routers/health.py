"""
Health check router with database connectivity verification.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from backoffice.core.config import Settings, get_settings
from backoffice.db.session import get_db
from backoffice.schemas.common import fail, ok

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """Basic health check - always returns OK."""
    return ok({"status": "ok"})


@router.get("/db-health")
def db_health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Verify database connectivity with ``SELECT 1``.

    Reports which connection settings are in use (never the password).
    Returns 500 with the driver error when the database is unreachable.
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=fail(str(e)),
        )

    return ok({
        "status": "ok",
        "database_url_set": bool(settings.DATABASE_URL),
        "db_host": settings.DB_HOST,
        "db_port": settings.DB_PORT,
        "db_name": settings.DB_NAME,
        "db_user": settings.DB_USER,
        "db_ssl": settings.DB_SSL,
    })
