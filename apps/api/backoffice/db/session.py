"""
Database session management.
"""
import logging
import time
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from backoffice.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the engine with a bounded pool, or a shared in-memory one for SQLite."""
    url = settings.sqlalchemy_url

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            url,
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=0,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            connect_args={"sslmode": "require"} if settings.DB_SSL else {},
        )

    install_query_logging(engine)
    return engine


def install_query_logging(engine: Engine) -> None:
    """Log every statement with its duration and row count at DEBUG."""

    @event.listens_for(engine, "before_cursor_execute")
    def _start_timer(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _log_query(conn, cursor, statement, parameters, context, executemany):
        started = conn.info["query_start_time"].pop()
        logger.debug(
            "Executed query",
            extra={
                "statement": statement,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "rows": cursor.rowcount,
            },
        )


settings = get_settings()

engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
