# app/db/session.py
# Database session management
#
# The store handle is never a process-wide client: every endpoint receives its
# own Session via Depends(get_db), and tests swap get_db for an in-memory
# engine through app.dependency_overrides.

import logging
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

log = logging.getLogger("notifications.db")


def _engine_options(database_url: str) -> Dict[str, Any]:
    """
    Pool tuning for PostgreSQL. SQLite (local experiments, tests) uses the
    SQLAlchemy defaults because its pools reject size/overflow arguments.
    """
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # test connection before each use
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 1800,  # Recycle connections every 30 min
    }


def build_engine(database_url: str) -> Engine:
    return create_engine(
        database_url,
        echo=settings.debug and not settings.is_production,
        **_engine_options(database_url),
    )


# ── Engine ────────────────────────────────────────────────────────────────────
engine = build_engine(settings.database_url)

# ── Session Factory ───────────────────────────────────────────────────────────
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,  # Prevents lazy load errors after commit
)


# ── FastAPI Dependency ────────────────────────────────────────────────────────
def get_db() -> Generator[Session, None, None]:
    """
    Dependency injected into every FastAPI endpoint that needs DB access.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            ...

    Guarantees the session is always closed, even on exceptions.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# ── Health Check Helper ───────────────────────────────────────────────────────
def check_db_connection() -> bool:
    """
    Used by /health endpoint to verify DB connectivity.
    Returns True if connected, False otherwise.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        log.warning("Database connectivity check failed", exc_info=True)
        return False
