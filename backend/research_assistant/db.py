"""Database engine, session factory and FastAPI session dependency."""
from __future__ import annotations

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from research_assistant.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables."""

    # Import registers the mapped classes on ``Base.metadata``.
    from research_assistant import models  # noqa: F401

    logger.info("Ensuring database schema at %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)


__all__ = ["Base", "SessionLocal", "engine", "get_db", "init_db"]
