"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from research_assistant.core.config import settings
from research_assistant.db import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", tags=["system"])
def healthcheck(db: Session = Depends(get_db)) -> dict[str, str | bool]:
    """Readiness probe including a database round trip."""

    try:
        db.execute(text("SELECT 1"))
        database = True
    except SQLAlchemyError as exc:
        logger.warning("Database health check failed: %s", exc)
        database = False
    return {"status": "ok", "environment": settings.environment, "database": database}
