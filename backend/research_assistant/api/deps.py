"""Common dependency functions for API routes."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from research_assistant.core.config import settings
from research_assistant.db import get_db
from research_assistant.services.auth import AuthenticationError, Identity, resolve_identity
from research_assistant.services.webhook_client import WebhookClient


@lru_cache
def get_webhook_client() -> WebhookClient:
    return WebhookClient(
        chat_url=settings.chat_webhook_url,
        submission_url=settings.submission_webhook_url,
        review_url=settings.review_webhook_url,
        timeout=settings.webhook_timeout,
    )


def get_current_identity(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> Identity:
    try:
        return resolve_identity(db, x_user_id)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return identity
