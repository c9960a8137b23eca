"""Chat endpoints relaying messages to the chat workflow."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from research_assistant.api.deps import get_current_identity, get_webhook_client
from research_assistant.core.config import settings
from research_assistant.db import get_db
from research_assistant.rendering import segment
from research_assistant.schemas.chat import ChatRequest, ChatResponse, HistoryItem
from research_assistant.schemas.render import block_to_schema
from research_assistant.services.auth import Identity
from research_assistant.services.chat_history import record_exchange, recent_history
from research_assistant.services.webhook_client import WebhookClient, WebhookError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
def chat(
    payload: ChatRequest,
    identity: Identity = Depends(get_current_identity),
    client: WebhookClient = Depends(get_webhook_client),
    db: Session = Depends(get_db),
) -> ChatResponse:
    """Relay a message to the chat workflow and keep the exchange for members."""

    if not payload.message.strip():
        raise HTTPException(status_code=400, detail="Message is empty")

    username = payload.username or identity.username
    try:
        reply = client.send_chat_message(payload.message, username)
    except WebhookError as exc:
        logger.error("Chat webhook failed: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to send message") from exc

    if not identity.is_guest and identity.id:
        record_exchange(db, identity.id, payload.message, reply.content, reply.sources)

    return ChatResponse(
        content=reply.content,
        sources=reply.sources,
        blocks=[block_to_schema(block) for block in segment(reply.content)],
    )


@router.get("/history", response_model=list[HistoryItem])
def history(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> list[HistoryItem]:
    if identity.is_guest or not identity.id:
        return []
    entries = recent_history(
        db,
        identity.id,
        limit=settings.history_limit,
        use_samples=settings.use_mock_history,
    )
    return [
        HistoryItem(
            id=entry.id,
            created_at=entry.created_at,
            message=entry.message,
            response=entry.response,
            sources=entry.sources,
            message_preview=entry.message_preview,
            response_preview=entry.response_preview,
        )
        for entry in entries
    ]
