"""Pydantic schemas for chat endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from research_assistant.schemas.render import BlockSchema


class Source(BaseModel):
    title: str
    url: str


class ChatRequest(BaseModel):
    message: str = Field(..., description="Message from the user")
    username: Optional[str] = Field(
        default=None,
        description="Display name sent to the workflow; the caller's username when omitted.",
    )


class ChatResponse(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str
    sources: List[Source] = Field(default_factory=list)
    blocks: List[BlockSchema] = Field(default_factory=list, description="Segmented content for rendering")


class HistoryItem(BaseModel):
    id: str
    created_at: datetime
    message: str
    response: str
    sources: List[Source] = Field(default_factory=list)
    message_preview: str
    response_preview: str
