"""Storage and listing of past chat exchanges."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from research_assistant.models import ChatHistory, utcnow

MESSAGE_PREVIEW_CHARS = 72
RESPONSE_PREVIEW_CHARS = 84

_NEWLINES_RE = re.compile(r"\n+")


@dataclass
class HistoryEntry:
    id: str
    created_at: datetime
    message: str
    response: str
    sources: list[dict[str, Any]] = field(default_factory=list)

    @property
    def message_preview(self) -> str:
        return preview(self.message, MESSAGE_PREVIEW_CHARS)

    @property
    def response_preview(self) -> str:
        return preview(_NEWLINES_RE.sub(" ", self.response), RESPONSE_PREVIEW_CHARS)


def preview(text: str, limit: int = 60) -> str:
    """Shorten ``text`` to ``limit`` characters, ending with an ellipsis when cut."""

    return text[: limit - 1] + "…" if len(text) > limit else text


def _sample_history() -> list[HistoryEntry]:
    now = utcnow()
    return [
        HistoryEntry(
            id="sample-1",
            created_at=now - timedelta(hours=1),
            message="Summarize Hezbollah's revenue sources in 2024.",
            response=(
                "Main sources include state support, donations, commercial activity, and trade-based"
                " schemes. See CFT Report 2025 p. 109."
            ),
            sources=[
                {
                    "title": "CFT Report 2025 - p.109",
                    "url": "https://drive.google.com/file/d/1eRq4TFEoGo2gCV-pRU3jOVNVLnU1odjo/view#page=109",
                }
            ],
        ),
        HistoryEntry(
            id="sample-2",
            created_at=now - timedelta(hours=4),
            message="Quote the line about funding from Nasrallah's speech.",
            response="“Any resistance needs money.” See the clip at 00:01.",
            sources=[
                {
                    "title": "Nasrallah speech - 00:01",
                    "url": "https://drive.google.com/file/d/1fg0WgmDGVUD_MTASZxTdSQeWWgHt7MtD/view?t=1",
                }
            ],
        ),
        HistoryEntry(
            id="sample-3",
            created_at=now - timedelta(days=1),
            message="Show a cashflow summary table for 2020-2025.",
            response="\n".join(
                [
                    "| Year | Cash Balance End | Income Total | Expense Total | Net Income |",
                    "|------|------------------|--------------|---------------|------------|",
                    "| 2020 | $6,920,000       | $4,800,000   | $2,880,000    | $1,920,000 |",
                    "| 2021 | $9,110,000       | $5,240,000   | $3,050,000    | $2,190,000 |",
                    "| 2022 | $11,625,000      | $5,790,000   | $3,275,000    | $2,515,000 |",
                    "| 2023 | $14,375,000      | $6,240,000   | $3,490,000    | $2,750,000 |",
                    "| 2024 | $17,430,000      | $6,680,000   | $3,625,000    | $3,055,000 |",
                    "| 2025 | $20,760,000      | $7,120,000   | $3,790,000    | $3,330,000 |",
                ]
            ),
        ),
    ]


def record_exchange(
    db: Session,
    user_id: str,
    message: str,
    response: str,
    sources: list[dict[str, Any]],
) -> ChatHistory:
    item = ChatHistory(user_id=user_id, message=message, response=response, sources=sources)
    db.add(item)
    db.commit()
    return item


def recent_history(db: Session, user_id: str, *, limit: int = 10, use_samples: bool = False) -> list[HistoryEntry]:
    """Return the newest ``limit`` exchanges of a user.

    With ``use_samples`` a user without stored exchanges receives the built-in
    sample conversation instead of an empty list.
    """

    stmt = (
        select(ChatHistory)
        .where(ChatHistory.user_id == user_id)
        .order_by(ChatHistory.created_at.desc())
        .limit(limit)
    )
    rows = db.execute(stmt).scalars().all()
    entries = [
        HistoryEntry(
            id=row.id,
            created_at=row.created_at,
            message=row.message,
            response=row.response,
            sources=list(row.sources or []),
        )
        for row in rows
    ]
    if not entries and use_samples:
        return _sample_history()[:limit]
    return entries
