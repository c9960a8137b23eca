"""Tests for the chat relay, history and render endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from research_assistant.core.config import settings
from research_assistant.models import ChatHistory
from research_assistant.services.chat_history import preview, record_exchange

TABLE_REPLY = "Summary:\n| Year | Net |\n|---|---|\n| 2024 | $3 |"


def test_guest_chat_is_not_stored(client: TestClient, webhooks, db: Session) -> None:
    webhooks.chat_reply = {"response": TABLE_REPLY, "sources": [{"title": "CFT", "url": "https://x.test/a"}]}

    response = client.post("/api/chat", json={"message": "Cashflow?"})

    assert response.status_code == 200
    body = response.json()
    assert body["content"] == TABLE_REPLY
    assert body["sources"] == [{"title": "CFT", "url": "https://x.test/a"}]
    assert body["blocks"] == [
        {"type": "text", "text": "Summary:"},
        {"type": "table", "header": ["Year", "Net"], "rows": [["2024", "$3"]]},
    ]
    assert webhooks.chat_calls == [{"message": "Cashflow?", "username": "Guest"}]
    assert db.execute(select(ChatHistory)).first() is None


def test_member_chat_is_stored(client: TestClient, webhooks, db: Session, member_id: str) -> None:
    response = client.post("/api/chat", json={"message": "Hi"}, headers={"X-User-Id": member_id})

    assert response.status_code == 200
    assert webhooks.chat_calls[0]["username"] == "analyst"
    stored = db.execute(select(ChatHistory)).scalars().all()
    assert [(row.message, row.response) for row in stored] == [("Hi", "Hello from the workflow")]


def test_explicit_username_is_forwarded(client: TestClient, webhooks) -> None:
    client.post("/api/chat", json={"message": "Hi", "username": "Visitor"})

    assert webhooks.chat_calls[0]["username"] == "Visitor"


def test_blank_message_is_rejected(client: TestClient, webhooks) -> None:
    response = client.post("/api/chat", json={"message": "   "})

    assert response.status_code == 400
    assert webhooks.chat_calls == []


def test_webhook_failure(client: TestClient, webhooks, db: Session, member_id: str) -> None:
    webhooks.fail = True

    response = client.post("/api/chat", json={"message": "Hi"}, headers={"X-User-Id": member_id})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to send message"
    assert db.execute(select(ChatHistory)).first() is None


def test_history_for_guest_is_empty(client: TestClient) -> None:
    assert client.get("/api/chat/history").json() == []


def test_history_falls_back_to_samples(client: TestClient, member_id: str) -> None:
    items = client.get("/api/chat/history", headers={"X-User-Id": member_id}).json()

    assert settings.use_mock_history is True
    assert len(items) == 3
    assert items[2]["response"].startswith("| Year |")
    assert "\n" not in items[2]["response_preview"]
    assert items[2]["response_preview"].endswith("…")


def test_history_lists_newest_first(client: TestClient, db: Session, member_id: str) -> None:
    for index in range(12):
        record_exchange(db, member_id, f"question {index}", f"answer {index}", [])

    items = client.get("/api/chat/history", headers={"X-User-Id": member_id}).json()

    assert len(items) == settings.history_limit
    assert {item["message"] for item in items} <= {f"question {index}" for index in range(12)}


def test_history_previews(db: Session, member_id: str, client: TestClient) -> None:
    record_exchange(db, member_id, "q" * 100, "line one\n\n\nline two", [])

    item = client.get("/api/chat/history", headers={"X-User-Id": member_id}).json()[0]

    assert item["message_preview"] == "q" * 71 + "…"
    assert item["response_preview"] == "line one line two"


def test_preview_keeps_short_text() -> None:
    assert preview("short", 10) == "short"
    assert preview("abcdef", 5) == "abcd…"


def test_render_endpoint(client: TestClient) -> None:
    response = client.post(
        "/api/render",
        json={"content": "| a | b | |---|---| | 1 | 2 |", "class_name": "prose"},
    )

    body = response.json()
    assert body["blocks"] == [{"type": "table", "header": ["a", "b"], "rows": [["1", "2"]]}]
    assert body["html"].startswith('<div class="prose">')
    assert "<td>1</td><td>2</td>" in body["html"]


def test_render_markdown_strategy(client: TestClient) -> None:
    response = client.post("/api/render", json={"content": "## Heading", "strategy": "markdown"})

    assert "<h2>Heading</h2>" in response.json()["html"]


def test_render_rejects_unknown_strategy(client: TestClient) -> None:
    response = client.post("/api/render", json={"content": "x", "strategy": "rich"})

    assert response.status_code == 400
    assert "rich" in response.json()["detail"]
