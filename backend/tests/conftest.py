"""Shared fixtures: in-memory database, stub webhooks and an API client."""

from __future__ import annotations

from typing import Any, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from research_assistant import models  # noqa: F401
from research_assistant.api.deps import get_webhook_client
from research_assistant.db import Base, get_db
from research_assistant.main import app
from research_assistant.services.auth import create_user
from research_assistant.services.webhook_client import ChatReply, WebhookError, extract_reply, extract_sources


class StubWebhookClient:
    """Records payloads instead of calling the workflow webhooks."""

    def __init__(self) -> None:
        self.chat_reply: Dict[str, Any] = {"response": "Hello from the workflow"}
        self.submission_reply: Dict[str, Any] = {"ok": True}
        self.review_reply: Dict[str, Any] = {"ok": True}
        self.fail = False
        self.chat_calls: List[Dict[str, str]] = []
        self.submissions: List[Dict[str, Any]] = []
        self.reviews: List[Dict[str, Any]] = []

    def _check(self) -> None:
        if self.fail:
            raise WebhookError("webhook unavailable")

    def send_chat_message(self, message: str, username: str) -> ChatReply:
        self._check()
        self.chat_calls.append({"message": message, "username": username})
        data = self.chat_reply
        return ChatReply(content=extract_reply(data), sources=extract_sources(data), raw=data)

    def submit_source(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._check()
        self.submissions.append(payload)
        return self.submission_reply

    def review_submission(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._check()
        self.reviews.append(payload)
        return self.review_reply


@pytest.fixture
def session_factory() -> Generator[sessionmaker, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def webhooks() -> StubWebhookClient:
    return StubWebhookClient()


@pytest.fixture
def client(session_factory: sessionmaker, webhooks: StubWebhookClient) -> Generator[TestClient, None, None]:
    def _get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_webhook_client] = lambda: webhooks
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def member_id(db: Session) -> str:
    return create_user(db, "analyst", "s3cret").id


@pytest.fixture
def admin_id(db: Session) -> str:
    return create_user(db, "chief", "adm1n", roles=["admin"]).id
