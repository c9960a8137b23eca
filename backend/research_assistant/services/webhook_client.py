"""Client wrapper around the workflow webhooks (chat, submission, review)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response received"


class WebhookError(RuntimeError):
    """Raised when a webhook cannot be reached or answers unexpectedly."""


@dataclass
class ChatReply:
    """Assistant answer returned by the chat workflow."""

    content: str
    sources: List[Dict[str, str]] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)


class WebhookClient:
    """Synchronous HTTP client for the workflow webhooks."""

    def __init__(
        self,
        *,
        chat_url: str,
        submission_url: str,
        review_url: str,
        timeout: float = 60.0,
    ) -> None:
        self.chat_url = chat_url
        self.submission_url = submission_url
        self.review_url = review_url
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def send_chat_message(self, message: str, username: str) -> ChatReply:
        """Ask the chat workflow and normalise its answer."""

        data = self._post(self.chat_url, {"message": message, "username": username})
        return ChatReply(content=extract_reply(data), sources=extract_sources(data), raw=data)

    def submit_source(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Forward a contributed source (metadata plus optional data URL)."""

        return self._post(self.submission_url, payload)

    def review_submission(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Forward an approve/decline decision for a submission."""

        return self._post(self.review_url, payload)

    # ------------------------------------------------------------------
    # Helper HTTP methods
    # ------------------------------------------------------------------
    def _post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("POST %s", url)
        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise WebhookError(f"Failed to reach webhook at {url}: {exc}") from exc
        if not response.ok:
            raise WebhookError(f"Webhook POST {url} failed with status {response.status_code}: {response.text}")
        try:
            data = response.json()
        except ValueError as exc:
            raise WebhookError(f"Webhook {url} returned a non-JSON body") from exc
        # Workflow engines commonly wrap single items in a list.
        if isinstance(data, list) and len(data) == 1 and isinstance(data[0], dict):
            data = data[0]
        if not isinstance(data, dict):
            raise WebhookError(f"Unexpected payload from webhook {url}: {type(data).__name__}")
        return data


def extract_reply(data: Dict[str, Any]) -> str:
    """Return the assistant text, preferring ``response`` over ``message``."""

    for key in ("response", "message"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return NO_RESPONSE_TEXT


def extract_sources(data: Dict[str, Any]) -> List[Dict[str, str]]:
    """Return the ``{title, url}`` citations of a reply, skipping malformed entries."""

    sources = data.get("sources")
    if not isinstance(sources, list):
        return []
    cleaned: List[Dict[str, str]] = []
    for item in sources:
        if not isinstance(item, dict):
            continue
        url = item.get("url")
        if not isinstance(url, str) or not url:
            continue
        title: Optional[str] = item.get("title") if isinstance(item.get("title"), str) else None
        cleaned.append({"title": title or url, "url": url})
    return cleaned
