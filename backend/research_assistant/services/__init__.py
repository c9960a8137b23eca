"""Service layer for the application."""

from research_assistant.services.auth import AuthenticationError, Identity
from research_assistant.services.submissions import (
    SubmissionAlreadyReviewedError,
    SubmissionNotFoundError,
    UnsupportedAttachmentError,
)
from research_assistant.services.webhook_client import ChatReply, WebhookClient, WebhookError

__all__ = [
    "AuthenticationError",
    "ChatReply",
    "Identity",
    "SubmissionAlreadyReviewedError",
    "SubmissionNotFoundError",
    "UnsupportedAttachmentError",
    "WebhookClient",
    "WebhookError",
]
