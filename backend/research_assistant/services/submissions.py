"""Source submissions and their admin review."""

from __future__ import annotations

import base64
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from research_assistant.models import PENDING_STATUS, Submission, utcnow
from research_assistant.services.auth import Identity
from research_assistant.services.webhook_client import WebhookClient

logger = logging.getLogger(__name__)

Decision = Literal["approved", "declined"]

ORGANIZATIONS = (
    "Hamas",
    "Hezbollah",
    "ISIS",
    "Al-Qaeda",
    "Taliban",
    "Boko Haram",
    "Al-Shabaab",
    "Other",
)

ALLOWED_ATTACHMENT_SUFFIXES = {".pdf", ".doc", ".docx", ".txt"}


class UnsupportedAttachmentError(RuntimeError):
    """Raised when an uploaded file type is not accepted."""


class SubmissionNotFoundError(LookupError):
    """Raised when a submission id does not exist."""


class SubmissionAlreadyReviewedError(RuntimeError):
    """Raised when a decision is posted for a submission that left the queue."""


@dataclass
class SourceForm:
    contributor_name: str
    title: str
    description: str
    terror_organization: str

    def validate(self) -> None:
        for name in ("contributor_name", "title", "description", "terror_organization"):
            if not getattr(self, name).strip():
                raise ValueError(f"Field '{name}' is required")


@dataclass
class Attachment:
    filename: str
    content_type: Optional[str]
    payload: bytes

    def check_supported(self) -> None:
        suffix = Path(self.filename or "").suffix.lower()
        if suffix not in ALLOWED_ATTACHMENT_SUFFIXES:
            allowed = ", ".join(sorted(ALLOWED_ATTACHMENT_SUFFIXES))
            raise UnsupportedAttachmentError(f"Only {allowed} files are accepted")

    def to_data_url(self) -> str:
        """Encode the file the way a browser ``readAsDataURL`` call does."""

        content_type = self.content_type or mimetypes.guess_type(self.filename)[0] or "application/octet-stream"
        encoded = base64.b64encode(self.payload).decode("ascii")
        return f"data:{content_type};base64,{encoded}"


@dataclass
class ReviewEdits:
    contributor_name: str
    title: str
    description: str
    terror_organization: str


def submit_source(
    db: Session,
    client: WebhookClient,
    form: SourceForm,
    submitter: Identity,
    attachment: Optional[Attachment] = None,
) -> Submission:
    """Forward a contribution to the submission workflow and queue it for review."""

    form.validate()
    if attachment is not None:
        attachment.check_supported()

    payload = {
        "contributorName": form.contributor_name,
        "title": form.title,
        "description": form.description,
        "terrorOrganization": form.terror_organization,
        "filename": attachment.filename if attachment else None,
        "file": attachment.to_data_url() if attachment else "",
        "username": submitter.username,
        "userID": submitter.id,
    }
    data = client.submit_source(payload)

    file_url = data.get("drive_url") or data.get("file_url")
    submission = Submission(
        contributor_name=form.contributor_name,
        title=form.title,
        description=form.description,
        terror_organization=form.terror_organization,
        filename=attachment.filename if attachment else None,
        file_url=file_url if isinstance(file_url, str) else None,
        status=PENDING_STATUS,
        submitted_by=submitter.username,
        user_id=submitter.id,
    )
    db.add(submission)
    db.commit()
    logger.info("Submission %s queued by %s", submission.id, submitter.username)
    return submission


def pending_submissions(db: Session) -> list[Submission]:
    stmt = select(Submission).where(Submission.status == PENDING_STATUS).order_by(Submission.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def review_submission(
    db: Session,
    client: WebhookClient,
    submission_id: str,
    decision: Decision,
    edits: ReviewEdits,
    reviewer: Identity,
) -> Submission:
    """Send the decision to the review workflow, then close the submission."""

    submission = db.get(Submission, submission_id)
    if submission is None:
        raise SubmissionNotFoundError(f"Submission {submission_id} not found")
    if submission.status != PENDING_STATUS:
        raise SubmissionAlreadyReviewedError(f"Submission {submission_id} is already {submission.status}")

    payload = {
        "submissionId": submission.id,
        "decision": decision,
        "contributor_name": edits.contributor_name,
        "title": edits.title,
        "description": edits.description,
        "terror_organization": edits.terror_organization,
        "filename": submission.filename,
        "drive_url": submission.file_url,
        "username": reviewer.username,
    }
    client.review_submission(payload)

    submission.status = decision
    submission.reviewed_at = utcnow()
    db.commit()
    logger.info("Submission %s %s by %s", submission.id, decision, reviewer.username)
    return submission
