"""Admin review queue endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from research_assistant.api.deps import get_webhook_client, require_admin
from research_assistant.db import get_db
from research_assistant.schemas.submission import ReviewRequest, SubmissionOut
from research_assistant.services.auth import Identity
from research_assistant.services.submissions import (
    ReviewEdits,
    SubmissionAlreadyReviewedError,
    SubmissionNotFoundError,
    pending_submissions,
    review_submission,
)
from research_assistant.services.webhook_client import WebhookClient, WebhookError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/review", tags=["review"])


@router.get("/submissions", response_model=list[SubmissionOut])
def list_pending(
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[SubmissionOut]:
    """Submissions waiting for a decision, newest first."""

    return [SubmissionOut.model_validate(item) for item in pending_submissions(db)]


@router.post("/submissions/{submission_id}", response_model=SubmissionOut)
def decide(
    submission_id: str,
    payload: ReviewRequest,
    reviewer: Identity = Depends(require_admin),
    client: WebhookClient = Depends(get_webhook_client),
    db: Session = Depends(get_db),
) -> SubmissionOut:
    edits = ReviewEdits(
        contributor_name=payload.contributor_name,
        title=payload.title,
        description=payload.description,
        terror_organization=payload.terror_organization,
    )
    try:
        submission = review_submission(db, client, submission_id, payload.decision, edits, reviewer)
    except SubmissionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SubmissionAlreadyReviewedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except WebhookError as exc:
        logger.error("Review webhook failed: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to review submission") from exc
    return SubmissionOut.model_validate(submission)
