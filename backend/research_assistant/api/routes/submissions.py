"""Endpoints for contributing new sources."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from research_assistant.api.deps import get_current_identity, get_webhook_client
from research_assistant.db import get_db
from research_assistant.schemas.submission import OrganizationsResponse, SubmissionOut
from research_assistant.services.auth import Identity
from research_assistant.services.submissions import (
    ORGANIZATIONS,
    Attachment,
    SourceForm,
    UnsupportedAttachmentError,
    submit_source,
)
from research_assistant.services.webhook_client import WebhookClient, WebhookError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.get("/organizations", response_model=OrganizationsResponse)
def organizations() -> OrganizationsResponse:
    return OrganizationsResponse(organizations=list(ORGANIZATIONS))


@router.post("", response_model=SubmissionOut, status_code=201)
async def create_submission(
    contributor_name: str = Form(...),
    title: str = Form(...),
    description: str = Form(...),
    terror_organization: str = Form(...),
    file: Optional[UploadFile] = File(default=None),
    identity: Identity = Depends(get_current_identity),
    client: WebhookClient = Depends(get_webhook_client),
    db: Session = Depends(get_db),
) -> SubmissionOut:
    form = SourceForm(
        contributor_name=contributor_name,
        title=title,
        description=description,
        terror_organization=terror_organization,
    )
    attachment = None
    if file is not None and file.filename:
        attachment = Attachment(filename=file.filename, content_type=file.content_type, payload=await file.read())

    try:
        submission = await run_in_threadpool(submit_source, db, client, form, identity, attachment)
    except UnsupportedAttachmentError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except WebhookError as exc:
        logger.error("Submission webhook failed: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to submit source") from exc
    return SubmissionOut.model_validate(submission)
