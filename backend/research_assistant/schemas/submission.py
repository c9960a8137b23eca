"""Schemas for source submission and review endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    contributor_name: str
    title: str
    description: str
    terror_organization: str
    filename: Optional[str] = None
    file_url: Optional[str] = None
    status: str
    created_at: datetime
    reviewed_at: Optional[datetime] = None


class OrganizationsResponse(BaseModel):
    organizations: List[str]


class ReviewRequest(BaseModel):
    decision: Literal["approved", "declined"] = Field(..., description="Outcome of the review")
    contributor_name: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    terror_organization: str = Field(..., min_length=1)
