"""
Case Submission API Models

Request/response shapes for the moderation queue endpoints.
"""

from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from app.store.models import CamelModel, CaseSubmission, Locale, SubmissionLinks, SubmissionStatus


class SubmissionCreateRequest(CamelModel):
    """Public case submission form."""
    title: str = Field(..., min_length=1, max_length=200)
    one_liner: str = Field(..., min_length=1, max_length=300)
    locale: Locale
    tag_slugs: List[str] = Field(default_factory=list)
    tool_slugs: List[str] = Field(default_factory=list)
    stack_text: str = ""
    links: SubmissionLinks = Field(default_factory=SubmissionLinks)
    email: EmailStr
    notes: Optional[str] = None

    @field_validator("tag_slugs", "tool_slugs")
    @classmethod
    def clean_slugs(cls, v: List[str]) -> List[str]:
        # Keep order; blank entries from the form are dropped
        return [s.strip() for s in v if s and s.strip()]


class SubmissionCreateResponse(CamelModel):
    status: str = "success"
    submission_id: str


class PendingSubmissionsResponse(CamelModel):
    status: str = "success"
    total: int
    submissions: List[CaseSubmission]


class SubmissionApproveResponse(CamelModel):
    status: str = "success"
    submission_id: str
    case_id: str
    workflow_status: SubmissionStatus = SubmissionStatus.APPROVED


class SubmissionRejectResponse(CamelModel):
    status: str = "success"
    submission_id: str
    workflow_status: SubmissionStatus = SubmissionStatus.REJECTED
