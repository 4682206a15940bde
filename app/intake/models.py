"""
Problem Intake System - Models

Pydantic models for the intake workflow:
- IntakeCreateRequest: public "describe your problem" form
- IntakeStatusRequest: admin status change
- IntakeNotesRequest: admin internal notes
- IntakeLinkCaseRequest: link an accepted intake to the case built for it

Version: intake_system_v2
"""

from typing import List, Optional

from pydantic import EmailStr, Field

from app.store.models import (
    BudgetRange,
    CamelModel,
    CompanySize,
    IntakeLanguage,
    IntakeStatus,
    ProblemIntake,
    Urgency,
)


# =============================================
# Request Models
# =============================================

class IntakeCreateRequest(CamelModel):
    """Public problem-intake form."""
    title: str = Field(..., min_length=1, max_length=200)
    problem_description: str = Field(..., min_length=1)
    desired_outcome: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    language: IntakeLanguage
    email: EmailStr
    company_size: Optional[CompanySize] = None
    budget_range: Optional[BudgetRange] = None
    urgency: Optional[Urgency] = None


class IntakeStatusRequest(CamelModel):
    status: IntakeStatus
    processed_by: Optional[str] = Field(None, description="Admin handling the intake")


class IntakeNotesRequest(CamelModel):
    internal_notes: str


class IntakeLinkCaseRequest(CamelModel):
    case_id: str = Field(..., min_length=1)


# =============================================
# Response Models
# =============================================

class IntakeCreateResponse(CamelModel):
    status: str = "success"
    intake_id: str
    workflow_status: IntakeStatus = IntakeStatus.NEW


class IntakeListResponse(CamelModel):
    status: str = "success"
    total: int
    intakes: List[ProblemIntake]


class IntakeDetailResponse(CamelModel):
    status: str = "success"
    intake: ProblemIntake
