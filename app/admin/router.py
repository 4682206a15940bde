"""
Admin Endpoints

1. POST /api/admin/verify-token - Exchange the shared secret for a session cookie
2. POST /api/admin/create-case  - Promote an intake to a draft case

Security: create-case requires the admin_token cookie.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from app.config import Settings
from app.dependencies import get_settings, get_store
from app.store import Store
from app.store.models import CamelModel

from .auth import ADMIN_COOKIE_MAX_AGE, ADMIN_COOKIE_NAME, require_admin, token_matches
from .promotion import create_case_from_intake

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
)


# =============================================
# Models
# =============================================

class VerifyTokenRequest(CamelModel):
    token: Optional[str] = None


class VerifyTokenResponse(CamelModel):
    success: bool = True


class CreateCaseRequest(CamelModel):
    # Optional so that missing fields surface as the 400 below, not a 422.
    intake_id: Optional[str] = None
    title: Optional[str] = None
    problem_description: Optional[str] = None
    desired_outcome: Optional[str] = None


class CreateCaseResponse(CamelModel):
    success: bool = True
    case_id: str
    slug: str


# =============================================
# Endpoints
# =============================================

@router.post("/verify-token", response_model=VerifyTokenResponse)
def verify_token(
    request: VerifyTokenRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
):
    expected = settings.admin_access_token
    if not expected:
        raise HTTPException(status_code=500, detail="Admin access not configured")

    if not token_matches(request.token, expected):
        logger.warning("Admin login rejected")
        raise HTTPException(status_code=401, detail="Invalid token")

    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=request.token,
        max_age=ADMIN_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return VerifyTokenResponse()


@router.post("/create-case", response_model=CreateCaseResponse)
def create_case(
    request: CreateCaseRequest,
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    """
    Create a draft NL case from an intake.

    All four fields are required and must contain more than whitespace.
    """
    fields = (request.intake_id, request.title, request.problem_description, request.desired_outcome)
    if not all(value and value.strip() for value in fields):
        raise HTTPException(status_code=400, detail="Missing required fields")

    case = create_case_from_intake(
        store,
        intake_id=request.intake_id,
        title=request.title,
        problem_description=request.problem_description,
        desired_outcome=request.desired_outcome,
    )
    return CreateCaseResponse(case_id=case.id, slug=case.slug)
