"""
Problem Intake System - Endpoints

1. POST /api/v1/intakes                  - Public intake form
2. GET  /api/v1/intakes?status=          - List intakes, newest first
3. GET  /api/v1/intakes/{id}             - Intake detail
4. POST /api/v1/intakes/{id}/status      - Move through the lifecycle
5. POST /api/v1/intakes/{id}/notes       - Replace internal notes
6. POST /api/v1/intakes/{id}/link-case   - Link an accepted intake to a case

Security: everything except the public form requires the admin_token cookie.

Version: intake_system_v2
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.admin.auth import require_admin
from app.dependencies import get_store
from app.store import Store
from app.store.models import IntakeStatus

from . import workflow
from .models import (
    IntakeCreateRequest,
    IntakeCreateResponse,
    IntakeDetailResponse,
    IntakeLinkCaseRequest,
    IntakeListResponse,
    IntakeNotesRequest,
    IntakeStatusRequest,
)


# =============================================
# Router Setup
# =============================================

router = APIRouter(
    prefix="/api/v1/intakes",
    tags=["intake"],
)


# =============================================
# Endpoints
# =============================================

@router.post("", response_model=IntakeCreateResponse, status_code=201)
def create_intake(
    request: IntakeCreateRequest,
    store: Store = Depends(get_store),
):
    """Record a problem description from the public intake form."""
    intake_id = workflow.create_intake(store, request)
    return IntakeCreateResponse(intake_id=intake_id)


@router.get("", response_model=IntakeListResponse)
def list_intakes(
    status: Optional[IntakeStatus] = Query(None, description="Filter by workflow status"),
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    intakes = workflow.list_intakes(store, status)
    return IntakeListResponse(total=len(intakes), intakes=intakes)


@router.get("/{intake_id}", response_model=IntakeDetailResponse)
def get_intake(
    intake_id: str,
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    return IntakeDetailResponse(intake=workflow.get_intake(store, intake_id))


@router.post("/{intake_id}/status", response_model=IntakeDetailResponse)
def update_status(
    intake_id: str,
    request: IntakeStatusRequest,
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    """
    Move an intake through new -> reviewing -> accepted/declined.

    Returns 409 when the move is not allowed from the current status.
    """
    intake = workflow.update_status(store, intake_id, request.status, request.processed_by)
    return IntakeDetailResponse(intake=intake)


@router.post("/{intake_id}/notes", response_model=IntakeDetailResponse)
def update_notes(
    intake_id: str,
    request: IntakeNotesRequest,
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    intake = workflow.update_notes(store, intake_id, request.internal_notes)
    return IntakeDetailResponse(intake=intake)


@router.post("/{intake_id}/link-case", response_model=IntakeDetailResponse)
def link_case(
    intake_id: str,
    request: IntakeLinkCaseRequest,
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    intake = workflow.link_case(store, intake_id, request.case_id)
    return IntakeDetailResponse(intake=intake)
