"""
Case Submission Endpoints

1. POST /api/v1/submissions - public submission (queued as pending)
2. GET  /api/v1/submissions/pending - moderation queue, oldest first
3. POST /api/v1/submissions/{id}/approve - publish as a Case
4. POST /api/v1/submissions/{id}/reject - reject, no other record touched

Moderation endpoints require the admin cookie.
"""

from fastapi import APIRouter, Depends

from app.admin.auth import require_admin
from app.dependencies import get_store
from app.store import Store

from . import workflow
from .models import (
    PendingSubmissionsResponse,
    SubmissionApproveResponse,
    SubmissionCreateRequest,
    SubmissionCreateResponse,
    SubmissionRejectResponse,
)

router = APIRouter(
    prefix="/api/v1/submissions",
    tags=["submissions"],
)


@router.post("", response_model=SubmissionCreateResponse, status_code=201)
def create_submission(
    request: SubmissionCreateRequest,
    store: Store = Depends(get_store),
):
    submission_id = workflow.create_submission(store, request)
    return SubmissionCreateResponse(submission_id=submission_id)


@router.get("/pending", response_model=PendingSubmissionsResponse)
def list_pending(
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    submissions = workflow.list_pending(store)
    return PendingSubmissionsResponse(total=len(submissions), submissions=submissions)


@router.post("/{submission_id}/approve", response_model=SubmissionApproveResponse)
def approve_submission(
    submission_id: str,
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    """
    Approve a pending submission.

    Creates missing tags/tools, publishes the Case, marks the submission
    approved. 404 if unknown, 409 if not pending.
    """
    case_id = workflow.approve(store, submission_id)
    return SubmissionApproveResponse(submission_id=submission_id, case_id=case_id)


@router.post("/{submission_id}/reject", response_model=SubmissionRejectResponse)
def reject_submission(
    submission_id: str,
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    workflow.reject(store, submission_id)
    return SubmissionRejectResponse(submission_id=submission_id)
