"""
Problem Intake Workflow

Lifecycle:
    new       -> reviewing | accepted | declined
    reviewing -> accepted | declined
    accepted, declined: terminal

Status changes are a compare-and-set on the status read at the start of the
session, so two admins moving the same intake cannot both win.

Case linkage: link_case() only accepts intakes that reached `accepted` and
a case that exists. The case itself is created by the admin promotion
endpoint (app/admin/router.py); linking is a separate, explicit step.
"""

import logging
from typing import Dict, FrozenSet, List, Optional

from app.shared.errors import InvalidState, NotFound
from app.store import Store, StoreSession
from app.store.models import IntakeStatus, ProblemIntake, new_id, utcnow

from .models import IntakeCreateRequest

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[IntakeStatus, FrozenSet[IntakeStatus]] = {
    IntakeStatus.NEW: frozenset({IntakeStatus.REVIEWING, IntakeStatus.ACCEPTED, IntakeStatus.DECLINED}),
    IntakeStatus.REVIEWING: frozenset({IntakeStatus.ACCEPTED, IntakeStatus.DECLINED}),
    IntakeStatus.ACCEPTED: frozenset(),
    IntakeStatus.DECLINED: frozenset(),
}


def can_transition(current: IntakeStatus, target: IntakeStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def _load(session: StoreSession, intake_id: str) -> ProblemIntake:
    intake = session.intakes.get(intake_id)
    if not intake:
        raise NotFound(f"Intake not found: {intake_id}")
    return intake


def create_intake(store: Store, request: IntakeCreateRequest) -> str:
    intake = ProblemIntake(
        id=new_id(),
        title=request.title,
        problem_description=request.problem_description,
        desired_outcome=request.desired_outcome,
        country=request.country,
        language=request.language,
        email=str(request.email),
        company_size=request.company_size,
        budget_range=request.budget_range,
        urgency=request.urgency,
        status=IntakeStatus.NEW,
        created_at=utcnow(),
    )
    with store.session() as s:
        intake_id = s.intakes.insert(intake)
    logger.info(f"Problem intake {intake_id} received ({request.language.value}, {request.country})")
    return intake_id


def list_intakes(store: Store, status: Optional[IntakeStatus] = None) -> List[ProblemIntake]:
    """Newest first."""
    with store.session() as s:
        return s.intakes.list(status)


def get_intake(store: Store, intake_id: str) -> ProblemIntake:
    with store.session() as s:
        return _load(s, intake_id)


def update_status(
    store: Store,
    intake_id: str,
    status: IntakeStatus,
    processed_by: Optional[str] = None,
) -> ProblemIntake:
    with store.session() as s:
        intake = _load(s, intake_id)
        if not can_transition(intake.status, status):
            raise InvalidState(
                f"Cannot move intake from {intake.status.value} to {status.value}",
                {"intake_id": intake_id, "status": intake.status.value, "requested": status.value},
            )
        if not s.intakes.transition(intake_id, intake.status, status, processed_by, utcnow()):
            logger.warning(f"Lost status race on intake {intake_id} -> {status.value}")
            raise InvalidState("Intake status changed concurrently", {"intake_id": intake_id})
        updated = _load(s, intake_id)
    logger.info(f"Intake {intake_id}: {intake.status.value} -> {status.value} by {processed_by or 'unknown'}")
    return updated


def update_notes(store: Store, intake_id: str, internal_notes: str) -> ProblemIntake:
    with store.session() as s:
        _load(s, intake_id)
        s.intakes.update_notes(intake_id, internal_notes, utcnow())
        return _load(s, intake_id)


def link_case(store: Store, intake_id: str, case_id: str) -> ProblemIntake:
    with store.session() as s:
        intake = _load(s, intake_id)
        if intake.status != IntakeStatus.ACCEPTED:
            raise InvalidState(
                f"Only accepted intakes can be linked to a case. Current: {intake.status.value}",
                {"intake_id": intake_id, "status": intake.status.value},
            )
        if not s.cases.get(case_id):
            raise NotFound(f"Case not found: {case_id}")
        s.intakes.link_case(intake_id, case_id, utcnow())
        linked = _load(s, intake_id)
    logger.info(f"Intake {intake_id} linked to case {case_id}")
    return linked
