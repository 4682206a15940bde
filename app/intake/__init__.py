"""
VibeCodeSpace Problem Intake System

Public problem descriptions with a human-gated review lifecycle:
- new -> reviewing -> accepted | declined
- Compare-and-set status changes
- Explicit linkage of accepted intakes to cases

Version: intake_system_v2
"""

from .admin import router
from .models import (
    IntakeCreateRequest,
    IntakeCreateResponse,
    IntakeDetailResponse,
    IntakeLinkCaseRequest,
    IntakeListResponse,
    IntakeNotesRequest,
    IntakeStatusRequest,
)
from .workflow import (
    ALLOWED_TRANSITIONS,
    can_transition,
    create_intake,
    get_intake,
    link_case,
    list_intakes,
    update_notes,
    update_status,
)

__all__ = [
    "router",
    "IntakeCreateRequest",
    "IntakeCreateResponse",
    "IntakeDetailResponse",
    "IntakeLinkCaseRequest",
    "IntakeListResponse",
    "IntakeNotesRequest",
    "IntakeStatusRequest",
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "create_intake",
    "get_intake",
    "link_case",
    "list_intakes",
    "update_notes",
    "update_status",
]
