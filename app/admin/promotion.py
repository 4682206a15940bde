"""
Intake-to-Case Promotion

Turns an intake into a draft Dutch case that an editor finishes later.
The intake is only read here; linking it to the new case is a separate
admin action (app/intake/workflow.link_case).
"""

import logging

from app.shared.errors import NotFound, ValidationError
from app.shared.slugs import first_free_slug, promoted_case_slug
from app.store import Store
from app.store.models import Case, CaseStatus, Locale, new_id, utcnow

logger = logging.getLogger(__name__)

PROMOTED_CASE_LOCALE = Locale.NL
PROMOTED_CASE_ONE_LINER = "Micro-oplossing aangevraagd via VibeCodeSpace"


def create_case_from_intake(
    store: Store,
    intake_id: str,
    title: str,
    problem_description: str,
    desired_outcome: str,
) -> Case:
    missing = [name for name, value in (
        ("intake_id", intake_id),
        ("title", title),
        ("problem_description", problem_description),
        ("desired_outcome", desired_outcome),
    ) if not (value and value.strip())]
    if missing:
        raise ValidationError("Missing required fields", {"fields": missing})

    with store.session() as s:
        if not s.intakes.get(intake_id):
            raise NotFound(f"Intake not found: {intake_id}")

        slug = first_free_slug(
            promoted_case_slug(title),
            lambda candidate: s.cases.slug_taken(candidate, PROMOTED_CASE_LOCALE),
        )
        case = Case(
            id=new_id(),
            slug=slug,
            title=title,
            one_liner=PROMOTED_CASE_ONE_LINER,
            locale=PROMOTED_CASE_LOCALE,
            status=CaseStatus.DRAFT,
            problem=problem_description,
            solution=desired_outcome,
            learnings="",
            created_at=utcnow(),
        )
        s.cases.insert(case)

    logger.info(f"Draft case {case.id} ({case.slug}) created from intake {intake_id}")
    return case
