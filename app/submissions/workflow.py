"""
Case Submission Moderation Workflow

Lifecycle: pending -> approved | pending -> rejected. Both targets are
terminal; nothing moves a submission out of approved or rejected.

Approval, in one store session:
1. ensure() every tag slug, then every tool slug (find-or-create, order kept)
2. derive the case slug from the title; if (slug, locale) is taken, suffix -2, -3, ...
3. split the stack text on commas
4. insert a published Case
5. compare-and-set the submission pending -> approved

The submission is read with get_for_update(), so on PostgreSQL a second
moderator blocks until the first commits and then sees a non-pending row.
If another submission with the same title commits its slug between steps 2
and 4, the insert raises DuplicateSlug and the slug is derived again.
If step 5 loses a race with a concurrent approve/reject, the session rolls
back and no Case, tag or tool from this call survives.
"""

import logging
from typing import List

from app.shared.errors import DuplicateSlug, InvalidState, NotFound
from app.shared.slugs import first_free_slug, slugify, split_stack
from app.store import Store, StoreSession
from app.store.models import (
    Case,
    CaseStatus,
    CaseSubmission,
    SubmissionStatus,
    new_id,
    utcnow,
)

from .models import SubmissionCreateRequest

logger = logging.getLogger(__name__)

FALLBACK_CASE_SLUG = "case"
MAX_SLUG_ATTEMPTS = 3


def _load_pending(session: StoreSession, submission_id: str) -> CaseSubmission:
    submission = session.submissions.get_for_update(submission_id)
    if not submission:
        raise NotFound(f"Submission not found: {submission_id}")
    if submission.status != SubmissionStatus.PENDING:
        raise InvalidState(
            f"Submission is not pending. Current: {submission.status.value}",
            {"submission_id": submission_id, "status": submission.status.value},
        )
    return submission


def _transition(session: StoreSession, submission_id: str, new: SubmissionStatus) -> None:
    if not session.submissions.transition(submission_id, SubmissionStatus.PENDING, new):
        logger.warning(f"Lost status race on submission {submission_id} -> {new.value}")
        raise InvalidState(
            "Submission is no longer pending",
            {"submission_id": submission_id},
        )


def create_submission(store: Store, request: SubmissionCreateRequest) -> str:
    submission = CaseSubmission(
        id=new_id(),
        title=request.title,
        one_liner=request.one_liner,
        locale=request.locale,
        tag_slugs=request.tag_slugs,
        tool_slugs=request.tool_slugs,
        stack_text=request.stack_text,
        links=request.links,
        email=str(request.email),
        notes=request.notes,
        status=SubmissionStatus.PENDING,
        created_at=utcnow(),
    )
    with store.session() as s:
        submission_id = s.submissions.insert(submission)
    logger.info(f"Submission {submission_id} queued for moderation ({request.locale.value})")
    return submission_id


def list_pending(store: Store) -> List[CaseSubmission]:
    """Pending submissions, oldest first (FIFO moderation)."""
    with store.session() as s:
        submissions = s.submissions.list_by_status(SubmissionStatus.PENDING)
    return sorted(submissions, key=lambda sub: sub.created_at)


def approve(store: Store, submission_id: str) -> str:
    """Publish a pending submission as a Case. Returns the new case id."""
    with store.session() as s:
        submission = _load_pending(s, submission_id)

        tag_ids = [s.tags.ensure(slug) for slug in submission.tag_slugs]
        tool_ids = [s.tools.ensure(slug) for slug in submission.tool_slugs]

        base_slug = slugify(submission.title) or FALLBACK_CASE_SLUG
        for attempt in range(1, MAX_SLUG_ATTEMPTS + 1):
            slug = first_free_slug(base_slug, lambda candidate: s.cases.slug_taken(candidate, submission.locale))
            case = Case(
                id=new_id(),
                slug=slug,
                title=submission.title,
                one_liner=submission.one_liner,
                locale=submission.locale,
                status=CaseStatus.PUBLISHED,
                tag_ids=tag_ids,
                tool_ids=tool_ids,
                stack=split_stack(submission.stack_text),
                created_at=utcnow(),
            )
            try:
                case_id = s.cases.insert(case)
                break
            except DuplicateSlug:
                # another approval committed the same slug after we looked
                if attempt == MAX_SLUG_ATTEMPTS:
                    raise
                logger.warning(f"Case slug '{slug}' taken concurrently, retrying ({attempt}/{MAX_SLUG_ATTEMPTS})")

        _transition(s, submission_id, SubmissionStatus.APPROVED)

    logger.info(
        f"Submission {submission_id} approved -> case {case_id} "
        f"('{slug}', {len(tag_ids)} tags, {len(tool_ids)} tools)"
    )
    return case_id


def reject(store: Store, submission_id: str) -> None:
    with store.session() as s:
        _load_pending(s, submission_id)
        _transition(s, submission_id, SubmissionStatus.REJECTED)
    logger.info(f"Submission {submission_id} rejected")
