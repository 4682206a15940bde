"""
VibeCodeSpace Store Contract

Repositories over the Lead/Content Store and the session that binds them
into one atomic unit.

Contract:
- Every workflow operation runs inside exactly one `store.session()`.
- A session commits when the block exits cleanly and rolls back on any
  exception, so a multi-step approval is all-or-nothing.
- Status changes go through `transition()`, a compare-and-set on the
  previous status. Losing the race returns False instead of overwriting.

Version: store_contract_v1
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Any, ContextManager, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from app.shared.errors import StoreUnavailable
from app.shared.slugs import humanize_slug

from .models import (
    Case,
    CaseStatus,
    CaseSubmission,
    IntakeStatus,
    Locale,
    NewsletterLead,
    ProblemIntake,
    PulseItem,
    SalesLead,
    SubmissionStatus,
    Tag,
    Tool,
    new_id,
)

TaxonomyRecord = TypeVar("TaxonomyRecord", Tag, Tool)


# =============================================
# Repositories
# =============================================

class TaxonomyRepository(ABC, Generic[TaxonomyRecord]):
    """Tags or tools: (slug, name) entities, globally unique by slug."""

    record_type: Type[TaxonomyRecord]

    @abstractmethod
    def get(self, record_id: str) -> Optional[TaxonomyRecord]:
        ...

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[TaxonomyRecord]:
        ...

    @abstractmethod
    def list_all(self) -> List[TaxonomyRecord]:
        ...

    @abstractmethod
    def insert(self, record: TaxonomyRecord) -> str:
        ...

    def ensure(self, slug: str) -> str:
        """
        Find-or-create by slug. Idempotent: a second call with the same slug
        returns the id created by the first.
        """
        existing = self.get_by_slug(slug)
        if existing:
            return existing.id
        record = self.record_type(id=new_id(), slug=slug, name=humanize_slug(slug))
        return self.insert(record)


class CaseRepository(ABC):

    @abstractmethod
    def get(self, case_id: str) -> Optional[Case]:
        ...

    @abstractmethod
    def insert(self, case: Case) -> str:
        """Raises DuplicateSlug when (slug, locale) is already taken."""

    @abstractmethod
    def find_by_slug(self, slug: str, locale: Locale) -> Optional[Case]:
        ...

    @abstractmethod
    def list_by_locale_status(self, locale: Locale, status: CaseStatus) -> List[Case]:
        ...

    def slug_taken(self, slug: str, locale: Locale) -> bool:
        return self.find_by_slug(slug, locale) is not None


class SubmissionRepository(ABC):

    @abstractmethod
    def get(self, submission_id: str) -> Optional[CaseSubmission]:
        ...

    @abstractmethod
    def insert(self, submission: CaseSubmission) -> str:
        ...

    def get_for_update(self, submission_id: str) -> Optional[CaseSubmission]:
        """
        Read a submission and hold it for the rest of the session, so a
        concurrent moderator waits instead of racing. Backends whose sessions
        are already serialized can rely on get().
        """
        return self.get(submission_id)

    @abstractmethod
    def list_by_status(self, status: SubmissionStatus) -> List[CaseSubmission]:
        ...

    @abstractmethod
    def transition(
        self,
        submission_id: str,
        expected: SubmissionStatus,
        new: SubmissionStatus,
    ) -> bool:
        """Set status to `new` only if it is currently `expected`."""


class IntakeRepository(ABC):

    @abstractmethod
    def get(self, intake_id: str) -> Optional[ProblemIntake]:
        ...

    @abstractmethod
    def insert(self, intake: ProblemIntake) -> str:
        ...

    @abstractmethod
    def list(self, status: Optional[IntakeStatus] = None) -> List[ProblemIntake]:
        """Newest first."""

    @abstractmethod
    def transition(
        self,
        intake_id: str,
        expected: IntakeStatus,
        new: IntakeStatus,
        processed_by: Optional[str],
        updated_at: datetime,
    ) -> bool:
        ...

    @abstractmethod
    def update_notes(self, intake_id: str, internal_notes: str, updated_at: datetime) -> bool:
        ...

    @abstractmethod
    def link_case(self, intake_id: str, case_id: str, updated_at: datetime) -> bool:
        ...


class NewsletterRepository(ABC):

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[NewsletterLead]:
        ...

    @abstractmethod
    def insert(self, lead: NewsletterLead) -> str:
        ...

    @abstractmethod
    def count(self) -> int:
        ...


class SalesLeadRepository(ABC):

    @abstractmethod
    def insert(self, lead: SalesLead) -> str:
        ...

    @abstractmethod
    def list_recent(self) -> List[SalesLead]:
        """Newest first."""


class PulseRepository(ABC):

    @abstractmethod
    def exists(self, external_id: str) -> bool:
        ...

    @abstractmethod
    def insert(self, item: PulseItem) -> str:
        ...


# =============================================
# Session / Store
# =============================================

class StoreSession:
    """Repositories bound to one atomic unit of work."""

    def __init__(
        self,
        tags: TaxonomyRepository[Tag],
        tools: TaxonomyRepository[Tool],
        cases: CaseRepository,
        submissions: SubmissionRepository,
        intakes: IntakeRepository,
        newsletter: NewsletterRepository,
        sales_leads: SalesLeadRepository,
        pulse: PulseRepository,
    ):
        self.tags = tags
        self.tools = tools
        self.cases = cases
        self.submissions = submissions
        self.intakes = intakes
        self.newsletter = newsletter
        self.sales_leads = sales_leads
        self.pulse = pulse


class Store(ABC):
    """Entry point to the Lead/Content Store."""

    backend: str = "abstract"

    @abstractmethod
    def session(self) -> ContextManager[StoreSession]:
        """Context manager yielding a StoreSession; commit on exit, rollback on error."""

    @abstractmethod
    def ping(self) -> bool:
        ...

    def recent_migrations(self, limit: int = 5) -> List[Dict[str, Any]]:
        """Most recently applied schema migrations, newest first. Empty if untracked."""
        return []

    def close(self) -> None:
        pass


class UnavailableStore(Store):
    """
    Store used when the configured backend cannot be built (e.g. no
    DATABASE_URL). Every session fails with StoreUnavailable.
    """

    backend = "unavailable"

    def __init__(self, reason: str):
        self.reason = reason

    @contextmanager
    def session(self) -> Iterator[StoreSession]:
        raise StoreUnavailable(self.reason)
        yield  # pragma: no cover

    def ping(self) -> bool:
        return False

