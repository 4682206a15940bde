"""
In-memory store backend.

Selected with STORE_BACKEND=memory for local development and the test suite.
Sessions are serialized by a lock; a failed session restores the snapshot
taken when it started, which gives the same all-or-nothing behaviour as a
database transaction.
"""

import copy
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Type, TypeVar

from app.shared.errors import DuplicateSlug

from .base import (
    CaseRepository,
    IntakeRepository,
    NewsletterRepository,
    PulseRepository,
    SalesLeadRepository,
    Store,
    StoreSession,
    SubmissionRepository,
    TaxonomyRepository,
)
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
    StoreRecord,
    SubmissionStatus,
    Tag,
    Tool,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=StoreRecord)

Table = Dict[str, StoreRecord]

TABLES = (
    "tags",
    "tools",
    "cases",
    "case_submissions",
    "problem_intakes",
    "newsletter_leads",
    "sales_leads",
    "pulse_items",
)


class _Table:
    """Thin wrapper so repositories copy records in and out."""

    def __init__(self, rows: Table):
        self.rows = rows

    def get(self, record_id: str) -> Optional[StoreRecord]:
        row = self.rows.get(record_id)
        return row.model_copy(deep=True) if row else None

    def put(self, record: StoreRecord) -> str:
        self.rows[record.id] = record.model_copy(deep=True)
        return record.id

    def all(self) -> List[StoreRecord]:
        return [row.model_copy(deep=True) for row in self.rows.values()]

    def raw(self, record_id: str) -> Optional[StoreRecord]:
        return self.rows.get(record_id)


class MemoryTaxonomyRepository(TaxonomyRepository):

    def __init__(self, table: _Table, record_type: Type[R]):
        self._table = table
        self.record_type = record_type

    def get(self, record_id):
        return self._table.get(record_id)

    def get_by_slug(self, slug):
        for row in self._table.all():
            if row.slug == slug:
                return row
        return None

    def list_all(self):
        return self._table.all()

    def insert(self, record):
        if self.get_by_slug(record.slug):
            raise ValueError(f"Duplicate slug '{record.slug}' in {self.record_type.__name__}")
        return self._table.put(record)


class MemoryCaseRepository(CaseRepository):

    def __init__(self, table: _Table):
        self._table = table

    def get(self, case_id: str) -> Optional[Case]:
        return self._table.get(case_id)

    def insert(self, case: Case) -> str:
        if self.slug_taken(case.slug, case.locale):
            raise DuplicateSlug(
                f"Case slug already taken: {case.slug}",
                {"slug": case.slug, "locale": case.locale.value},
            )
        return self._table.put(case)

    def find_by_slug(self, slug: str, locale: Locale) -> Optional[Case]:
        for row in self._table.all():
            if row.slug == slug and row.locale == locale:
                return row
        return None

    def list_by_locale_status(self, locale: Locale, status: CaseStatus) -> List[Case]:
        return [
            row for row in self._table.all()
            if row.locale == locale and row.status == status
        ]


class MemorySubmissionRepository(SubmissionRepository):

    def __init__(self, table: _Table):
        self._table = table

    def get(self, submission_id: str) -> Optional[CaseSubmission]:
        return self._table.get(submission_id)

    def insert(self, submission: CaseSubmission) -> str:
        return self._table.put(submission)

    def list_by_status(self, status: SubmissionStatus) -> List[CaseSubmission]:
        return [row for row in self._table.all() if row.status == status]

    def transition(self, submission_id, expected, new) -> bool:
        row = self._table.raw(submission_id)
        if row is None or row.status != expected:
            return False
        row.status = new
        return True


class MemoryIntakeRepository(IntakeRepository):

    def __init__(self, table: _Table):
        self._table = table

    def get(self, intake_id: str) -> Optional[ProblemIntake]:
        return self._table.get(intake_id)

    def insert(self, intake: ProblemIntake) -> str:
        return self._table.put(intake)

    def list(self, status: Optional[IntakeStatus] = None) -> List[ProblemIntake]:
        rows = [row for row in self._table.all() if status is None or row.status == status]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    def transition(self, intake_id, expected, new, processed_by, updated_at) -> bool:
        row = self._table.raw(intake_id)
        if row is None or row.status != expected:
            return False
        row.status = new
        if processed_by is not None:
            row.processed_by = processed_by
        row.updated_at = updated_at
        return True

    def update_notes(self, intake_id: str, internal_notes: str, updated_at: datetime) -> bool:
        row = self._table.raw(intake_id)
        if row is None:
            return False
        row.internal_notes = internal_notes
        row.updated_at = updated_at
        return True

    def link_case(self, intake_id: str, case_id: str, updated_at: datetime) -> bool:
        row = self._table.raw(intake_id)
        if row is None:
            return False
        row.case_id = case_id
        row.updated_at = updated_at
        return True


class MemoryNewsletterRepository(NewsletterRepository):

    def __init__(self, table: _Table):
        self._table = table

    def find_by_email(self, email: str) -> Optional[NewsletterLead]:
        for row in self._table.all():
            if row.email == email:
                return row
        return None

    def insert(self, lead: NewsletterLead) -> str:
        return self._table.put(lead)

    def count(self) -> int:
        return len(self._table.rows)


class MemorySalesLeadRepository(SalesLeadRepository):

    def __init__(self, table: _Table):
        self._table = table

    def insert(self, lead: SalesLead) -> str:
        return self._table.put(lead)

    def list_recent(self) -> List[SalesLead]:
        return sorted(self._table.all(), key=lambda r: r.created_at, reverse=True)


class MemoryPulseRepository(PulseRepository):

    def __init__(self, table: _Table):
        self._table = table

    def exists(self, external_id: str) -> bool:
        return any(row.external_id == external_id for row in self._table.rows.values())

    def insert(self, item: PulseItem) -> str:
        return self._table.put(item)


class MemoryStore(Store):
    """Process-local store. Data is lost on restart."""

    backend = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self._tables: Dict[str, Table] = {name: {} for name in TABLES}

    @contextmanager
    def session(self) -> Iterator[StoreSession]:
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield self._bind()
            except BaseException:
                self._tables = snapshot
                logger.debug("Memory store session rolled back")
                raise

    def _bind(self) -> StoreSession:
        t = {name: _Table(rows) for name, rows in self._tables.items()}
        return StoreSession(
            tags=MemoryTaxonomyRepository(t["tags"], Tag),
            tools=MemoryTaxonomyRepository(t["tools"], Tool),
            cases=MemoryCaseRepository(t["cases"]),
            submissions=MemorySubmissionRepository(t["case_submissions"]),
            intakes=MemoryIntakeRepository(t["problem_intakes"]),
            newsletter=MemoryNewsletterRepository(t["newsletter_leads"]),
            sales_leads=MemorySalesLeadRepository(t["sales_leads"]),
            pulse=MemoryPulseRepository(t["pulse_items"]),
        )

    def ping(self) -> bool:
        return True
