"""
PostgreSQL store backend (psycopg2).

One session = one connection = one transaction. The session commits when
the `with` block exits cleanly and rolls back otherwise, so the approval
workflow's tag/tool upserts, case insert and status compare-and-set land
together or not at all.

Moderation reads the submission row with SELECT ... FOR UPDATE, and the
case insert maps a unique violation on (slug, locale) to DuplicateSlug.

Schema: migrations/001_showcase_schema.sql
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Type

import psycopg2
from psycopg2.errors import UniqueViolation
from psycopg2.extras import Json, RealDictCursor
from pydantic import BaseModel

from app.shared.errors import DuplicateSlug, StoreUnavailable
from app.shared.slugs import humanize_slug

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
    new_id,
)

logger = logging.getLogger(__name__)


def _adapt(value: Any) -> Any:
    """Python value -> psycopg2 parameter."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return Json(value.model_dump(mode="json"))
    if isinstance(value, dict):
        return Json(value)
    return value


def _insert(cur, table: str, record: StoreRecord) -> str:
    data = record.model_dump()
    columns = list(data.keys())
    placeholders = ", ".join(["%s"] * len(columns))
    cur.execute(
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) RETURNING id",
        [_adapt(data[c]) for c in columns],
    )
    return cur.fetchone()["id"]


def _rows(cur, model: Type[StoreRecord]) -> List[Any]:
    return [model(**row) for row in cur.fetchall()]


def _row(cur, model: Type[StoreRecord]) -> Optional[Any]:
    row = cur.fetchone()
    return model(**row) if row else None


class _Repository:
    def __init__(self, conn):
        self._conn = conn

    def cursor(self):
        return self._conn.cursor()


# =============================================
# Repositories
# =============================================

class PostgresTaxonomyRepository(_Repository, TaxonomyRepository):

    def __init__(self, conn, table: str, record_type: Type[StoreRecord]):
        super().__init__(conn)
        self.table = table
        self.record_type = record_type

    def get(self, record_id):
        with self.cursor() as cur:
            cur.execute(f"SELECT * FROM {self.table} WHERE id = %s", (record_id,))
            return _row(cur, self.record_type)

    def get_by_slug(self, slug):
        with self.cursor() as cur:
            cur.execute(f"SELECT * FROM {self.table} WHERE slug = %s LIMIT 1", (slug,))
            return _row(cur, self.record_type)

    def list_all(self):
        with self.cursor() as cur:
            cur.execute(f"SELECT * FROM {self.table} ORDER BY name")
            return _rows(cur, self.record_type)

    def insert(self, record):
        with self.cursor() as cur:
            return _insert(cur, self.table, record)

    def ensure(self, slug: str) -> str:
        # ON CONFLICT keeps the upsert idempotent under concurrent approvals.
        with self.cursor() as cur:
            cur.execute(
                f"""
                INSERT INTO {self.table} (id, slug, name, created_at)
                VALUES (%s, %s, %s, NOW())
                ON CONFLICT (slug) DO NOTHING
                RETURNING id
                """,
                (new_id(), slug, humanize_slug(slug)),
            )
            created = cur.fetchone()
            if created:
                return created["id"]
            cur.execute(f"SELECT id FROM {self.table} WHERE slug = %s", (slug,))
            return cur.fetchone()["id"]


class PostgresCaseRepository(_Repository, CaseRepository):

    def get(self, case_id: str) -> Optional[Case]:
        with self.cursor() as cur:
            cur.execute("SELECT * FROM cases WHERE id = %s", (case_id,))
            return _row(cur, Case)

    def insert(self, case: Case) -> str:
        # The savepoint keeps the session usable after a unique violation,
        # so the caller can pick another slug and retry.
        with self.cursor() as cur:
            cur.execute("SAVEPOINT case_insert")
            try:
                case_id = _insert(cur, "cases", case)
            except UniqueViolation as e:
                cur.execute("ROLLBACK TO SAVEPOINT case_insert")
                raise DuplicateSlug(
                    f"Case slug already taken: {case.slug}",
                    {"slug": case.slug, "locale": case.locale.value},
                ) from e
            cur.execute("RELEASE SAVEPOINT case_insert")
            return case_id

    def find_by_slug(self, slug: str, locale: Locale) -> Optional[Case]:
        with self.cursor() as cur:
            cur.execute(
                "SELECT * FROM cases WHERE slug = %s AND locale = %s LIMIT 1",
                (slug, _adapt(locale)),
            )
            return _row(cur, Case)

    def list_by_locale_status(self, locale: Locale, status: CaseStatus) -> List[Case]:
        with self.cursor() as cur:
            cur.execute(
                "SELECT * FROM cases WHERE locale = %s AND status = %s ORDER BY created_at DESC",
                (_adapt(locale), _adapt(status)),
            )
            return _rows(cur, Case)


class PostgresSubmissionRepository(_Repository, SubmissionRepository):

    def get(self, submission_id: str) -> Optional[CaseSubmission]:
        with self.cursor() as cur:
            cur.execute("SELECT * FROM case_submissions WHERE id = %s", (submission_id,))
            return _row(cur, CaseSubmission)

    def get_for_update(self, submission_id: str) -> Optional[CaseSubmission]:
        with self.cursor() as cur:
            cur.execute("SELECT * FROM case_submissions WHERE id = %s FOR UPDATE", (submission_id,))
            return _row(cur, CaseSubmission)

    def insert(self, submission: CaseSubmission) -> str:
        with self.cursor() as cur:
            return _insert(cur, "case_submissions", submission)

    def list_by_status(self, status: SubmissionStatus) -> List[CaseSubmission]:
        with self.cursor() as cur:
            cur.execute("SELECT * FROM case_submissions WHERE status = %s", (_adapt(status),))
            return _rows(cur, CaseSubmission)

    def transition(self, submission_id, expected, new) -> bool:
        with self.cursor() as cur:
            cur.execute(
                """
                UPDATE case_submissions SET status = %s
                WHERE id = %s AND status = %s
                RETURNING id
                """,
                (_adapt(new), submission_id, _adapt(expected)),
            )
            return cur.fetchone() is not None


class PostgresIntakeRepository(_Repository, IntakeRepository):

    def get(self, intake_id: str) -> Optional[ProblemIntake]:
        with self.cursor() as cur:
            cur.execute("SELECT * FROM problem_intakes WHERE id = %s", (intake_id,))
            return _row(cur, ProblemIntake)

    def insert(self, intake: ProblemIntake) -> str:
        with self.cursor() as cur:
            return _insert(cur, "problem_intakes", intake)

    def list(self, status: Optional[IntakeStatus] = None) -> List[ProblemIntake]:
        query = "SELECT * FROM problem_intakes"
        params: List[Any] = []
        if status:
            query += " WHERE status = %s"
            params.append(_adapt(status))
        query += " ORDER BY created_at DESC"
        with self.cursor() as cur:
            cur.execute(query, params)
            return _rows(cur, ProblemIntake)

    def transition(self, intake_id, expected, new, processed_by, updated_at) -> bool:
        with self.cursor() as cur:
            cur.execute(
                """
                UPDATE problem_intakes
                SET status = %s, processed_by = COALESCE(%s, processed_by), updated_at = %s
                WHERE id = %s AND status = %s
                RETURNING id
                """,
                (_adapt(new), processed_by, updated_at, intake_id, _adapt(expected)),
            )
            return cur.fetchone() is not None

    def _patch(self, intake_id: str, fields: Dict[str, Any]) -> bool:
        assignments = ", ".join(f"{name} = %s" for name in fields)
        with self.cursor() as cur:
            cur.execute(
                f"UPDATE problem_intakes SET {assignments} WHERE id = %s RETURNING id",
                [*fields.values(), intake_id],
            )
            return cur.fetchone() is not None

    def update_notes(self, intake_id: str, internal_notes: str, updated_at: datetime) -> bool:
        return self._patch(intake_id, {"internal_notes": internal_notes, "updated_at": updated_at})

    def link_case(self, intake_id: str, case_id: str, updated_at: datetime) -> bool:
        return self._patch(intake_id, {"case_id": case_id, "updated_at": updated_at})


class PostgresNewsletterRepository(_Repository, NewsletterRepository):

    def find_by_email(self, email: str) -> Optional[NewsletterLead]:
        with self.cursor() as cur:
            cur.execute("SELECT * FROM newsletter_leads WHERE email = %s LIMIT 1", (email,))
            return _row(cur, NewsletterLead)

    def insert(self, lead: NewsletterLead) -> str:
        with self.cursor() as cur:
            return _insert(cur, "newsletter_leads", lead)

    def count(self) -> int:
        with self.cursor() as cur:
            cur.execute("SELECT COUNT(*) AS count FROM newsletter_leads")
            return cur.fetchone()["count"]


class PostgresSalesLeadRepository(_Repository, SalesLeadRepository):

    def insert(self, lead: SalesLead) -> str:
        with self.cursor() as cur:
            return _insert(cur, "sales_leads", lead)

    def list_recent(self) -> List[SalesLead]:
        with self.cursor() as cur:
            cur.execute("SELECT * FROM sales_leads ORDER BY created_at DESC")
            return _rows(cur, SalesLead)


class PostgresPulseRepository(_Repository, PulseRepository):

    def exists(self, external_id: str) -> bool:
        with self.cursor() as cur:
            cur.execute("SELECT 1 FROM pulse_items WHERE external_id = %s LIMIT 1", (external_id,))
            return cur.fetchone() is not None

    def insert(self, item: PulseItem) -> str:
        with self.cursor() as cur:
            return _insert(cur, "pulse_items", item)


# =============================================
# Store
# =============================================

class PostgresStore(Store):

    backend = "postgres"

    def __init__(self, database_url: str):
        self.database_url = database_url

    def connect(self):
        try:
            return psycopg2.connect(self.database_url, cursor_factory=RealDictCursor)
        except psycopg2.OperationalError as e:
            logger.error(f"Database connection error: {e}")
            raise StoreUnavailable("Database connection failed") from e

    @contextmanager
    def session(self) -> Iterator[StoreSession]:
        conn = self.connect()
        try:
            yield StoreSession(
                tags=PostgresTaxonomyRepository(conn, "tags", Tag),
                tools=PostgresTaxonomyRepository(conn, "tools", Tool),
                cases=PostgresCaseRepository(conn),
                submissions=PostgresSubmissionRepository(conn),
                intakes=PostgresIntakeRepository(conn),
                newsletter=PostgresNewsletterRepository(conn),
                sales_leads=PostgresSalesLeadRepository(conn),
                pulse=PostgresPulseRepository(conn),
            )
            conn.commit()
        except psycopg2.OperationalError as e:
            conn.rollback()
            raise StoreUnavailable(f"Database error: {e}") from e
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()

    def ping(self) -> bool:
        try:
            conn = self.connect()
        except StoreUnavailable:
            return False
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
            return True
        except psycopg2.Error as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        finally:
            conn.close()

    def recent_migrations(self, limit: int = 5) -> List[Dict[str, Any]]:
        conn = self.connect()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT filename, executed_at, success
                    FROM _migrations
                    ORDER BY filename DESC
                    LIMIT %s
                    """,
                    (limit,),
                )
                return [
                    {"filename": row["filename"], "executed_at": str(row["executed_at"]), "success": row["success"]}
                    for row in cur.fetchall()
                ]
        finally:
            conn.close()
