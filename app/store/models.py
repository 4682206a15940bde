"""
VibeCodeSpace Store Records

Pydantic models for every record kind held by the Lead/Content Store, plus
the enumerated value unions the store enforces.

Python attributes are snake_case; JSON uses the camelCase names the public
site already speaks (oneLiner, tagSlugs, problemDescription, ...).

Version: store_models_v1
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================
# Value unions
# =============================================

class Locale(str, Enum):
    """Locales with translated content."""
    NL = "nl"
    EN = "en"
    ES = "es"


class IntakeLanguage(str, Enum):
    """Languages accepted on the problem-intake form."""
    NL = "nl"
    EN = "en"
    ES = "es"
    OTHER = "other"


class CaseStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class SubmissionStatus(str, Enum):
    """Moderation lifecycle: pending -> approved | rejected (terminal)."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class IntakeStatus(str, Enum):
    """Intake lifecycle: new -> reviewing -> accepted | declined."""
    NEW = "new"
    REVIEWING = "reviewing"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class BudgetRange(str, Enum):
    UNDER_1K = "under_1k"
    FROM_1K_TO_5K = "1k_5k"
    FROM_5K_TO_15K = "5k_15k"
    FROM_15K_TO_50K = "15k_50k"
    OVER_50K = "over_50k"


class CompanySize(str, Enum):
    SOLO = "solo"
    FROM_2_TO_10 = "2_10"
    FROM_11_TO_50 = "11_50"
    FROM_51_TO_200 = "51_200"
    OVER_200 = "over_200"


class PulseSource(str, Enum):
    HACKER_NEWS = "hn"
    PRODUCT_HUNT = "ph"
    DEVTO = "devto"
    INDIE_HACKERS = "ih"


# =============================================
# Records
# =============================================

class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in code."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoreRecord(CamelModel):
    """Base for stored records."""


class Tag(StoreRecord):
    id: str
    slug: str
    name: str
    created_at: datetime = Field(default_factory=utcnow)


class Tool(StoreRecord):
    id: str
    slug: str
    name: str
    website_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class Case(StoreRecord):
    """Showcase entry. Slug is unique per locale."""
    id: str
    slug: str
    title: str
    one_liner: str
    locale: Locale
    status: CaseStatus
    tag_ids: List[str] = Field(default_factory=list)
    tool_ids: List[str] = Field(default_factory=list)
    stack: List[str] = Field(default_factory=list)
    featured_image_url: Optional[str] = None
    problem: Optional[str] = None
    solution: Optional[str] = None
    learnings: Optional[str] = None
    builder_profile_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class SubmissionLinks(CamelModel):
    demo: Optional[str] = None
    repo: Optional[str] = None


class CaseSubmission(StoreRecord):
    """User-proposed case awaiting moderation."""
    id: str
    title: str
    one_liner: str
    locale: Locale
    tag_slugs: List[str] = Field(default_factory=list)
    tool_slugs: List[str] = Field(default_factory=list)
    stack_text: str = ""
    links: SubmissionLinks = Field(default_factory=SubmissionLinks)
    email: str
    notes: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)


class ProblemIntake(StoreRecord):
    """Lead captured from the public problem-intake form."""
    id: str
    title: str
    problem_description: str
    desired_outcome: str
    country: str
    language: IntakeLanguage
    email: str
    company_size: Optional[CompanySize] = None
    budget_range: Optional[BudgetRange] = None
    urgency: Optional[Urgency] = None
    internal_notes: Optional[str] = None
    processed_by: Optional[str] = None
    case_id: Optional[str] = None
    status: IntakeStatus = IntakeStatus.NEW
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None


class NewsletterLead(StoreRecord):
    id: str
    email: str
    locale: Locale
    source: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class SalesLead(StoreRecord):
    id: str
    name: str
    email: str
    company: Optional[str] = None
    company_size: Optional[CompanySize] = None
    message: str
    plan: Optional[str] = None
    locale: Locale
    created_at: datetime = Field(default_factory=utcnow)


class PulseItem(StoreRecord):
    """Externally sourced news entry, stored as a draft for editorial review."""
    id: str
    external_id: str
    source: PulseSource
    title: str
    link: str
    author: Optional[str] = None
    published_at: Optional[datetime] = None
    summary: Optional[str] = None
    status: CaseStatus = CaseStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)
