"""
Lead Capture Operations

- subscribe(): idempotent on the lower-cased email; a repeat signup reports
  already_subscribed=True instead of failing or duplicating.
- submit_sales_lead(): pure append, no dedup.
"""

import logging
from typing import List, Optional

from app.store import Store
from app.store.models import CompanySize, Locale, NewsletterLead, SalesLead, new_id, utcnow

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def subscribe(store: Store, email: str, locale: Locale, source: Optional[str] = None) -> bool:
    """Returns True when the address was already subscribed."""
    normalized = normalize_email(email)
    with store.session() as s:
        if s.newsletter.find_by_email(normalized):
            return True
        s.newsletter.insert(NewsletterLead(
            id=new_id(),
            email=normalized,
            locale=locale,
            source=source,
            created_at=utcnow(),
        ))
    logger.info(f"Newsletter signup ({locale.value}, source={source or 'unknown'})")
    return False


def count_subscribers(store: Store) -> int:
    with store.session() as s:
        return s.newsletter.count()


def submit_sales_lead(
    store: Store,
    name: str,
    email: str,
    message: str,
    locale: Locale,
    company: Optional[str] = None,
    company_size: Optional[CompanySize] = None,
    plan: Optional[str] = None,
) -> str:
    lead = SalesLead(
        id=new_id(),
        name=name,
        email=normalize_email(email),
        company=company,
        company_size=company_size,
        message=message,
        plan=plan,
        locale=locale,
        created_at=utcnow(),
    )
    with store.session() as s:
        lead_id = s.sales_leads.insert(lead)
    logger.info(f"Sales lead {lead_id} recorded (plan={plan or 'n/a'})")
    return lead_id


def list_sales_leads(store: Store) -> List[SalesLead]:
    with store.session() as s:
        return s.sales_leads.list_recent()
