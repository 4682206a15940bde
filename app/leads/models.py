"""
Lead Capture Models

Newsletter signups and sales inquiries.
"""

from typing import List, Optional

from pydantic import EmailStr, Field

from app.store.models import CamelModel, CompanySize, Locale, SalesLead


class NewsletterSubscribeRequest(CamelModel):
    email: EmailStr
    locale: Locale
    source: Optional[str] = Field(None, description="e.g. homepage, footer, pricing")


class NewsletterSubscribeResponse(CamelModel):
    success: bool = True
    already_subscribed: bool


class NewsletterCountResponse(CamelModel):
    status: str = "success"
    count: int


class SalesLeadRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    message: str = Field(..., min_length=1)
    locale: Locale
    company: Optional[str] = None
    company_size: Optional[CompanySize] = None
    plan: Optional[str] = Field(None, description="Plan the lead is interested in")


class SalesLeadResponse(CamelModel):
    success: bool = True


class SalesLeadListResponse(CamelModel):
    status: str = "success"
    total: int
    leads: List[SalesLead]
