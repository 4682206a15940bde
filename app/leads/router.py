"""
Lead Capture Endpoints

- POST /api/v1/newsletter/subscribe
- GET  /api/v1/newsletter/count (admin)
- POST /api/v1/sales-leads
- GET  /api/v1/sales-leads (admin)
"""

from fastapi import APIRouter, Depends

from app.admin.auth import require_admin
from app.dependencies import get_store
from app.store import Store

from . import service
from .models import (
    NewsletterCountResponse,
    NewsletterSubscribeRequest,
    NewsletterSubscribeResponse,
    SalesLeadListResponse,
    SalesLeadRequest,
    SalesLeadResponse,
)

router = APIRouter(
    prefix="/api/v1",
    tags=["leads"],
)


@router.post("/newsletter/subscribe", response_model=NewsletterSubscribeResponse)
def subscribe(
    request: NewsletterSubscribeRequest,
    store: Store = Depends(get_store),
):
    already = service.subscribe(store, str(request.email), request.locale, request.source)
    return NewsletterSubscribeResponse(already_subscribed=already)


@router.get("/newsletter/count", response_model=NewsletterCountResponse)
def newsletter_count(
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    return NewsletterCountResponse(count=service.count_subscribers(store))


@router.post("/sales-leads", response_model=SalesLeadResponse, status_code=201)
def submit_sales_lead(
    request: SalesLeadRequest,
    store: Store = Depends(get_store),
):
    service.submit_sales_lead(
        store,
        name=request.name,
        email=str(request.email),
        message=request.message,
        locale=request.locale,
        company=request.company,
        company_size=request.company_size,
        plan=request.plan,
    )
    return SalesLeadResponse()


@router.get("/sales-leads", response_model=SalesLeadListResponse)
def list_sales_leads(
    store: Store = Depends(get_store),
    _: str = Depends(require_admin),
):
    leads = service.list_sales_leads(store)
    return SalesLeadListResponse(total=len(leads), leads=leads)
