"""
Public Read Endpoints

- GET /api/v1/cases?locale=nl&tag=<slug>&tool=<slug>
- GET /api/v1/cases/{locale}/{slug}
- GET /api/v1/tags
- GET /api/v1/tools
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import get_store
from app.store import Store
from app.store.models import Locale

from . import queries
from .models import CaseListResponse, CaseWithRelations, TagListResponse, ToolListResponse

router = APIRouter(
    prefix="/api/v1",
    tags=["cases"],
)


@router.get("/cases", response_model=CaseListResponse)
def list_cases(
    locale: Locale = Query(..., description="nl | en | es"),
    tag: Optional[str] = Query(None, description="Tag slug filter"),
    tool: Optional[str] = Query(None, description="Tool slug filter"),
    store: Store = Depends(get_store),
):
    """Published cases for a locale. Unknown tag/tool slugs return an empty list."""
    cases = queries.list_published(store, locale, tag_slug=tag, tool_slug=tool)
    return CaseListResponse(total=len(cases), cases=cases)


@router.get("/cases/{locale}/{slug}", response_model=CaseWithRelations)
def get_case(
    locale: Locale,
    slug: str,
    store: Store = Depends(get_store),
):
    case = queries.get_by_slug(store, locale, slug)
    if case is None:
        raise HTTPException(status_code=404, detail=f"Case not found: {slug}")
    return case


@router.get("/tags", response_model=TagListResponse)
def list_tags(store: Store = Depends(get_store)):
    tags = queries.list_tags(store)
    return TagListResponse(total=len(tags), tags=tags)


@router.get("/tools", response_model=ToolListResponse)
def list_tools(store: Store = Depends(get_store)):
    tools = queries.list_tools(store)
    return ToolListResponse(total=len(tools), tools=tools)
