"""
Public Case Read Models
"""

from typing import List

from pydantic import Field

from app.store.models import CamelModel, Case, Tag, Tool


class RelationRef(CamelModel):
    """Resolved tag or tool reference."""
    slug: str
    name: str


class CaseWithRelations(Case):
    """Case with tag/tool ids resolved to {slug, name} pairs."""
    tags: List[RelationRef] = Field(default_factory=list)
    tools: List[RelationRef] = Field(default_factory=list)


class CaseListResponse(CamelModel):
    status: str = "success"
    total: int
    cases: List[CaseWithRelations]


class TagListResponse(CamelModel):
    status: str = "success"
    total: int
    tags: List[Tag]


class ToolListResponse(CamelModel):
    status: str = "success"
    total: int
    tools: List[Tool]
