"""
Published-Case Read Operations

- list_published(locale, tag_slug, tool_slug): locale + published, optional
  tag/tool filters combined with AND. An unknown filter slug yields [].
- get_by_slug(locale, slug): None when missing *or* not published, so
  callers cannot probe for drafts.

Relation ids that no longer resolve are dropped from the output.
"""

from typing import Dict, List, Optional, Sequence

from app.store import Store, StoreSession
from app.store.models import Case, CaseStatus, Locale, Tag, Tool

from .models import CaseWithRelations, RelationRef


def _resolve(ids: Sequence[str], lookup: Dict[str, RelationRef]) -> List[RelationRef]:
    return [lookup[i] for i in ids if i in lookup]


def _lookups(session: StoreSession):
    tags = {t.id: RelationRef(slug=t.slug, name=t.name) for t in session.tags.list_all()}
    tools = {t.id: RelationRef(slug=t.slug, name=t.name) for t in session.tools.list_all()}
    return tags, tools


def _with_relations(case: Case, tags: Dict[str, RelationRef], tools: Dict[str, RelationRef]) -> CaseWithRelations:
    return CaseWithRelations(
        **case.model_dump(),
        tags=_resolve(case.tag_ids, tags),
        tools=_resolve(case.tool_ids, tools),
    )


def list_published(
    store: Store,
    locale: Locale,
    tag_slug: Optional[str] = None,
    tool_slug: Optional[str] = None,
) -> List[CaseWithRelations]:
    with store.session() as s:
        cases = s.cases.list_by_locale_status(locale, CaseStatus.PUBLISHED)

        if tag_slug:
            tag = s.tags.get_by_slug(tag_slug)
            cases = [c for c in cases if tag.id in c.tag_ids] if tag else []

        if tool_slug:
            tool = s.tools.get_by_slug(tool_slug)
            cases = [c for c in cases if tool.id in c.tool_ids] if tool else []

        if not cases:
            return []

        tags, tools = _lookups(s)

    return [_with_relations(c, tags, tools) for c in cases]


def get_by_slug(store: Store, locale: Locale, slug: str) -> Optional[CaseWithRelations]:
    with store.session() as s:
        case = s.cases.find_by_slug(slug, locale)
        if not case or case.status != CaseStatus.PUBLISHED:
            return None
        tags, tools = _lookups(s)
    return _with_relations(case, tags, tools)


def list_tags(store: Store) -> List[Tag]:
    with store.session() as s:
        return s.tags.list_all()


def list_tools(store: Store) -> List[Tool]:
    with store.session() as s:
        return s.tools.list_all()
