"""
Published-Case Read Tests

- only published cases are visible
- tag/tool filters combine, unknown slugs give an empty list
- relations resolve to {slug, name}
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.cases import get_by_slug, list_published, list_tags, list_tools
from app.seed import SEED_CASES, seed_store
from app.store.models import Case, CaseStatus, Locale, new_id


@pytest.fixture
def seeded(store):
    seed_store(store)
    return store


def _add_case(store, slug, status, locale=Locale.NL, tag_ids=None):
    with store.session() as s:
        s.cases.insert(Case(
            id=new_id(),
            slug=slug,
            title=slug.title(),
            one_liner="x",
            locale=locale,
            status=status,
            tag_ids=tag_ids or [],
        ))


class TestListPublished:

    def test_all_seeded_cases(self, seeded):
        cases = list_published(seeded, Locale.NL)
        assert {c.slug for c in cases} == {c["slug"] for c in SEED_CASES}

    def test_other_locale_empty(self, seeded):
        assert list_published(seeded, Locale.EN) == []

    def test_drafts_hidden(self, seeded):
        _add_case(seeded, "hidden-draft", CaseStatus.DRAFT)
        assert "hidden-draft" not in {c.slug for c in list_published(seeded, Locale.NL)}

    def test_tag_filter(self, seeded):
        cases = list_published(seeded, Locale.NL, tag_slug="automation")
        assert {c.slug for c in cases} == {"code-review-bot", "meetingmind"}

    def test_tag_and_tool_filters_combine(self, seeded):
        cases = list_published(seeded, Locale.NL, tag_slug="rapid-prototype", tool_slug="cursor")
        assert {c.slug for c in cases} == {"factuurflow", "portfolio-generator", "component-library"}

        cases = list_published(seeded, Locale.NL, tag_slug="automation", tool_slug="bolt")
        assert [c.slug for c in cases] == ["meetingmind"]

    def test_unknown_tag_is_empty_not_error(self, seeded):
        assert list_published(seeded, Locale.EN, tag_slug="nonexistent-tag") == []
        assert list_published(seeded, Locale.NL, tag_slug="nonexistent-tag") == []

    def test_unknown_tool_is_empty(self, seeded):
        assert list_published(seeded, Locale.NL, tool_slug="nonexistent-tool") == []

    def test_relations_resolved_in_order(self, seeded):
        case = get_by_slug(seeded, Locale.NL, "meetingmind")
        assert [t.slug for t in case.tags] == ["ai-native", "automation", "saas"]
        assert [t.name for t in case.tools] == ["Claude", "Bolt"]

    def test_dangling_relation_dropped(self, store):
        _add_case(store, "orphan", CaseStatus.PUBLISHED, tag_ids=["missing-tag-id"])
        [case] = list_published(store, Locale.NL)
        assert case.tags == []


class TestGetBySlug:

    def test_found(self, seeded):
        case = get_by_slug(seeded, Locale.NL, "factuurflow")
        assert case.title == "FactuurFlow"
        assert case.stack == ["Next.js", "Prisma", "Stripe", "Tailwind"]

    def test_missing_is_none(self, seeded):
        assert get_by_slug(seeded, Locale.NL, "some-slug") is None

    def test_draft_is_none(self, seeded):
        _add_case(seeded, "some-slug", CaseStatus.DRAFT)
        assert get_by_slug(seeded, Locale.NL, "some-slug") is None

    def test_locale_scoped(self, seeded):
        assert get_by_slug(seeded, Locale.EN, "factuurflow") is None


class TestTaxonomy:

    def test_lists(self, seeded):
        assert len(list_tags(seeded)) == 5
        assert {t.slug for t in list_tools(seeded)} == {"claude", "cursor", "v0", "bolt", "copilot"}


class TestCaseEndpoints:

    def test_list_requires_locale(self, client):
        assert client.get("/api/v1/cases").status_code == 422

    def test_list_invalid_locale(self, client):
        assert client.get("/api/v1/cases", params={"locale": "de"}).status_code == 422

    def test_list_camel_case(self, client, store):
        seed_store(store)
        response = client.get("/api/v1/cases", params={"locale": "nl", "tool": "v0"})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert "oneLiner" in body["cases"][0]
        assert "tagIds" in body["cases"][0]

    def test_detail_404(self, client, store):
        seed_store(store)
        assert client.get("/api/v1/cases/nl/factuurflow").status_code == 200
        assert client.get("/api/v1/cases/nl/nope").status_code == 404

    def test_tags_and_tools(self, client, store):
        seed_store(store)
        assert client.get("/api/v1/tags").json()["total"] == 5
        tools = client.get("/api/v1/tools").json()["tools"]
        assert any(t["websiteUrl"] == "https://claude.ai" for t in tools)
