"""
Slug Helper Tests

- Title -> slug derivation
- Display names for lazily created tags/tools
- Stack splitting
- Collision suffixes and promoted-case slugs
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.shared.slugs import (
    BASE36_ALPHABET,
    PROMOTED_SLUG_MAX_LENGTH,
    PROMOTED_SLUG_SUFFIX_LENGTH,
    first_free_slug,
    humanize_slug,
    promoted_case_slug,
    slugify,
    split_stack,
)


class TestSlugify:
    """Non-alphanumeric runs collapse to one hyphen, none at the ends."""

    def test_punctuation_collapsed(self):
        assert slugify("My Cool Project!!") == "my-cool-project"

    def test_leading_and_trailing_stripped(self):
        assert slugify("  --Hello, World--  ") == "hello-world"

    def test_non_ascii_letters_become_separators(self):
        assert slugify("Café Übersicht") == "caf-bersicht"

    def test_only_symbols_gives_empty(self):
        assert slugify("!!!") == ""


class TestHumanizeSlug:

    def test_words_capitalized(self):
        assert humanize_slug("new-tag") == "New Tag"

    def test_single_word(self):
        assert humanize_slug("automation") == "Automation"

    def test_digits_untouched(self):
        assert humanize_slug("v0") == "V0"


class TestSplitStack:

    def test_trims_and_drops_empty(self):
        assert split_stack(" Next.js , ,Prisma,  ") == ["Next.js", "Prisma"]

    def test_empty_text(self):
        assert split_stack("") == []


class TestFirstFreeSlug:

    def test_free_base_returned(self):
        assert first_free_slug("demo", lambda s: False) == "demo"

    def test_counts_up_past_taken(self):
        taken = {"demo", "demo-2", "demo-3"}
        assert first_free_slug("demo", taken.__contains__) == "demo-4"


class TestPromotedCaseSlug:

    def test_shape(self):
        slug = promoted_case_slug("Automate my invoice reminders")
        base, suffix = slug.rsplit("-", 1)
        assert base == "automate-my-invoice-reminders"
        assert len(suffix) == PROMOTED_SLUG_SUFFIX_LENGTH
        assert all(c in BASE36_ALPHABET for c in suffix)

    def test_long_title_truncated(self):
        slug = promoted_case_slug("x" * 100)
        base, _ = slug.rsplit("-", 1)
        assert len(base) == PROMOTED_SLUG_MAX_LENGTH

    def test_truncation_does_not_leave_double_hyphen(self):
        # 39 chars then a separator at position 40
        slug = promoted_case_slug("a" * 39 + " b")
        assert "--" not in slug

    def test_repeated_calls_differ(self):
        assert promoted_case_slug("Same title") != promoted_case_slug("Same title")
