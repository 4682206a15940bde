"""
Slug helpers shared by the moderation and admin workflows.
"""

import re
import secrets
import string
from typing import Callable, List

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WORD_START = re.compile(r"(^|\s)(\S)")

BASE36_ALPHABET = string.digits + string.ascii_lowercase
PROMOTED_SLUG_MAX_LENGTH = 40
PROMOTED_SLUG_SUFFIX_LENGTH = 6


def slugify(title: str) -> str:
    """
    Derive a URL slug from a title.

    "My Cool Project!!" -> "my-cool-project"
    """
    return _NON_ALNUM.sub("-", title.lower()).strip("-")


def humanize_slug(slug: str) -> str:
    """
    Display name for a lazily created tag or tool.

    "new-tag" -> "New Tag"
    """
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), slug.replace("-", " "))


def split_stack(stack_text: str) -> List[str]:
    """Comma-separated stack description -> trimmed, non-empty entries."""
    return [token.strip() for token in stack_text.split(",") if token.strip()]


def first_free_slug(base: str, is_taken: Callable[[str], bool]) -> str:
    """
    Return base if free, else base-2, base-3, ... whichever is free first.
    """
    if not is_taken(base):
        return base
    n = 2
    while is_taken(f"{base}-{n}"):
        n += 1
    return f"{base}-{n}"


def random_suffix(length: int = PROMOTED_SLUG_SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def promoted_case_slug(title: str) -> str:
    """
    Slug for a draft case promoted from an intake: truncated title slug plus
    a random base36 suffix, so repeated promotions never collide.
    """
    base = slugify(title)[:PROMOTED_SLUG_MAX_LENGTH].rstrip("-")
    suffix = random_suffix()
    return f"{base}-{suffix}" if base else suffix
