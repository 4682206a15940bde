"""
Shared helpers: domain errors and slug derivation.
"""

from .errors import DuplicateSlug, InvalidState, NotFound, ShowcaseError, StoreUnavailable, ValidationError
from .slugs import first_free_slug, humanize_slug, promoted_case_slug, slugify, split_stack

__all__ = [
    "ShowcaseError",
    "NotFound",
    "InvalidState",
    "DuplicateSlug",
    "ValidationError",
    "StoreUnavailable",
    "slugify",
    "humanize_slug",
    "split_stack",
    "first_free_slug",
    "promoted_case_slug",
]
