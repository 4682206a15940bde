"""
Public Read API over published cases and the tag/tool taxonomy.
"""

from .queries import get_by_slug, list_published, list_tags, list_tools
from .router import router

__all__ = [
    "router",
    "get_by_slug",
    "list_published",
    "list_tags",
    "list_tools",
]
