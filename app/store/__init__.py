"""
VibeCodeSpace Lead/Content Store

Records, repositories and the backends that hold them.

Usage:
    from app.store import build_store

    store = build_store(settings)
    with store.session() as s:
        s.tags.ensure("ai-tools")
"""

import logging

from app.config import STORE_BACKEND_MEMORY, Settings

from .base import Store, StoreSession, UnavailableStore
from .memory import MemoryStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> Store:
    """
    Construct the configured backend.

    A postgres backend without DATABASE_URL yields an UnavailableStore, so
    requests fail with StoreUnavailable instead of a null client.
    """
    if settings.store_backend == STORE_BACKEND_MEMORY:
        logger.info("Using in-memory store backend")
        return MemoryStore()

    if not settings.database_url:
        logger.warning("DATABASE_URL not set - store unavailable")
        return UnavailableStore("DATABASE_URL not configured")

    from .postgres import PostgresStore
    return PostgresStore(settings.database_url)


__all__ = [
    "build_store",
    "Store",
    "StoreSession",
    "UnavailableStore",
    "MemoryStore",
]
