"""
Pulse: external news ingestion for editorial review.
"""

from .ingest import FEEDS, FeedConfig, external_id, fetch_feed, ingest_pulse_items, parse_feed
from .router import router

__all__ = [
    "router",
    "FEEDS",
    "FeedConfig",
    "external_id",
    "fetch_feed",
    "ingest_pulse_items",
    "parse_feed",
]
