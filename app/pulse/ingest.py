"""
Pulse Ingestion

Pulls recent entries from a fixed set of RSS/Atom feeds and stores the new
ones as draft PulseItems for editorial review. Used by the cron endpoint
and by scripts/pulse_ingest.py.

Deduplication is by external id, derived from the source and the entry link,
so re-running ingestion over the same feeds creates nothing new.
"""

import base64
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Dict, List, Optional, Sequence

import httpx
from bs4 import BeautifulSoup

from app.shared.errors import StoreUnavailable
from app.store import Store
from app.store.models import CaseStatus, PulseItem, PulseSource, new_id, utcnow

logger = logging.getLogger(__name__)

MAX_ITEMS_PER_FEED = 10
FETCH_TIMEOUT = 10.0
USER_AGENT = "VibeCodeSpace Pulse Bot/1.0"
SUMMARY_MAX_LENGTH = 1000

ATOM_NS = "{http://www.w3.org/2005/Atom}"
DC_CREATOR = "{http://purl.org/dc/elements/1.1/}creator"


@dataclass(frozen=True)
class FeedConfig:
    url: str
    source: PulseSource
    name: str


FEEDS: List[FeedConfig] = [
    FeedConfig("https://hnrss.org/frontpage", PulseSource.HACKER_NEWS, "HN Frontpage"),
    FeedConfig("https://hnrss.org/show", PulseSource.HACKER_NEWS, "HN Show"),
    FeedConfig("https://www.producthunt.com/feed", PulseSource.PRODUCT_HUNT, "Product Hunt"),
    FeedConfig("https://dev.to/feed/tag/ai", PulseSource.DEVTO, "Dev.to AI"),
    FeedConfig("https://dev.to/feed/tag/buildinpublic", PulseSource.DEVTO, "Dev.to BuildInPublic"),
    FeedConfig("https://www.indiehackers.com/feed.xml", PulseSource.INDIE_HACKERS, "Indie Hackers"),
]


@dataclass
class FeedEntry:
    external_id: str
    source: PulseSource
    title: str
    link: str
    author: Optional[str] = None
    published_at: Optional[datetime] = None
    summary: Optional[str] = None


def external_id(source: PulseSource, link: str) -> str:
    """Deterministic id: source plus the first 20 chars of base64(link) without +/=."""
    encoded = base64.b64encode(link.encode("utf-8")).decode("ascii")
    url_hash = re.sub(r"[+/=]", "", encoded)[:20]
    return f"{source.value}-{url_hash}"


# =============================================
# Feed parsing
# =============================================

def _text(element: Optional[ET.Element]) -> Optional[str]:
    if element is None or element.text is None:
        return None
    value = element.text.strip()
    return value or None


def _plain(value: Optional[str]) -> Optional[str]:
    """Feed summaries are HTML fragments; keep the text with entities decoded."""
    if not value:
        return None
    stripped = BeautifulSoup(value, "html.parser").get_text(" ", strip=True)
    return stripped[:SUMMARY_MAX_LENGTH] or None


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _rss_entries(root: ET.Element) -> List[Dict[str, Optional[str]]]:
    entries = []
    for item in root.iter("item"):
        entries.append({
            "title": _text(item.find("title")),
            "link": _text(item.find("link")) or _text(item.find("guid")),
            "author": _text(item.find(DC_CREATOR)) or _text(item.find("author")),
            "published": _text(item.find("pubDate")),
            "summary": _text(item.find("description")),
        })
    return entries


def _atom_entries(root: ET.Element) -> List[Dict[str, Optional[str]]]:
    entries = []
    for entry in root.iter(f"{ATOM_NS}entry"):
        link = None
        for link_el in entry.findall(f"{ATOM_NS}link"):
            if link_el.get("rel", "alternate") == "alternate" and link_el.get("href"):
                link = link_el.get("href")
                break
        entries.append({
            "title": _text(entry.find(f"{ATOM_NS}title")),
            "link": link or _text(entry.find(f"{ATOM_NS}id")),
            "author": _text(entry.find(f"{ATOM_NS}author/{ATOM_NS}name")),
            "published": _text(entry.find(f"{ATOM_NS}published")) or _text(entry.find(f"{ATOM_NS}updated")),
            "summary": _text(entry.find(f"{ATOM_NS}summary")) or _text(entry.find(f"{ATOM_NS}content")),
        })
    return entries


def parse_feed(content: bytes, source: PulseSource) -> List[FeedEntry]:
    """Parse an RSS 2.0 or Atom document into at most MAX_ITEMS_PER_FEED entries."""
    root = ET.fromstring(content)
    raw = _atom_entries(root) if root.tag == f"{ATOM_NS}feed" else _rss_entries(root)

    entries = []
    for item in raw[:MAX_ITEMS_PER_FEED]:
        link = item["link"] or ""
        entries.append(FeedEntry(
            external_id=external_id(source, link),
            source=source,
            title=item["title"] or "Untitled",
            link=link,
            author=item["author"],
            published_at=_parse_date(item["published"]),
            summary=_plain(item["summary"]),
        ))
    return entries


def fetch_feed(client: httpx.Client, feed: FeedConfig) -> List[FeedEntry]:
    """Fetch one feed. A failing feed logs and yields no entries."""
    logger.info(f"Fetching {feed.name}")
    try:
        response = client.get(feed.url)
        response.raise_for_status()
        entries = parse_feed(response.content, feed.source)
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch {feed.name}: {e}")
        return []
    except ET.ParseError as e:
        logger.warning(f"Failed to parse {feed.name}: {e}")
        return []
    logger.info(f"{feed.name}: {len(entries)} items")
    return entries


# =============================================
# Ingestion
# =============================================

def _store_entry(store: Store, entry: FeedEntry) -> bool:
    """Insert the entry unless it is already stored. Returns True when created."""
    with store.session() as s:
        if s.pulse.exists(entry.external_id):
            return False
        s.pulse.insert(PulseItem(
            id=new_id(),
            external_id=entry.external_id,
            source=entry.source,
            title=entry.title,
            link=entry.link,
            author=entry.author,
            published_at=entry.published_at,
            summary=entry.summary,
            status=CaseStatus.DRAFT,
            created_at=utcnow(),
        ))
    return True


def ingest_pulse_items(
    store: Store,
    client: Optional[httpx.Client] = None,
    feeds: Sequence[FeedConfig] = FEEDS,
) -> Dict[str, int]:
    """
    Fetch every feed and store new entries.

    Returns {"created", "skipped", "failed"} counts. Entries without a link
    and entries already stored count as skipped; entries whose insert fails
    count as failed. StoreUnavailable propagates.
    """
    stats = {"created": 0, "skipped": 0, "failed": 0}

    owns_client = client is None
    if owns_client:
        client = httpx.Client(
            timeout=FETCH_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
    try:
        entries = [entry for feed in feeds for entry in fetch_feed(client, feed)]
    finally:
        if owns_client:
            client.close()

    logger.info(f"Pulse ingestion: {len(entries)} items fetched")

    for entry in entries:
        if not entry.link:
            stats["skipped"] += 1
            continue
        try:
            created = _store_entry(store, entry)
        except StoreUnavailable:
            raise
        except Exception as e:
            logger.error(f"Failed to store pulse item {entry.external_id}: {e}")
            stats["failed"] += 1
            continue
        stats["created" if created else "skipped"] += 1

    logger.info(
        f"Pulse ingestion done: created={stats['created']} "
        f"skipped={stats['skipped']} failed={stats['failed']}"
    )
    return stats
