#!/usr/bin/env python3
"""
Run Pulse feed ingestion once, outside the cron endpoint.

Usage:
    python scripts/pulse_ingest.py
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import load_settings  # noqa: E402
from app.pulse import ingest_pulse_items  # noqa: E402
from app.shared.errors import StoreUnavailable  # noqa: E402
from app.store import build_store  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    store = build_store(load_settings())
    try:
        stats = ingest_pulse_items(store)
    except StoreUnavailable as e:
        logger.error(f"Pulse ingestion failed: {e.message}")
        sys.exit(1)
    finally:
        store.close()
    print(f"created={stats['created']} skipped={stats['skipped']} failed={stats['failed']}")


if __name__ == '__main__':
    main()
