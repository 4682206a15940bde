#!/usr/bin/env python3
"""
Seed the configured store with sample tags, tools and cases.

Usage:
    python scripts/seed.py
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import load_settings  # noqa: E402
from app.seed import seed_store  # noqa: E402
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
        result = seed_store(store)
    except StoreUnavailable as e:
        logger.error(f"Seed failed: {e.message}")
        sys.exit(1)
    finally:
        store.close()
    logger.info(result["message"])


if __name__ == '__main__':
    main()
