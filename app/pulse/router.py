"""
Cron Endpoints

- GET /api/cron/pulse-ingest

Called by the scheduler. When CRON_SECRET is set the request must carry
"Authorization: Bearer <CRON_SECRET>".
"""

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from app.config import Settings
from app.dependencies import get_settings, get_store
from app.store import Store, UnavailableStore
from app.store.models import utcnow

from .ingest import ingest_pulse_items

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/cron",
    tags=["cron"],
)


def _authorized(authorization: Optional[str], secret: str) -> bool:
    if not authorization:
        return False
    return hmac.compare_digest(authorization.encode(), f"Bearer {secret}".encode())


@router.get("/pulse-ingest")
def pulse_ingest(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    store: Store = Depends(get_store),
):
    if settings.cron_secret and not _authorized(authorization, settings.cron_secret):
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    if isinstance(store, UnavailableStore):
        return JSONResponse(status_code=500, content={"error": store.reason})

    try:
        stats = ingest_pulse_items(store)
    except Exception as e:
        logger.error(f"Pulse ingestion failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Ingestion failed", "message": str(e)},
        )

    return {
        "success": True,
        "timestamp": utcnow().isoformat(),
        "stats": stats,
    }
