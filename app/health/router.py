"""
Deployment Health Check Endpoints
=================================
Liveness for load balancers plus a component report of the deployed
VibeCodeSpace API.
"""

import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_settings, get_store
from app.config import API_VERSION, Settings
from app.store import Store
from app.store.models import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/api/health")
def health():
    """Quick health check for load balancers."""
    return {"status": "ok"}


@router.get("/api/v1/health/deployment")
def deployment_health(
    settings: Settings = Depends(get_settings),
    store: Store = Depends(get_store),
):
    """
    Component report.
    Verifies the store is reachable and lists recent migrations.
    """
    status = {
        "timestamp": utcnow().isoformat(),
        "api_version": API_VERSION,
        "environment": settings.environment,
        "components": {},
    }

    reachable = store.ping()
    status["components"]["store"] = {
        "status": "healthy" if reachable else "error",
        "backend": store.backend,
    }

    if reachable:
        try:
            status["components"]["migrations"] = {
                "status": "healthy",
                "recent_migrations": store.recent_migrations(),
            }
        except Exception as e:
            logger.warning(f"Migration status check failed: {e}")
            status["components"]["migrations"] = {"status": "error", "error": str(e)}

    all_healthy = all(c.get("status") == "healthy" for c in status["components"].values())
    status["overall_status"] = "healthy" if all_healthy else "degraded"
    return status
