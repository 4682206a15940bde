"""
VibeCodeSpace API Server
Showcase of AI-assisted software projects with a moderated submission
pipeline, problem intake and lead capture.

Version 1.0.0
- Cases, tags and tools (public read)
- Submission moderation (approve/reject)
- Problem intake lifecycle and intake-to-case promotion
- Newsletter and sales leads
- Pulse feed ingestion (cron)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import API_VERSION, Settings, load_settings
from app.shared.errors import ShowcaseError, to_http_exception
from app.store import Store, build_store

logger = logging.getLogger(__name__)

API_TITLE = "VibeCodeSpace API"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """
    Build the FastAPI application.

    settings defaults to the environment; store defaults to the backend the
    settings select.
    """
    settings = settings or load_settings()
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{API_TITLE} {API_VERSION} starting (store={store.backend}, env={settings.environment})")
        yield
        store.close()

    app = FastAPI(
        title=API_TITLE,
        description="Showcase of AI-assisted software projects",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # ============================================
    # CORS Configuration
    # ============================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # ============================================
    # Error Handling
    # ============================================
    @app.exception_handler(ShowcaseError)
    async def showcase_error_handler(request: Request, exc: ShowcaseError):
        if exc.http_status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return await http_exception_handler(request, to_http_exception(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # ============================================
    # Routers
    # ============================================
    from app.admin.router import router as admin_router
    from app.cases import router as cases_router
    from app.health import router as health_router
    from app.intake import router as intake_router
    from app.leads import router as leads_router
    from app.pulse import router as pulse_router
    from app.submissions import router as submissions_router

    for router in (
        health_router,
        cases_router,
        submissions_router,
        intake_router,
        leads_router,
        admin_router,
        pulse_router,
    ):
        app.include_router(router)

    return app
