"""
VibeCodeSpace Runtime Configuration

Reads environment variables once at startup into a frozen Settings object.
Every component receives its configuration from here instead of calling
os.getenv at import time.

Version: config_v1
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


API_VERSION = "1.0.0"

STORE_BACKEND_POSTGRES = "postgres"
STORE_BACKEND_MEMORY = "memory"
STORE_BACKENDS = (STORE_BACKEND_POSTGRES, STORE_BACKEND_MEMORY)


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration."""
    database_url: Optional[str] = None
    store_backend: str = STORE_BACKEND_POSTGRES
    admin_access_token: Optional[str] = None
    cron_secret: Optional[str] = None
    environment: str = "development"
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Raises ValueError for an unknown STORE_BACKEND so a typo fails at startup
    rather than at the first request.
    """
    env = os.environ if environ is None else environ

    backend = (_clean(env.get("STORE_BACKEND")) or STORE_BACKEND_POSTGRES).lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(
            f"Unknown STORE_BACKEND '{backend}'. Expected one of: {', '.join(STORE_BACKENDS)}"
        )

    origins_raw = _clean(env.get("CORS_ORIGINS")) or "*"
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip())

    return Settings(
        database_url=_clean(env.get("DATABASE_URL")),
        store_backend=backend,
        admin_access_token=_clean(env.get("ADMIN_ACCESS_TOKEN")),
        cron_secret=_clean(env.get("CRON_SECRET")),
        environment=(_clean(env.get("ENVIRONMENT")) or "development").lower(),
        cors_origins=origins or ("*",),
        log_level=(_clean(env.get("LOG_LEVEL")) or "INFO").upper(),
    )
