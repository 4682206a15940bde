"""
Configuration and Store Tests

- environment parsing into Settings
- backend selection, typed unavailable store
- session atomicity and idempotent ensure() on the memory backend
"""

import os
import sys
from unittest.mock import patch

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.config import STORE_BACKEND_MEMORY, STORE_BACKEND_POSTGRES, load_settings
from app.seed import seed_store
from app.shared.errors import StoreUnavailable
from app.store import MemoryStore, UnavailableStore, build_store
from app.store.models import Locale, Tag, new_id


class TestLoadSettings:

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()
        assert settings.store_backend == STORE_BACKEND_POSTGRES
        assert settings.database_url is None
        assert settings.admin_access_token is None
        assert settings.cors_origins == ("*",)
        assert settings.log_level == "INFO"
        assert not settings.is_production

    def test_values_from_environment(self):
        env = {
            "DATABASE_URL": "postgresql://localhost/vibecode",
            "STORE_BACKEND": "Memory",
            "ADMIN_ACCESS_TOKEN": " secret ",
            "CRON_SECRET": "cron",
            "ENVIRONMENT": "Production",
            "CORS_ORIGINS": "https://a.test, https://b.test,",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        assert settings.store_backend == STORE_BACKEND_MEMORY
        assert settings.admin_access_token == "secret"
        assert settings.cors_origins == ("https://a.test", "https://b.test")
        assert settings.log_level == "DEBUG"
        assert settings.is_production

    def test_blank_secret_treated_as_unset(self):
        settings = load_settings({"ADMIN_ACCESS_TOKEN": "   "})
        assert settings.admin_access_token is None

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            load_settings({"STORE_BACKEND": "sqlite"})


class TestBuildStore:

    def test_memory(self):
        store = build_store(load_settings({"STORE_BACKEND": "memory"}))
        assert isinstance(store, MemoryStore)
        assert store.ping()

    def test_missing_database_url_is_unavailable(self):
        store = build_store(load_settings({}))
        assert isinstance(store, UnavailableStore)
        assert not store.ping()
        with pytest.raises(StoreUnavailable):
            with store.session():
                pass

    def test_unavailable_store_maps_to_503(self, settings):
        from fastapi.testclient import TestClient
        from api_server import create_app

        client = TestClient(create_app(settings, UnavailableStore("DATABASE_URL not configured")))
        response = client.get("/api/v1/cases", params={"locale": "nl"})
        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "STORE_UNAVAILABLE"


class TestMemorySession:

    def test_rollback_on_error(self, store):
        with pytest.raises(RuntimeError):
            with store.session() as s:
                s.tags.insert(Tag(id=new_id(), slug="temp", name="Temp"))
                raise RuntimeError("abort")
        with store.session() as s:
            assert s.tags.get_by_slug("temp") is None

    def test_records_copied_out(self, store):
        with store.session() as s:
            tag_id = s.tags.insert(Tag(id=new_id(), slug="ai", name="AI"))
            s.tags.get(tag_id).name = "mutated"
            assert s.tags.get(tag_id).name == "AI"

    def test_ensure_idempotent(self, store):
        with store.session() as s:
            first = s.tags.ensure("ai-tools")
            second = s.tags.ensure("ai-tools")
            assert first == second
            assert len(s.tags.list_all()) == 1

    def test_duplicate_slug_rejected(self, store):
        with pytest.raises(ValueError):
            with store.session() as s:
                s.tags.insert(Tag(id=new_id(), slug="x", name="X"))
                s.tags.insert(Tag(id=new_id(), slug="x", name="X again"))
        with store.session() as s:
            assert s.tags.list_all() == []


class TestSeed:

    def test_idempotent(self, store):
        assert seed_store(store)["cases"] == 5
        assert seed_store(store)["skipped"] is True
        with store.session() as s:
            assert len(s.tags.list_all()) == 5
            assert s.cases.find_by_slug("factuurflow", Locale.NL) is not None
