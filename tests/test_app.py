"""
Tests for settings and application startup.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app


class TestSettings:
    def test_secret_from_legacy_env_name(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        monkeypatch.setenv("SECRET", "legacy")
        assert Settings().jwt_secret == "legacy"

    def test_secret_from_jwt_env_name(self, monkeypatch):
        monkeypatch.delenv("SECRET", raising=False)
        monkeypatch.setenv("JWT_SECRET", "modern")
        assert Settings().jwt_secret == "modern"

    def test_explicit_settings_reach_the_app(self, settings):
        app = create_app(settings)
        assert app.state.settings is settings


class TestStartup:
    def test_unreachable_database_blocks_startup(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}"
        app = create_app(Settings(jwt_secret="s", database_url=url))
        with pytest.raises(Exception):
            with TestClient(app):
                pass

    def test_tables_created_on_startup(self, client, db_path):
        import sqlite3

        with sqlite3.connect(db_path) as conn:
            tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert "users" in tables


class TestRequestContext:
    def test_request_id_generated(self, client):
        res = client.get("/")
        assert res.headers["X-Request-ID"]
        assert "X-Process-Time" in res.headers

    def test_request_id_propagated(self, client):
        res = client.get("/", headers={"X-Request-ID": "abc-123"})
        assert res.headers["X-Request-ID"] == "abc-123"

    def test_error_responses_carry_request_id(self, client):
        res = client.get("/usuario", headers={"X-Request-ID": "req-401"})
        assert res.status_code == 401
        assert res.headers["X-Request-ID"] == "req-401"


class TestAppFactory:
    def test_importing_main_builds_no_app(self):
        import main

        assert not hasattr(main, "app")

    def test_each_call_builds_a_fresh_app(self, settings):
        assert create_app(settings) is not create_app(settings)
