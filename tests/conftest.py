"""
Shared fixtures: an app wired to a throwaway SQLite database per test.
"""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

TEST_SECRET = "test-secret"
PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Cheap work factor for everything except the dedicated hashing test."""
    monkeypatch.setattr("auth.password.BCRYPT_ROUNDS", 4)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "recipes.db"


@pytest.fixture
def settings(db_path):
    return Settings(
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{db_path}",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def count_users(db_path):
    def _count(email):
        with sqlite3.connect(db_path) as conn:
            row = conn.execute("SELECT COUNT(*) FROM users WHERE email = ?", (email,)).fetchone()
        return row[0]

    return _count


@pytest.fixture
def drop_user(db_path):
    def _drop(email):
        with sqlite3.connect(db_path) as conn:
            conn.execute("DELETE FROM users WHERE email = ?", (email,))

    return _drop


def register(client, name="Ana", email="ana@example.com", password=PASSWORD, confirm=None):
    return client.post(
        "/auth/registro",
        json={
            "name": name,
            "email": email,
            "password": password,
            "confirm_password": password if confirm is None else confirm,
        },
    )


def login_headers(client, email="ana@example.com", password=PASSWORD):
    res = client.post("/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def auth_headers(client):
    assert register(client).status_code == 201
    return login_headers(client)
