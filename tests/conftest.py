from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core.db import get_database
from lists.dependencies import get_list_repository
from main import create_app
from users.dependencies import get_user_repository

from .fakes import FakeDatabase, FakeListRepository, FakeUserRepository, InMemoryStore


@pytest.fixture(autouse=True)
def _jwt_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret-with-enough-bytes-for-hs256")
    monkeypatch.setenv("JWT_ALG", "HS256")


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fake_db(store) -> FakeDatabase:
    return FakeDatabase(store)


@pytest.fixture
def app(store, fake_db):
    app = create_app(database=fake_db)
    app.dependency_overrides[get_database] = lambda: fake_db
    app.dependency_overrides[get_list_repository] = lambda: FakeListRepository(store)
    app.dependency_overrides[get_user_repository] = lambda: FakeUserRepository(store)
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


def register(client: TestClient, email: str, password: str = "correct-horse") -> dict:
    resp = client.post("/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def auth_headers(client) -> dict:
    body = register(client, "alice@example.com")
    return {"Authorization": f"Bearer {body['access_token']}"}
