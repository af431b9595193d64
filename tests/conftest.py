"""Pytest configuration and shared fixtures for FinControl tests.

Every test gets its own SQLite file under ``tmp_path`` so nothing touches the
real application database.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import pytest

from fincontrol import create_app
from fincontrol.config import TestConfig
from fincontrol.infra.database import bootstrap_database
from fincontrol.infra.repositories import SQLModelTransactionRepository, SQLModelUserRepository

API_BASE = "http://fincontrol.test"


# =============================================================================
# Configuration / application
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> TestConfig:
    """TestConfig pointing at a throwaway data dir and SQLite file."""

    monkeypatch.setenv("FINCONTROL_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FINCONTROL_DATABASE_URL", f"sqlite:///{tmp_path / 'fincontrol-test.db'}")
    monkeypatch.setenv("FINCONTROL_SECRET_KEY", "test-secret")
    monkeypatch.delenv("FINCONTROL_TOKEN_TTL_MINUTES", raising=False)
    return TestConfig()


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def services(app):
    return app.extensions["fincontrol"]


# =============================================================================
# Repositories without the Flask app
# =============================================================================


@pytest.fixture
def session_factory(config):
    engine, factory = bootstrap_database(config)
    yield factory
    engine.dispose()


@pytest.fixture
def user_repo(session_factory) -> SQLModelUserRepository:
    return SQLModelUserRepository(session_factory)


@pytest.fixture
def transaction_repo(session_factory) -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(session_factory)


@pytest.fixture
def owner_ids(user_repo) -> tuple[int, int]:
    """Two users to check owner scoping against."""

    alice = user_repo.create("alice", "dummy-hash")
    bob = user_repo.create("bob", "dummy-hash")
    return alice.id, bob.id  # type: ignore[return-value]


# =============================================================================
# HTTP helpers
# =============================================================================


@pytest.fixture
def transaction_payload() -> Callable[..., dict[str, Any]]:
    """Factory for valid transaction request bodies."""

    def _payload(**overrides: Any) -> dict[str, Any]:
        body = {
            "type": "Ingreso",
            "date": "2024-01-05",
            "description": "Salary",
            "amount": 1000,
            "category": "Work",
            "account": "Checking",
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def login(client) -> Callable[[str, str], str]:
    """Register (if needed) and log in, returning the bearer token."""

    def _login(username: str = "alice", password: str = "secret123") -> str:
        client.post("/api/auth/register", json={"username": username, "password": password})
        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.get_data(as_text=True)
        return response.get_json()["token"]

    return _login


@pytest.fixture
def auth_headers(login) -> Callable[..., dict[str, str]]:
    def _headers(username: str = "alice", password: str = "secret123") -> dict[str, str]:
        return {"Authorization": f"Bearer {login(username, password)}"}

    return _headers


class _TransportResponse:
    """Just enough of ``requests.Response`` for ApiClient."""

    def __init__(self, response) -> None:
        self.status_code = response.status_code
        self.ok = response.status_code < 400
        self.content = response.data

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def json(self):
        return json.loads(self.text)


class FlaskTransport:
    """Routes ``session.request`` calls made by ApiClient into a Flask test client."""

    def __init__(self, test_client) -> None:
        self.test_client = test_client
        self.calls: list[tuple[str, str]] = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = url[len(API_BASE):] if url.startswith(API_BASE) else url
        self.calls.append((method, path))
        kwargs: dict[str, Any] = {"method": method, "headers": headers or {}}
        if json is not None:
            kwargs["json"] = json
        return _TransportResponse(self.test_client.open(path, **kwargs))


@pytest.fixture
def transport(client) -> FlaskTransport:
    return FlaskTransport(client)


@pytest.fixture
def api_client(transport, login):
    from fincontrol.client.api import ApiClient

    return ApiClient(API_BASE, token=login(), session=transport)


@pytest.fixture
def api_base() -> str:
    return API_BASE
