"""Shared fixtures for the session test suite."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from helpers import SECRET, RecordingStore, build_app

from signed_session import (
    CookieOptions,
    Session,
    SessionManager,
    SessionSettings,
    override_settings,
)


@pytest.fixture(autouse=True)
def _reset_settings():
    yield
    override_settings(None)


# ── Settings & Manager ────────────────────────────────────────────────────

@pytest.fixture
def test_settings() -> SessionSettings:
    return SessionSettings(secret=SECRET)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def manager(test_settings, store) -> SessionManager:
    return SessionManager(test_settings, store=store)


@pytest.fixture
def make_record(manager):
    """Factory for store records signed with the test secret."""

    def _make(expires: float | None = None, data: dict | None = None) -> dict[str, Any]:
        ids = manager.signer.generate()
        session = Session(
            ids.session_id,
            ids.signed_id,
            CookieOptions(),
            expires=expires,
            data=data,
        )
        return session.to_record()

    return _make

# ── App & Client ──────────────────────────────────────────────────────────

@pytest.fixture
def app(manager) -> FastAPI:
    return build_app(manager)


@pytest.fixture
def client(app) -> TestClient:
    """TestClient over https with cookie persistence."""
    return TestClient(app, base_url="https://testserver", cookies={})


@pytest.fixture
def plain_client(app) -> TestClient:
    """TestClient over plain http."""
    return TestClient(app, base_url="http://testserver", cookies={})
