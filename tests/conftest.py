"""
Pytest fixtures for walletbank tests. Each test gets its own temporary SQLite DB.
"""

from __future__ import annotations

import asyncio
import os
import tempfile

import pytest

# Must be set before walletbank.config is imported
os.environ.setdefault("WALLETBANK_LOG_DIR", tempfile.mkdtemp(prefix="walletbank-logs-"))
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

WALLET = "0x" + "a1" * 20
OTHER_WALLET = "0x" + "B2" * 20


@pytest.fixture
def storage(tmp_path):
    """
    Point the storage gateway at a fresh SQLite file and create the tables.
    """
    from walletbank.db import session

    session.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'walletbank.db'}")
    asyncio.run(session.init_models())
    yield session
    asyncio.run(session.dispose_engine())


@pytest.fixture
def run_db(storage):
    """
    Run `fn(db)` against a new AsyncSession in its own event loop and return the result.
    """

    def _run(fn):
        async def _inner():
            async with storage.AsyncSessionLocal() as db:
                return await fn(db)

        return asyncio.run(_inner())

    return _run


@pytest.fixture
def client(storage):
    """FastAPI TestClient running inside the app lifespan. Depends on storage so the temp DB is bound first."""
    from fastapi.testclient import TestClient

    from walletbank.app import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered(client):
    """Register WALLET through /api/auth and return the user payload."""
    r = client.post("/api/auth", json={"wallet_address": WALLET})
    assert r.status_code == 200
    return r.json()["user"]


@pytest.fixture
def lenient_client(storage):
    """TestClient that returns 500 responses instead of re-raising unhandled server errors."""
    from fastapi.testclient import TestClient

    from walletbank.app import app

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
