"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio


@pytest.fixture(autouse=True)
def _env_setup(monkeypatch, tmp_path):
    """Point the app at a throwaway SQLite file and a local RPC URL."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'ensgraph-test.db'}")
    monkeypatch.setenv("DATABASE_ECHO", "false")
    monkeypatch.setenv("ETH_RPC_URL", "http://localhost:8545")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("LOG_FORMAT", "console")


@pytest.fixture
def settings():
    from ensgraph.config import Settings

    return Settings()


@pytest_asyncio.fixture
async def database(settings):
    from ensgraph.db.connection import Database
    from ensgraph.db.schema import init_schema

    db = Database(settings)
    await db.connect()
    await init_schema(db)
    yield db
    await db.close()


@pytest.fixture
def graph_service(database):
    from ensgraph.services.graph_service import GraphService

    return GraphService(database)


@pytest.fixture
def mock_ens_client():
    """Resolution client for an unregistered name; tests override per case."""
    client = AsyncMock()
    client.address = AsyncMock(return_value=None)
    client.get_text = AsyncMock(return_value="")
    return client


@pytest.fixture
def registered_ens_client(mock_ens_client):
    records = {
        "avatar": "https://euc.li/vitalik.eth",
        "com.twitter": "VitalikButerin",
        "com.github": "vbuterin",
        "email": "",
    }

    async def get_text(name: str, key: str) -> str:
        return records[key]

    mock_ens_client.address = AsyncMock(
        return_value="0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
    )
    mock_ens_client.get_text = AsyncMock(side_effect=get_text)
    return mock_ens_client
