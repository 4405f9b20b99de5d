"""Integration test fixtures.

Provides a fully wired AppState with in-memory SQLite and a real httpx client
(mocked with respx in the tests), plus an isolated environment for
subprocess-based MCP tests.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import aiosqlite
import httpx
import pytest

from rbxdocs.cache import SnapshotCache
from rbxdocs.config import Settings
from rbxdocs.coordinator import FreshnessCoordinator
from rbxdocs.release import ReleaseResolver
from rbxdocs.state import AppState
from rbxdocs.store import KeyValueStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Points the cache database to an isolated tmp directory and the release
    endpoint to a port nothing listens on.
    """
    env = os.environ.copy()
    env["RBXDOCS__CACHE__DB_PATH"] = str(tmp_path / "cache.db")
    env["RBXDOCS__RELEASE__LATEST_RELEASE_URL"] = "http://127.0.0.1:1/releases/latest"
    env["RBXDOCS__HTTP__CONNECT_TIMEOUT_SECONDS"] = "2"
    return env


@pytest.fixture()
async def app_state(clock) -> AsyncGenerator[AppState, None]:
    """Full AppState wired for integration tests."""
    async with aiosqlite.connect(":memory:") as db:
        store = KeyValueStore(db)
        await store.init_db()

        async with httpx.AsyncClient(follow_redirects=True) as client:
            settings = Settings()
            resolver = ReleaseResolver(client, settings.release)
            cache = SnapshotCache(store, clock=clock)
            coordinator = FreshnessCoordinator(cache, resolver, clock=clock)

            yield AppState(
                settings=settings,
                cache=cache,
                coordinator=coordinator,
            )
