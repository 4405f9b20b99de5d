"""Shared test fixtures for the rbxdocs test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import aiosqlite
import pytest

from rbxdocs.cache import SnapshotCache
from rbxdocs.models.metadata import MetadataEntry
from rbxdocs.store import KeyValueStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Mapping, Sequence

ASSET_URL = "https://api.github.com/repos/Sleitnick/rbx-doc-search/releases/assets/101"

NOW_MS = 1_760_000_000_000


class InMemoryStore:
    """Dict-backed KeyValueStoreProtocol implementation."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True

    async def set_many(self, items: Mapping[str, str]) -> bool:
        self.data.update(items)
        return True

    async def remove(self, key: str) -> bool:
        self.data.pop(key, None)
        return True

    async def remove_many(self, keys: Sequence[str]) -> bool:
        for key in keys:
            self.data.pop(key, None)
        return True


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = NOW_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture()
def sample_metadata_raw() -> list[dict]:
    """Two pages in the files_metadata.json shape."""
    return [
        {
            "title": "Part",
            "type": "class",
            "path": "content/en-us/reference/engine/classes/Part.yaml",
            "subitems": [
                {"title": "Part.Shape", "type": "property"},
                {"title": "Part:Resize", "type": "method"},
            ],
        },
        {
            "title": "Scripting",
            "type": "guide",
            "path": "content/en-us/scripting/index.md",
        },
    ]


@pytest.fixture()
def sample_metadata(sample_metadata_raw: list[dict]) -> list[MetadataEntry]:
    return [MetadataEntry.model_validate(item) for item in sample_metadata_raw]


@pytest.fixture()
def release_payload() -> dict:
    return {
        "tag_name": "v2",
        "assets": [
            {"name": "checksums.txt", "url": ASSET_URL.replace("101", "100")},
            {"name": "files_metadata.json", "url": ASSET_URL},
        ],
    }


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def snapshot_cache(memory_store: InMemoryStore, clock: FakeClock) -> SnapshotCache:
    return SnapshotCache(memory_store, clock=clock)


@pytest.fixture()
async def kv_store() -> AsyncGenerator[KeyValueStore, None]:
    """KeyValueStore over an in-memory SQLite database."""
    async with aiosqlite.connect(":memory:") as db:
        store = KeyValueStore(db)
        await store.init_db()
        yield store
