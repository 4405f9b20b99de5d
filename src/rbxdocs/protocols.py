"""Protocol interfaces for swappable components.

The coordinator and snapshot cache reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- Other persistence hosts to be plugged in without changing the coordinator
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from rbxdocs.models.metadata import MetadataEntry
    from rbxdocs.models.release import ReleaseAsset, ReleaseInfo


class KeyValueStoreProtocol(Protocol):
    """String-keyed persistence surface backing the snapshot cache."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> bool: ...

    async def set_many(self, items: Mapping[str, str]) -> bool:
        """Replace all given keys at once, or none of them. True if written."""
        ...

    async def remove(self, key: str) -> bool: ...

    async def remove_many(self, keys: Sequence[str]) -> bool:
        """Delete all given keys at once, or none of them. True if removed."""
        ...


class ReleaseResolverProtocol(Protocol):
    """Interface for the remote release lookup and asset download."""

    async def fetch_latest_release(self) -> ReleaseInfo: ...

    def find_metadata_asset(self, release: ReleaseInfo) -> ReleaseAsset: ...

    async def fetch_metadata_asset(self, asset: ReleaseAsset) -> list[MetadataEntry]: ...
