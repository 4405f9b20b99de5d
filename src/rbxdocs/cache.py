"""Snapshot cache for the downloaded documentation metadata.

The snapshot is one logical record persisted as three string keys, using the
same key names as the original host storage:

    metadata   JSON array of metadata entries
    tagName    release tag the metadata was downloaded from
    timestamp  last check time, integer milliseconds since the epoch

Read failures never cross the SnapshotCache boundary: a missing, unreadable or
undecodable value is reported as ``None``, the same as "not cached yet", so the
coordinator always falls back to the network.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import TypeAdapter, ValidationError

from rbxdocs.models.cache import CacheSnapshot
from rbxdocs.models.metadata import MetadataEntry

if TYPE_CHECKING:
    from collections.abc import Callable

    from rbxdocs.protocols import KeyValueStoreProtocol

log = structlog.get_logger()

METADATA_KEY = "metadata"
TAG_KEY = "tagName"
TIMESTAMP_KEY = "timestamp"

_METADATA_ADAPTER = TypeAdapter(list[MetadataEntry])
_RAW_ARRAY_ADAPTER = TypeAdapter(list[Any])


def now_ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


def dump_metadata(metadata: list[MetadataEntry]) -> str:
    return _METADATA_ADAPTER.dump_json(metadata, exclude_none=True).decode("utf-8")


def parse_metadata(raw: str | bytes) -> list[MetadataEntry]:
    """Decode a metadata JSON array, dropping entries that fail validation.

    Raises ValidationError only when the document itself is not a JSON array.
    """
    metadata: list[MetadataEntry] = []
    for index, item in enumerate(_RAW_ARRAY_ADAPTER.validate_json(raw)):
        try:
            metadata.append(MetadataEntry.model_validate(item))
        except ValidationError as exc:
            log.warning("metadata_entry_skipped", index=index, errors=exc.error_count())
    return metadata


class SnapshotCache:
    """Reads and replaces the cached metadata snapshot."""

    def __init__(
        self,
        store: KeyValueStoreProtocol,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._store = store
        self._clock = clock

    async def read_metadata(self) -> list[MetadataEntry] | None:
        """Return the cached metadata, or ``None`` if absent or undecodable."""
        raw = await self._store.get(METADATA_KEY)
        if not raw:
            return None
        try:
            return parse_metadata(raw)
        except ValidationError:
            log.warning("cache_read_error", key=METADATA_KEY, exc_info=True)
            return None

    async def read_version_tag(self) -> str | None:
        return await self._store.get(TAG_KEY)

    async def read_last_checked_at(self) -> int | None:
        """Return the last check time in milliseconds, or ``None``."""
        raw = await self._store.get(TIMESTAMP_KEY)
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            log.warning("cache_read_error", key=TIMESTAMP_KEY, value=raw)
            return None

    async def read_snapshot(self) -> CacheSnapshot | None:
        """Return the full record, or ``None`` unless all three fields are readable."""
        metadata = await self.read_metadata()
        version_tag = await self.read_version_tag()
        last_checked_at = await self.read_last_checked_at()
        if metadata is None or version_tag is None or last_checked_at is None:
            return None
        return CacheSnapshot(
            metadata=metadata,
            version_tag=version_tag,
            last_checked_at=last_checked_at,
        )

    async def write_snapshot(self, metadata: list[MetadataEntry], version_tag: str) -> bool:
        """Replace metadata, tag and timestamp together.

        Non-fatal on failure; returns whether the record was written.
        """
        written = await self._store.set_many(
            {
                METADATA_KEY: dump_metadata(metadata),
                TAG_KEY: version_tag,
                TIMESTAMP_KEY: str(self._clock()),
            }
        )
        if written:
            log.info("snapshot_written", version_tag=version_tag, entries=len(metadata))
        else:
            log.warning("snapshot_write_skipped", version_tag=version_tag)
        return written

    async def clear(self) -> bool:
        """Drop the snapshot so the next lookup downloads a fresh copy."""
        cleared = await self._store.remove_many([METADATA_KEY, TAG_KEY, TIMESTAMP_KEY])
        if cleared:
            log.info("snapshot_cleared")
        return cleared
