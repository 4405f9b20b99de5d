"""Freshness coordinator: cache, version check, or full download.

Decision order for ``get_metadata()``:

1. Last check within the staleness window and a cached snapshot exists
   → return the cache, no network call.
2. Otherwise fetch the latest release (one request). If its tag equals the
   cached tag and a cached snapshot exists → return the cache. The check time
   is left untouched on this path, so the next call checks again.
3. Otherwise locate the metadata asset, download it (second request), persist
   it with the new tag and check time, and return it.

Network, remote and missing-asset errors propagate to the caller unchanged.
The snapshot is written only after a complete, parsed download, so a failed
or cancelled lookup never leaves a partial record behind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from rbxdocs.cache import now_ms
from rbxdocs.config import STALENESS_WINDOW_MS

if TYPE_CHECKING:
    from collections.abc import Callable

    from rbxdocs.cache import SnapshotCache
    from rbxdocs.models.metadata import MetadataEntry
    from rbxdocs.protocols import ReleaseResolverProtocol

log = structlog.get_logger()


def release_check_is_due(last_checked_at: int | None, now: int, window_ms: int) -> bool:
    """Return True once more than window_ms has elapsed since the last check.

    A missing timestamp always makes the check due.
    """
    if last_checked_at is None:
        return True
    return now - last_checked_at > window_ms


class FreshnessCoordinator:
    """Serves documentation metadata while keeping network round trips rare."""

    def __init__(
        self,
        cache: SnapshotCache,
        resolver: ReleaseResolverProtocol,
        *,
        staleness_window_ms: int = STALENESS_WINDOW_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._cache = cache
        self._resolver = resolver
        self._staleness_window_ms = staleness_window_ms
        self._clock = clock

    async def get_metadata(self) -> list[MetadataEntry]:
        last_checked_at = await self._cache.read_last_checked_at()
        if not release_check_is_due(last_checked_at, self._clock(), self._staleness_window_ms):
            cached = await self._cache.read_metadata()
            if cached is not None:
                log.info("cache_hit", reason="within_staleness_window", entries=len(cached))
                return cached
            log.info("cache_incomplete", reason="metadata_missing_despite_recent_check")

        release = await self._resolver.fetch_latest_release()
        cached_tag = await self._cache.read_version_tag()

        if release.tag_name == cached_tag:
            cached = await self._cache.read_metadata()
            if cached is not None:
                log.info("cache_hit", reason="release_unchanged", tag_name=cached_tag)
                return cached

        asset = self._resolver.find_metadata_asset(release)
        log.info(
            "cache_refresh",
            previous_tag=cached_tag,
            tag_name=release.tag_name,
            asset_url=asset.url,
        )
        metadata = await self._resolver.fetch_metadata_asset(asset)
        await self._cache.write_snapshot(metadata, release.tag_name)
        return metadata
