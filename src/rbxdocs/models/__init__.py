from __future__ import annotations

from rbxdocs.models.cache import CacheSnapshot
from rbxdocs.models.metadata import MetadataEntry, SearchEntry, SubEntry
from rbxdocs.models.release import ReleaseAsset, ReleaseInfo
from rbxdocs.models.tools import ListDocEntriesOutput

__all__ = [
    # metadata
    "MetadataEntry",
    "SubEntry",
    "SearchEntry",
    # release
    "ReleaseAsset",
    "ReleaseInfo",
    # cache
    "CacheSnapshot",
    # tools
    "ListDocEntriesOutput",
]
