from __future__ import annotations

from pydantic import BaseModel

from rbxdocs.models.metadata import MetadataEntry


class CacheSnapshot(BaseModel):
    """The last successfully downloaded metadata and when it was last checked."""

    metadata: list[MetadataEntry]
    version_tag: str
    last_checked_at: int  # Milliseconds since the epoch
