from __future__ import annotations

from pydantic import BaseModel

from rbxdocs.models.metadata import SearchEntry


class ListDocEntriesOutput(BaseModel):
    entries: list[SearchEntry]
    total: int
