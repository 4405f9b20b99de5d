from __future__ import annotations

from pydantic import BaseModel


class SubEntry(BaseModel):
    """Section of a documentation page, e.g. a class member or a heading."""

    title: str  # May embed an anchor after ':' or '.', e.g. "Signal:Connect"
    type: str = ""
    description: str | None = None


class MetadataEntry(BaseModel):
    """Single page in files_metadata.json."""

    title: str
    type: str = ""
    path: str  # Source path, e.g. "content/en-us/reference/engine/classes/Part.yaml"
    description: str | None = None
    subitems: list[SubEntry] | None = None


class SearchEntry(BaseModel):
    """Flat, deep-linked record handed to the list UI."""

    title: str
    type: str
    url: str
