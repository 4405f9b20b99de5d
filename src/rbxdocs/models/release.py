from __future__ import annotations

from pydantic import BaseModel


class ReleaseAsset(BaseModel):
    name: str
    url: str  # API URL; serves the binary content when asked for application/octet-stream


class ReleaseInfo(BaseModel):
    """The fields of a GitHub "latest release" payload that are used."""

    tag_name: str
    assets: list[ReleaseAsset] = []
