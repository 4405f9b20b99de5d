"""Remote release lookup and metadata asset download.

All network I/O goes through a single httpx.AsyncClient shared for the
process lifetime. The ReleaseResolver receives it via constructor injection;
the server lifespan owns the client lifecycle. Every call is one request with
no retry loop: failures surface immediately as NetworkError or RemoteError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError

from rbxdocs import __version__
from rbxdocs.cache import parse_metadata
from rbxdocs.errors import AssetNotFound, NetworkError, RemoteError
from rbxdocs.models.release import ReleaseAsset, ReleaseInfo

if TYPE_CHECKING:
    from rbxdocs.config import HttpSettings, ReleaseSettings
    from rbxdocs.models.metadata import MetadataEntry

log = structlog.get_logger()


def build_http_client(settings: HttpSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        # Release asset downloads answer with a redirect to the storage host
        follow_redirects=True,
        timeout=httpx.Timeout(
            settings.timeout_seconds,
            connect=settings.connect_timeout_seconds,
        ),
        headers={"User-Agent": f"rbxdocs/{__version__}"},
    )


class ReleaseResolver:
    """Resolves the latest metadata release and downloads its asset."""

    def __init__(self, client: httpx.AsyncClient, settings: ReleaseSettings) -> None:
        self._client = client
        self._settings = settings

    async def fetch_latest_release(self) -> ReleaseInfo:
        """Fetch the latest release description (tag and asset list)."""
        response = await self._get(self._settings.latest_release_url, context="release info")
        try:
            release = ReleaseInfo.model_validate_json(response.content)
        except ValidationError as exc:
            raise RemoteError(f"Invalid release info payload: {exc.error_count()} error(s)") from exc

        log.info("release_checked", tag_name=release.tag_name, assets=len(release.assets))
        return release

    def find_metadata_asset(self, release: ReleaseInfo) -> ReleaseAsset:
        """Return the metadata asset of a release. Raises AssetNotFound."""
        for asset in release.assets:
            if asset.name == self._settings.asset_name:
                return asset
        log.warning(
            "release_asset_missing",
            tag_name=release.tag_name,
            asset_name=self._settings.asset_name,
        )
        raise AssetNotFound(self._settings.asset_name)

    async def fetch_metadata_asset(self, asset: ReleaseAsset) -> list[MetadataEntry]:
        """Download the asset's binary content and parse it as the metadata array.

        Entries that fail validation are dropped; only a body that is not a
        JSON array is an error.
        """
        response = await self._get(
            asset.url,
            context="metadata",
            headers={"Accept": "application/octet-stream"},
        )
        try:
            metadata = parse_metadata(response.content)
        except ValidationError as exc:
            raise RemoteError(f"Invalid metadata payload: {exc.error_count()} error(s)") from exc

        log.info("metadata_downloaded", asset=asset.name, entries=len(metadata))
        return metadata

    async def _get(
        self,
        url: str,
        *,
        context: str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            log.warning("fetch_network_error", context=context, url=url, error=str(exc))
            raise NetworkError(f"Network error fetching {context}: {exc}") from exc

        if not response.is_success:
            log.warning(
                "fetch_http_error",
                context=context,
                url=url,
                status_code=response.status_code,
            )
            raise RemoteError(
                f"Failed to fetch {context}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response
