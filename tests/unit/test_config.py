"""Unit tests for configuration defaults and overrides."""

from __future__ import annotations

import platformdirs
import pytest

from rbxdocs.config import (
    _DEFAULT_DATA_DIR,
    _DEFAULT_DB_PATH,
    STALENESS_WINDOW_MS,
    CacheSettings,
    Settings,
)


class TestPlatformDefaults:
    """Verify config defaults use platformdirs instead of hardcoded Unix paths."""

    def test_default_data_dir_matches_platformdirs(self) -> None:
        expected = platformdirs.user_data_dir("rbxdocs")
        assert expected == _DEFAULT_DATA_DIR

    def test_default_db_path_under_data_dir(self) -> None:
        assert _DEFAULT_DB_PATH.startswith(_DEFAULT_DATA_DIR)
        assert _DEFAULT_DB_PATH.endswith("cache.db")

    def test_cache_settings_uses_platform_default(self) -> None:
        assert CacheSettings().db_path == _DEFAULT_DB_PATH


class TestReleaseDefaults:
    def test_staleness_window_is_one_hour(self) -> None:
        assert STALENESS_WINDOW_MS == 3_600_000
        assert Settings().release.staleness_window_ms == STALENESS_WINDOW_MS

    def test_asset_name(self) -> None:
        assert Settings().release.asset_name == "files_metadata.json"

    def test_docs_defaults(self) -> None:
        settings = Settings()
        assert settings.docs.source_root == "content/en-us/"
        assert settings.docs.base_url == "https://create.roblox.com/docs/"


class TestOverrides:
    def test_env_var_overrides_nested_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RBXDOCS__RELEASE__STALENESS_WINDOW_MS", "60000")
        monkeypatch.setenv("RBXDOCS__LOGGING__FORMAT", "text")
        settings = Settings()
        assert settings.release.staleness_window_ms == 60_000
        assert settings.logging.format == "text"

    def test_constructor_args_win_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RBXDOCS__HTTP__TIMEOUT_SECONDS", "5")
        settings = Settings(http={"timeout_seconds": 12.5})
        assert settings.http.timeout_seconds == 12.5
