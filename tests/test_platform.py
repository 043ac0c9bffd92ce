"""Tests for platform detection and standard locations."""

from __future__ import annotations

import platform
from pathlib import Path

import pytest

from leftover_hunter.platform.detect import (
    DEFAULT_ICON_TEMPLATES,
    PlatformInfo,
    StandardLocations,
    XdgPaths,
    get_platform_info,
    get_standard_locations,
)


@pytest.fixture
def clean_xdg(monkeypatch):
    for var in ("XDG_CONFIG_HOME", "XDG_CACHE_HOME", "XDG_DATA_HOME", "XDG_DATA_DIRS"):
        monkeypatch.delenv(var, raising=False)


class TestGetPlatformInfo:
    """Tests for get_platform_info function."""

    def test_returns_platform_info(self):
        assert isinstance(get_platform_info(), PlatformInfo)

    def test_has_required_fields(self):
        info = get_platform_info()
        assert info.variant
        assert isinstance(info.home_dir, Path)

    def test_correct_platform_name(self):
        info = get_platform_info()
        system = platform.system()

        if system == "Darwin":
            assert info.name == "macOS"
        elif system == "Linux":
            assert info.name == "Linux"
        else:
            assert info.name == system
            assert info.is_sailfish is False


class TestXdgPaths:
    """Tests for XdgPaths.from_environ."""

    def test_home_fallbacks(self, clean_xdg, tmp_path):
        xdg = XdgPaths.from_environ(tmp_path)
        assert xdg.config_home == tmp_path / ".config"
        assert xdg.cache_home == tmp_path / ".cache"
        assert xdg.data_home == tmp_path / ".local" / "share"
        assert xdg.data_dirs == [Path("/usr/local/share"), Path("/usr/share")]

    def test_environment_overrides(self, clean_xdg, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CACHE_HOME", "/var/cache/me")
        monkeypatch.setenv("XDG_DATA_DIRS", "/a::/b")
        xdg = XdgPaths.from_environ(tmp_path)
        assert xdg.cache_home == Path("/var/cache/me")
        assert xdg.data_dirs == [Path("/a"), Path("/b")]


class TestStandardLocations:
    """Tests for get_standard_locations and StandardLocations helpers."""

    def test_default_locations(self, clean_xdg, tmp_path):
        locations = get_standard_locations(tmp_path)
        assert locations.home == tmp_path
        assert locations.search_roots == (
            tmp_path / ".config",
            tmp_path / ".cache",
            tmp_path / ".local" / "share",
        )
        assert locations.application_dirs[0] == tmp_path / ".local" / "share" / "applications"
        assert Path("/usr/share/applications") in locations.application_dirs
        assert locations.icon_templates == DEFAULT_ICON_TEMPLATES

    def test_icon_templates_not_shared(self, clean_xdg, tmp_path):
        locations = get_standard_locations(tmp_path)
        locations.icon_templates.append("/x/{icon}.png")
        assert "/x/{icon}.png" not in DEFAULT_ICON_TEMPLATES

    def test_protected_paths(self, tmp_path):
        locations = StandardLocations(
            home=tmp_path,
            config_root=tmp_path / "c",
            cache_root=tmp_path / "k",
            data_root=tmp_path / "d",
            application_dirs=[tmp_path / "apps"],
        )
        assert locations.protected_paths() == [
            str(tmp_path),
            str(tmp_path / "c"),
            str(tmp_path / "k"),
            str(tmp_path / "d"),
            str(tmp_path / "apps"),
        ]

    def test_template_vars(self, tmp_path):
        locations = StandardLocations(
            home=tmp_path,
            config_root=tmp_path / "c",
            cache_root=tmp_path / "k",
            data_root=tmp_path / "d",
        )
        assert locations.template_vars() == {
            "home": str(tmp_path),
            "config": str(tmp_path / "c"),
            "cache": str(tmp_path / "k"),
            "data": str(tmp_path / "d"),
        }
