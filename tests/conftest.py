"""Pytest configuration and fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from leftover_hunter.platform.detect import StandardLocations


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def locations(temp_dir: Path) -> StandardLocations:
    """Fake home with empty XDG roots, an applications dir and an icon dir."""
    home = temp_dir / "home"
    config_root = home / ".config"
    cache_root = home / ".cache"
    data_root = home / ".local" / "share"
    applications = temp_dir / "applications"
    icons = temp_dir / "icons"
    for directory in (config_root, cache_root, data_root, applications, icons):
        directory.mkdir(parents=True)

    return StandardLocations(
        home=home,
        config_root=config_root,
        cache_root=cache_root,
        data_root=data_root,
        application_dirs=[applications],
        icon_templates=[str(icons / "{icon}.png")],
    )


@pytest.fixture
def leftovers(locations: StandardLocations) -> StandardLocations:
    """
    A mix of leftovers:

    - harbour-foo: config (10 bytes) and cache (50 bytes), not installed
    - harbour-bar: local data (200 bytes), installed with a title and icon
    - not-an-app: ignored by discovery
    """
    foo_config = locations.config_root / "harbour-foo"
    foo_config.mkdir()
    (foo_config / "settings.conf").write_bytes(b"x" * 10)

    foo_cache = locations.cache_root / "harbour-foo"
    (foo_cache / "thumbs").mkdir(parents=True)
    (foo_cache / "thumbs" / "a.png").write_bytes(b"x" * 30)
    (foo_cache / ".hidden").write_bytes(b"x" * 20)

    bar_data = locations.data_root / "harbour-bar"
    bar_data.mkdir()
    (bar_data / "db.sqlite").write_bytes(b"x" * 200)

    other = locations.config_root / "not-an-app"
    other.mkdir()
    (other / "file").write_bytes(b"x" * 5)

    applications = locations.application_dirs[0]
    (applications / "harbour-bar.desktop").write_text(
        "[Desktop Entry]\nType=Application\nName=Bar Reader\nIcon=harbour-bar\n"
    )
    icon_dir = Path(locations.icon_templates[0]).parent
    (icon_dir / "harbour-bar.png").write_bytes(b"png")

    yield locations
