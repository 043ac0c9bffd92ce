"""Platform detection and standard application data locations."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Icon lookup templates, tried in order; "{icon}" is the desktop entry's Icon value
DEFAULT_ICON_TEMPLATES: list[str] = [
    "/usr/share/icons/hicolor/86x86/apps/{icon}.png",
    "/usr/share/themes/sailfish-default/meegotouch/z1.0/icons/{icon}.png",
]


@dataclass
class XdgPaths:
    """XDG Base Directory paths for Linux/Unix."""

    config_home: Path
    cache_home: Path
    data_home: Path
    data_dirs: list[Path]

    @classmethod
    def from_environ(cls, home_dir: Path) -> "XdgPaths":
        """Create from current environment variables with home fallback."""
        data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
        return cls(
            config_home=Path(os.environ.get("XDG_CONFIG_HOME") or (home_dir / ".config")),
            cache_home=Path(os.environ.get("XDG_CACHE_HOME") or (home_dir / ".cache")),
            data_home=Path(os.environ.get("XDG_DATA_HOME") or (home_dir / ".local" / "share")),
            data_dirs=[Path(d) for d in data_dirs.split(":") if d],
        )


@dataclass
class StandardLocations:
    """Search roots for leftovers and the places installed apps are described."""

    home: Path
    config_root: Path
    cache_root: Path
    data_root: Path
    application_dirs: list[Path] = field(default_factory=list)
    icon_templates: list[str] = field(default_factory=lambda: list(DEFAULT_ICON_TEMPLATES))

    @property
    def search_roots(self) -> tuple[Path, Path, Path]:
        """Config, cache and local-data roots, in category order."""
        return self.config_root, self.cache_root, self.data_root

    def protected_paths(self) -> list[str]:
        """Locations that must never be deleted themselves."""
        return [str(self.home), *map(str, self.search_roots), *map(str, self.application_dirs)]

    def template_vars(self) -> dict[str, str]:
        """Placeholders available to known-app path templates."""
        return {
            "home": str(self.home),
            "config": str(self.config_root),
            "cache": str(self.cache_root),
            "data": str(self.data_root),
        }


@dataclass
class PlatformInfo:
    """Information about the current platform."""

    name: str  # Linux, macOS, Windows
    variant: str  # e.g., "Sailfish OS 4.5", "Ubuntu 22.04"
    home_dir: Path
    is_sailfish: bool = False
    release: Optional[str] = None


def _get_linux_distro() -> str:
    """Get Linux distribution name from /etc/os-release."""
    try:
        if os.path.exists("/etc/os-release"):
            with open("/etc/os-release") as f:
                for line in f:
                    if line.startswith("PRETTY_NAME="):
                        return line.split("=", 1)[1].strip().strip('"')
                    elif line.startswith("NAME="):
                        return line.split("=", 1)[1].strip().strip('"')
    except OSError:
        pass

    return "Linux"


def get_platform_info() -> PlatformInfo:
    """Detect and return current platform information."""
    system = platform.system()
    home_dir = Path.home()

    if system == "Linux":
        distro_name = _get_linux_distro()
        is_sailfish = os.path.exists("/etc/sailfish-release") or "sailfish" in distro_name.lower()
        return PlatformInfo(
            name="Linux",
            variant=distro_name,
            home_dir=home_dir,
            is_sailfish=is_sailfish,
            release=platform.release(),
        )

    elif system == "Darwin":
        return PlatformInfo(
            name="macOS",
            variant=f"macOS {platform.mac_ver()[0]}",
            home_dir=home_dir,
        )

    return PlatformInfo(
        name=system,
        variant=platform.release() or "Unknown",
        home_dir=home_dir,
    )


def get_standard_locations(home_dir: Path | None = None) -> StandardLocations:
    """
    Resolve the default search roots from the XDG environment.

    Application descriptors are looked up in ``$XDG_DATA_HOME/applications``
    first, then in ``applications`` below every ``$XDG_DATA_DIRS`` entry.
    """
    home = home_dir or Path.home()
    xdg = XdgPaths.from_environ(home)
    application_dirs = [xdg.data_home / "applications"]
    application_dirs.extend(d / "applications" for d in xdg.data_dirs)
    return StandardLocations(
        home=home,
        config_root=xdg.config_home,
        cache_root=xdg.cache_home,
        data_root=xdg.data_home,
        application_dirs=application_dirs,
    )
