"""Configuration management for Leftover Hunter CLI."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

# Conditional import for Python 3.10 compatibility
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

from leftover_hunter.core.discovery import DEFAULT_PREFIX
from leftover_hunter.core.parallel import DEFAULT_WORKERS, ParallelConfig
from leftover_hunter.patterns.base import KnownApp
from leftover_hunter.platform.detect import (
    DEFAULT_ICON_TEMPLATES,
    StandardLocations,
    get_standard_locations,
)

# Placeholders allowed in known-app path templates
TEMPLATE_PLACEHOLDERS = ("home", "config", "cache", "data")


@dataclass
class DefaultsConfig:
    """Default behavior options."""

    dry_run: bool = True
    trash: bool = False
    interactive: bool = True


@dataclass
class PathsConfig:
    """Search roots and application metadata locations (empty = XDG default)."""

    config_root: str = ""
    cache_root: str = ""
    data_root: str = ""
    application_dirs: list[str] = field(default_factory=list)
    icon_templates: list[str] = field(default_factory=list)


@dataclass
class DiscoveryConfig:
    """App directory discovery settings."""

    prefix: str = DEFAULT_PREFIX
    parallel: bool = True
    max_workers: int = DEFAULT_WORKERS

    @property
    def parallel_config(self) -> ParallelConfig:
        return ParallelConfig(enabled=self.parallel, max_workers=self.max_workers)


@dataclass
class Config:
    """Root configuration container."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    known_apps: list[KnownApp] = field(default_factory=list)

    # Metadata (not from TOML)
    _source: Path | None = field(default=None, repr=False)

    def locations(self, home_dir: Path | None = None) -> StandardLocations:
        """Resolve search locations, config values overriding XDG defaults."""
        locations = get_standard_locations(home_dir)
        if self.paths.config_root:
            locations.config_root = Path(self.paths.config_root).expanduser()
        if self.paths.cache_root:
            locations.cache_root = Path(self.paths.cache_root).expanduser()
        if self.paths.data_root:
            locations.data_root = Path(self.paths.data_root).expanduser()
        if self.paths.application_dirs:
            locations.application_dirs = [Path(d).expanduser() for d in self.paths.application_dirs]
        if self.paths.icon_templates:
            locations.icon_templates = list(self.paths.icon_templates)
        return locations


def get_xdg_config_home() -> Path:
    """Get XDG config home, respecting environment variable."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def get_config_paths() -> tuple[Path, Path]:
    """
    Get config file paths in priority order.

    Returns:
        (xdg_path, cwd_path) - XDG is base, CWD overrides
    """
    xdg_path = get_xdg_config_home() / "leftover-hunter" / "config.toml"
    cwd_path = Path.cwd() / "leftoverhunter.toml"
    return xdg_path, cwd_path


def _load_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file."""
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, override takes precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def _check_template(template: Any, where: str, errors: list[str]) -> None:
    if not isinstance(template, str) or not template:
        errors.append(f"Invalid {where}: {template!r} (expected a non-empty path)")
        return
    try:
        template.format_map({name: "" for name in TEMPLATE_PLACEHOLDERS})
    except (KeyError, IndexError, ValueError) as e:
        errors.append(
            f"Invalid {where}: '{template}' ({e}; use: {', '.join(TEMPLATE_PLACEHOLDERS)})"
        )


def _validate_config(data: dict[str, Any]) -> list[str]:
    """Validate TOML data and return list of errors."""
    errors: list[str] = []

    prefix = data.get("discovery", {}).get("prefix")
    if prefix is not None and (not isinstance(prefix, str) or not prefix):
        errors.append(f"Invalid discovery.prefix: {prefix!r} (use a glob like 'harbour-*')")

    max_workers = data.get("discovery", {}).get("max_workers")
    if max_workers is not None and (not isinstance(max_workers, int) or max_workers < 1):
        errors.append(f"Invalid discovery.max_workers: {max_workers!r} (use a positive integer)")

    paths = data.get("paths", {})
    for key in ("application_dirs", "icon_templates"):
        value = paths.get(key)
        if value is not None and not (
            isinstance(value, list) and all(isinstance(v, str) for v in value)
        ):
            errors.append(f"Invalid paths.{key}: expected a list of strings")
    icon_templates = paths.get("icon_templates")
    for template in icon_templates if isinstance(icon_templates, list) else []:
        if not isinstance(template, str):
            continue
        if "{icon}" not in template:
            errors.append(f"Invalid paths.icon_templates entry: '{template}' (missing {{icon}})")
            continue
        try:
            template.format(icon="x")
        except (KeyError, IndexError, ValueError) as e:
            errors.append(
                f"Invalid paths.icon_templates entry: '{template}' ({e}; only {{icon}} is allowed)"
            )

    known_apps = data.get("known_apps", [])
    if not isinstance(known_apps, list):
        errors.append("Invalid known_apps: expected an array of tables ([[known_apps]])")
        return errors

    for i, app in enumerate(known_apps):
        if not isinstance(app, dict) or not app.get("name"):
            errors.append(f"Invalid known_apps[{i}]: a 'name' is required")
            continue
        for key in ("config", "cache", "local_data"):
            templates = app.get(key, [])
            if not isinstance(templates, list):
                errors.append(f"Invalid known_apps[{i}].{key}: expected a list of paths")
                continue
            for template in templates:
                _check_template(template, f"known_apps[{i}].{key}", errors)

    return errors


def _filter_known_keys(data: dict[str, Any], dataclass_type: type) -> dict[str, Any]:
    """Filter dict to only include keys that are valid fields for the dataclass."""
    valid_fields = {f.name for f in fields(dataclass_type)}
    return {k: v for k, v in data.items() if k in valid_fields}


# Mapping of section names to their config classes
SECTION_TYPES = {
    "defaults": DefaultsConfig,
    "paths": PathsConfig,
    "discovery": DiscoveryConfig,
}


def _dict_to_config(data: dict[str, Any], source: Path | None = None) -> Config:
    """Convert parsed TOML dict to Config dataclass."""
    sections = {
        name: cls(**_filter_known_keys(data.get(name, {}), cls))
        for name, cls in SECTION_TYPES.items()
    }
    known_apps = [
        KnownApp(**_filter_known_keys(app, KnownApp)) for app in data.get("known_apps", [])
    ]
    return Config(**sections, known_apps=known_apps, _source=source)


def load_config() -> Config:
    """
    Load configuration with XDG + CWD override precedence.

    Priority (highest to lowest):
    1. ./leftoverhunter.toml (CWD override)
    2. ~/.config/leftover-hunter/config.toml (XDG base)
    3. Built-in defaults

    Returns:
        Merged Config instance

    Raises:
        ValueError: If TOML syntax is invalid in either config file
    """
    xdg_path, cwd_path = get_config_paths()

    merged_data: dict[str, Any] = {}
    active_source: Path | None = None

    if xdg_path.exists():
        try:
            merged_data = _load_toml(xdg_path)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {xdg_path}: {e}") from e
        active_source = xdg_path

    # CWD config overrides XDG
    if cwd_path.exists():
        try:
            cwd_data = _load_toml(cwd_path)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {cwd_path}: {e}") from e
        merged_data = _merge_dicts(merged_data, cwd_data)
        active_source = cwd_path

    if merged_data:
        errors = _validate_config(merged_data)
        if errors:
            raise ValueError(f"Config validation failed ({active_source}): {'; '.join(errors)}")

    return _dict_to_config(merged_data, active_source)


def load_config_from_file(path: Path) -> Config:
    """Load configuration from a specific file."""
    try:
        data = _load_toml(path)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e
    errors = _validate_config(data)
    if errors:
        raise ValueError(f"Config validation failed: {'; '.join(errors)}")
    return _dict_to_config(data, path)


# Default config template for `config init`
DEFAULT_CONFIG_TEMPLATE = """\
# Leftover Hunter Configuration

[defaults]
dry_run = true          # Preview deletions without removing anything
trash = false           # Move to trash instead of permanent delete
interactive = true      # Ask before deleting

[paths]
# Empty values fall back to the XDG base directories
config_root = ""        # ~/.config
cache_root = ""         # ~/.cache
data_root = ""          # ~/.local/share
application_dirs = []   # where <app>.desktop files are looked up
icon_templates = []     # e.g. "/usr/share/icons/hicolor/86x86/apps/{icon}.png"

[discovery]
prefix = "harbour-*"    # directory name pattern of third-party apps
parallel = true         # measure directory sizes in parallel
max_workers = 4

# Extra applications with known leftover locations.
# Placeholders: {home}, {config}, {cache}, {data}
# [[known_apps]]
# name = "my-app"
# config = ["{config}/org.example/my-app"]
# cache = ["{cache}/org.example/my-app"]
# local_data = ["{data}/org.example/my-app"]
"""
