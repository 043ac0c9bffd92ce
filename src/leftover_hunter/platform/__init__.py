"""Platform detection and handling."""

from __future__ import annotations

from .detect import PlatformInfo, StandardLocations, get_platform_info, get_standard_locations

__all__ = ["get_platform_info", "get_standard_locations", "PlatformInfo", "StandardLocations"]
