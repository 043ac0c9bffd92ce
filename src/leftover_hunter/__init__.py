"""Leftover Hunter - find and remove data left behind by uninstalled apps."""

from __future__ import annotations

__version__ = "0.3.0"
