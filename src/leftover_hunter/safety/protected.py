"""Protected path definitions to prevent accidental deletion."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Set

# Paths that should NEVER be deleted themselves
PROTECTED_PATTERNS: Set[str] = {
    # System directories
    "/",
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/lib",
    "/lib64",
    "/media",
    "/mnt",
    "/opt",
    "/proc",
    "/root",
    "/run",
    "/sbin",
    "/srv",
    "/sys",
    "/tmp",
    "/usr",
    "/usr/share",
    "/usr/share/applications",
    "/var",
}

# Directory names that should never be deleted regardless of path
PROTECTED_NAMES: Set[str] = {
    ".ssh",
    ".gnupg",
    ".gpg",
    ".aws",
    ".kube",
    "credentials",
    "secrets",
    ".password-store",
    "keyrings",
}


def _normalize(path: str | Path) -> str:
    return os.path.normpath(os.path.abspath(os.path.expanduser(str(path))))


def is_protected_path(path: str | Path, extra: Iterable[str | Path] = ()) -> bool:
    """
    Check if a path is protected and should not be deleted.

    Args:
        path: Path to check
        extra: Additional paths protected by exact match, such as the
               search roots the leftovers were discovered in

    Returns:
        True if the path is protected
    """
    path_str = _normalize(path)

    if path_str in PROTECTED_PATTERNS:
        return True

    if os.path.basename(path_str) in PROTECTED_NAMES:
        return True

    # Home directory and everything above it
    home = _normalize(Path.home())
    if path_str == home or home.startswith(path_str.rstrip(os.sep) + os.sep):
        return True

    return any(path_str == _normalize(p) for p in extra)
