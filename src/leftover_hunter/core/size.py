"""On-disk size probing and size formatting helpers."""

from __future__ import annotations

import os
from pathlib import Path


def format_size(size_bytes: int) -> str:
    """Convert bytes to human-readable format."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} PB"


def parse_size(size_str: str) -> int:
    """
    Parse human-readable size string to bytes.

    Args:
        size_str: Size string like "1KB", "10MB", "1.5GB"

    Returns:
        Size in bytes

    Raises:
        ValueError: If the size string is invalid
    """
    size_str = size_str.strip().upper()

    # Longer units first so "KB" is not read as "B"
    units = [
        ("TB", 1024 ** 4),
        ("GB", 1024 ** 3),
        ("MB", 1024 ** 2),
        ("KB", 1024),
        ("B", 1),
    ]

    multiplier = 1
    for unit, unit_multiplier in units:
        if size_str.endswith(unit):
            size_str = size_str[: -len(unit)]
            multiplier = unit_multiplier
            break

    try:
        value = float(size_str)
    except ValueError:
        raise ValueError(f"Invalid size string: {size_str}") from None
    if value < 0:
        raise ValueError(f"Size cannot be negative: {size_str}")
    return int(value * multiplier)


def get_directory_size(path: str | Path) -> int:
    """
    Sum the sizes of all regular files below ``path``, hidden ones included.

    Symbolic links are neither followed nor counted. Entries that cannot be
    read are skipped.
    """
    total_size = 0

    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.is_symlink():
                        continue
                    if entry.is_file(follow_symlinks=False):
                        total_size += entry.stat(follow_symlinks=False).st_size
                    elif entry.is_dir(follow_symlinks=False):
                        total_size += get_directory_size(entry.path)
                except OSError:
                    continue
    except OSError:
        pass

    return total_size


def get_size(path: str | Path) -> int:
    """
    Return the on-disk size of a file or directory tree in bytes.

    Missing paths, symbolic links and special files size to 0.
    """
    if not path:
        return 0
    try:
        if os.path.islink(path):
            return 0
        if os.path.isdir(path):
            return get_directory_size(path)
        if os.path.isfile(path):
            return os.path.getsize(path)
    except OSError:
        pass
    return 0
