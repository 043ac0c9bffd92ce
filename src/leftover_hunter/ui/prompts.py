"""Interactive prompts for user input."""

from __future__ import annotations

import typer


def confirm_deletion(count: int, size_human: str) -> bool:
    """
    Prompt user to confirm deletion.

    Args:
        count: Number of apps affected
        size_human: Human-readable size to be freed

    Returns:
        True if user confirms, False otherwise
    """
    return typer.confirm(
        f"\nDelete {size_human} of data from {count} app(s)?",
        default=False,
    )
