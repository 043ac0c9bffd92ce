"""Batch deletion of leftover paths with per-path failure reporting."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from send2trash import send2trash

from leftover_hunter.core.size import format_size, get_size
from leftover_hunter.safety.protected import is_protected_path

logger = logging.getLogger(__name__)


class LeftoverError(Exception):
    """Base error for leftover cleanup operations."""

    pass


class MalformedPathError(LeftoverError):
    """A deletion batch contained an empty path."""

    pass


class DeletionError(LeftoverError):
    """A single path could not be deleted."""

    pass


@dataclass
class RemovalResult:
    """Outcome of a single deletion batch."""

    bytes_reclaimed: int = 0
    removed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    rejected: bool = False

    @property
    def bytes_reclaimed_human(self) -> str:
        return format_size(self.bytes_reclaimed)


def check_batch(paths: Iterable[str]) -> None:
    """
    Validate a deletion batch before anything is touched.

    Raises:
        MalformedPathError: If any path is empty
    """
    for path in paths:
        if not path:
            raise MalformedPathError("One of provided paths is empty")


class PathRemover:
    """Deletes files and directory trees, accounting reclaimed bytes."""

    def __init__(
        self,
        dry_run: bool = False,
        use_trash: bool = False,
        protected: Iterable[str] = (),
    ):
        self.dry_run = dry_run
        self.use_trash = use_trash
        self.protected = list(protected)

    def remove(self, paths: Sequence[str]) -> RemovalResult:
        """
        Delete every path in the batch.

        Sizes are measured before deletion. A failing path is reported and
        skipped; the remaining paths are still processed. A batch holding an
        empty path is rejected as a whole and nothing is deleted.

        Args:
            paths: Files or directories to delete

        Returns:
            RemovalResult with reclaimed bytes and failed paths
        """
        result = RemovalResult()

        try:
            check_batch(paths)
        except MalformedPathError as e:
            logger.error("%s", e)
            result.rejected = True
            return result

        for path in paths:
            size = get_size(path)

            try:
                self._delete_path(path)
            except (OSError, LeftoverError) as e:
                logger.warning("Error deleting '%s': %s", path, e)
                result.failed.append(path)
                continue

            if self.dry_run:
                logger.debug("SAFE MODE: Deleted %d bytes '%s'", size, path)
            else:
                logger.debug("Deleted %d bytes '%s'", size, path)
            result.removed.append(path)
            result.bytes_reclaimed += size

        return result

    def _delete_path(self, path: str) -> None:
        """Delete a single path safely."""
        if is_protected_path(path, self.protected):
            raise DeletionError(f"Refusing to delete protected path: {path}")

        if self.dry_run:
            return

        # Links are removed themselves, their targets are left alone
        if os.path.islink(path):
            os.unlink(path)
            return

        if not (os.path.isdir(path) or os.path.isfile(path)):
            raise DeletionError(f"Not a file or directory: {path}")

        if self.use_trash:
            send2trash(os.path.abspath(path))
        elif os.path.isdir(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
