"""Matching of registered known applications against the filesystem."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Iterable

from leftover_hunter.core.models import CATEGORIES, ApplicationRecord, DataType
from leftover_hunter.core.parallel import ParallelConfig, get_sizes_ordered
from leftover_hunter.core.size import get_size
from leftover_hunter.patterns.base import KnownApp

logger = logging.getLogger(__name__)


def compile_exclusion(claimed_paths: Iterable[str]) -> re.Pattern[str] | None:
    """
    Build a matcher for paths that already belong to known apps.

    The pattern matches a claimed path itself and anything nested below it.

    Returns:
        Compiled pattern, or None when nothing is claimed
    """
    # Longest first so nested claims win the alternation
    paths = sorted({os.path.normpath(p) for p in claimed_paths if p}, key=len, reverse=True)
    if not paths:
        return None
    alternatives = "|".join(re.escape(p) for p in paths)
    return re.compile(f"^(?:{alternatives})(?:{re.escape(os.sep)}.*)?$")


class KnownAppMatcher:
    """Resolves which registered paths of known apps exist on disk."""

    def __init__(
        self,
        apps: list[KnownApp],
        variables: dict[str, str],
        size_func: Callable[[str], int] = get_size,
        parallel_config: ParallelConfig | None = None,
    ):
        self.apps = apps
        self.variables = variables
        self.size_func = size_func
        self.parallel_config = parallel_config or ParallelConfig()
        self.claimed_paths: list[str] = []

    def _expanded(self) -> list[KnownApp]:
        expanded = []
        for app in self.apps:
            try:
                expanded.append(app.expand(self.variables))
            except KeyError as e:
                logger.warning("Skipping known app '%s': unknown placeholder %s", app.name, e)
        return expanded

    def match(self) -> list[ApplicationRecord]:
        """
        Build records for known apps that left data behind.

        Every expanded candidate path is remembered in ``claimed_paths``,
        whether it exists or not. Apps without any existing path yield no
        record.

        Returns:
            Records in registry order
        """
        apps = self._expanded()
        self.claimed_paths = [
            path for app in apps for data_type in CATEGORIES for path in app.templates(data_type)
        ]

        # Phase 1: find existing candidates
        found: list[tuple[int, DataType, str]] = []
        for index, app in enumerate(apps):
            for data_type in CATEGORIES:
                for path in app.templates(data_type):
                    if os.path.exists(path):
                        found.append((index, data_type, path))

        # Phase 2: measure them
        sizes = get_sizes_ordered([path for _, _, path in found], self.size_func, self.parallel_config)

        records: dict[int, ApplicationRecord] = {}
        for (index, data_type, path), size in zip(found, sizes):
            record = records.get(index)
            if record is None:
                record = records[index] = ApplicationRecord(name=apps[index].name)
            record.category(data_type).add(path, size)

        result = []
        for index in sorted(records):
            record = records[index]
            if record.exists():
                logger.debug("Found a known app '%s'", record.name)
                result.append(record)
        return result

    def exclusion(self) -> re.Pattern[str] | None:
        """Exclusion pattern over the paths claimed by the last match."""
        return compile_exclusion(self.claimed_paths)
