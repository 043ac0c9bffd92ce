"""Discovery of application directories by naming convention."""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from leftover_hunter.core.models import CATEGORIES, ApplicationRecord, DataType
from leftover_hunter.core.parallel import ParallelConfig, get_sizes_ordered
from leftover_hunter.core.size import get_size

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "harbour-*"


@dataclass
class DiscoveredDir:
    """An application directory found directly below a search root."""

    name: str
    data_type: DataType
    path: str
    size_bytes: int = 0


class AppDiscoverer:
    """Finds app directories in the config, cache and local-data roots."""

    def __init__(
        self,
        roots: Sequence[str | Path],
        pattern: str = DEFAULT_PREFIX,
        size_func: Callable[[str], int] = get_size,
        parallel_config: ParallelConfig | None = None,
    ):
        if len(roots) != len(CATEGORIES):
            raise ValueError(f"Expected {len(CATEGORIES)} search roots, got {len(roots)}")
        self.roots = [str(root) for root in roots]
        self.pattern = pattern
        self.size_func = size_func
        self.parallel_config = parallel_config or ParallelConfig()

    def _list_dirs(self, root: str) -> list[tuple[str, str]]:
        """Return (name, path) of matching child directories, sorted by name."""
        matches = []
        try:
            with os.scandir(root) as entries:
                for entry in entries:
                    if not entry.is_dir(follow_symlinks=False):
                        continue
                    if fnmatch.fnmatchcase(entry.name, self.pattern):
                        matches.append((entry.name, entry.path))
        except FileNotFoundError:
            logger.debug("Search root '%s' does not exist", root)
        except OSError as e:
            logger.warning("Cannot list '%s': %s", root, e)
        return sorted(matches)

    def discover(self, exclude: re.Pattern[str] | None = None) -> list[DiscoveredDir]:
        """
        List app directories of all search roots, skipping claimed paths.

        Args:
            exclude: Pattern matching paths already owned by known apps

        Returns:
            Discovered directories, config root first, with sizes filled in
        """
        found: list[DiscoveredDir] = []
        for data_type, root in zip(CATEGORIES, self.roots):
            for name, path in self._list_dirs(root):
                if exclude is not None and exclude.match(os.path.normpath(path)):
                    continue
                found.append(DiscoveredDir(name=name, data_type=data_type, path=path))

        sizes = get_sizes_ordered([d.path for d in found], self.size_func, self.parallel_config)
        for discovered, size in zip(found, sizes):
            discovered.size_bytes = size
        return found

    def fold(
        self,
        discovered: list[DiscoveredDir],
        names: list[str],
        records: dict[str, ApplicationRecord],
    ) -> None:
        """
        Merge discoveries into the ordered name list and the record map.

        A directory becomes the sole path of its root's category in the
        record named after it; unseen names are appended to ``names``.
        """
        for item in discovered:
            record = records.get(item.name)
            if record is None:
                logger.debug("Found an app '%s'", item.name)
                record = records[item.name] = ApplicationRecord(name=item.name)
                names.append(item.name)
            record.category(item.data_type).set(item.path, item.size_bytes)

    def discover_into(
        self,
        names: list[str],
        records: dict[str, ApplicationRecord],
        exclude: re.Pattern[str] | None = None,
    ) -> None:
        """Discover app directories and fold them into ``names``/``records``."""
        self.fold(self.discover(exclude), names, records)
