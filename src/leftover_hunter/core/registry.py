"""Ordered index of application records with background mutations."""

from __future__ import annotations

import contextlib
import copy
import enum
import logging
import threading
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from leftover_hunter.core.discovery import DEFAULT_PREFIX, AppDiscoverer
from leftover_hunter.core.install_status import InstallStatusResolver
from leftover_hunter.core.known_apps import KnownAppMatcher
from leftover_hunter.core.models import (
    CATEGORIES,
    SIZE_ROLES,
    ApplicationRecord,
    DataType,
    Role,
    Totals,
)
from leftover_hunter.core.parallel import ParallelConfig
from leftover_hunter.core.remover import PathRemover, RemovalResult
from leftover_hunter.core.signals import Dispatcher, Signal, direct_dispatch
from leftover_hunter.core.size import get_size
from leftover_hunter.patterns.base import KnownApp
from leftover_hunter.platform.detect import StandardLocations

logger = logging.getLogger(__name__)


class RegistryState(str, enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    MUTATING = "mutating"


class Registry:
    """
    Owns the list of application names and the name -> record map.

    Rows are exposed in insertion order. Every structural change is
    announced through the signals below, and the aggregate totals are
    recomputed from scratch after each change that can affect them.

    Long-running operations (``reset``, ``delete_data``,
    ``delete_unused_data``) run on a single background worker and return a
    ``Future``; their ``*_sync`` counterparts run in the calling thread.
    Only one operation runs at a time. Notifications are delivered while
    the operation is still running, so a handler connected with the default
    dispatcher must not call ``rescan`` or the ``*_sync`` methods (doing so
    raises ``RuntimeError``); it may queue work through the background
    variants.
    """

    def __init__(
        self,
        locations: StandardLocations,
        known_apps: list[KnownApp] | None = None,
        *,
        pattern: str = DEFAULT_PREFIX,
        matcher: KnownAppMatcher | None = None,
        discoverer: AppDiscoverer | None = None,
        resolver: InstallStatusResolver | None = None,
        remover: PathRemover | None = None,
        parallel_config: ParallelConfig | None = None,
        dispatch: Dispatcher = direct_dispatch,
    ):
        self.locations = locations
        self.matcher = matcher or KnownAppMatcher(
            known_apps or [], locations.template_vars(), parallel_config=parallel_config
        )
        self.discoverer = discoverer or AppDiscoverer(
            locations.search_roots, pattern, parallel_config=parallel_config
        )
        self.resolver = resolver or InstallStatusResolver(
            locations.application_dirs, locations.icon_templates
        )
        self.remover = remover or PathRemover(protected=locations.protected_paths())

        self._names: list[str] = []
        self._records: dict[str, ApplicationRecord] = {}
        self._totals = Totals()
        self._state = RegistryState.IDLE
        self._resetting = False

        # Serializes operations; the index lock only guards short reads/writes
        self._op_lock = threading.Lock()
        self._op_owner: int | None = None
        self._index_lock = threading.RLock()
        self._executor: ThreadPoolExecutor | None = None

        self.busy_changed = Signal("busy_changed", dispatch)
        self.resetting_changed = Signal("resetting_changed", dispatch)
        self.totals_changed = Signal("totals_changed", dispatch)
        self.reset_begin = Signal("reset_begin", dispatch)
        self.reset_end = Signal("reset_end", dispatch)
        self.row_removed = Signal("row_removed", dispatch)
        self.data_changed = Signal("data_changed", dispatch)
        self.deletion_error = Signal("deletion_error", dispatch)
        self.data_deleted = Signal("data_deleted", dispatch)

    # -- read side -------------------------------------------------------

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state != RegistryState.IDLE

    @property
    def resetting(self) -> bool:
        return self._resetting

    @property
    def totals(self) -> Totals:
        return self._totals

    @property
    def total_config_size(self) -> int:
        return self._totals.config_size

    @property
    def total_cache_size(self) -> int:
        return self._totals.cache_size

    @property
    def total_local_data_size(self) -> int:
        return self._totals.local_data_size

    @property
    def unused_apps_count(self) -> int:
        return self._totals.unused_apps_count

    @property
    def unused_config_size(self) -> int:
        return self._totals.unused_config_size

    @property
    def unused_cache_size(self) -> int:
        return self._totals.unused_cache_size

    @property
    def unused_local_data_size(self) -> int:
        return self._totals.unused_local_data_size

    def row_count(self) -> int:
        with self._index_lock:
            return len(self._names)

    def names(self) -> list[str]:
        with self._index_lock:
            return list(self._names)

    def row_of(self, name: str) -> int:
        """Row index of ``name``, or -1 if it is not in the registry."""
        with self._index_lock:
            try:
                return self._names.index(name)
            except ValueError:
                return -1

    def data(self, row: int, role: Role | str) -> Any:
        """Field of a row for a list-view role; None for invalid rows."""
        with self._index_lock:
            if not 0 <= row < len(self._names):
                return None
            return self._records[self._names[row]].value(Role(role))

    def record(self, name: str) -> ApplicationRecord | None:
        """Snapshot of a single record."""
        with self._index_lock:
            record = self._records.get(name)
            return copy.deepcopy(record) if record is not None else None

    def rows(self) -> list[ApplicationRecord]:
        """Snapshot of all records in row order."""
        with self._index_lock:
            return [copy.deepcopy(self._records[name]) for name in self._names]

    # -- state -----------------------------------------------------------

    def _set_state(self, state: RegistryState) -> None:
        was_busy = self.busy
        self._state = state
        if self.busy != was_busy:
            self.busy_changed.emit(self.busy)

    def _set_resetting(self, resetting: bool) -> None:
        self._resetting = resetting
        self.resetting_changed.emit(resetting)

    def _recalculate(self) -> Totals:
        with self._index_lock:
            self._totals = Totals.from_records(list(self._records.values()))
        self.totals_changed.emit(self._totals)
        return self._totals

    @contextlib.contextmanager
    def _exclusive(self) -> Iterator[None]:
        """Hold the operation lock; refuse nested operations from the same thread."""
        if self._op_owner == threading.get_ident():
            raise RuntimeError(
                "Registry operations cannot be started from a notification handler "
                "of a running operation; use the background variants instead"
            )
        with self._op_lock:
            self._op_owner = threading.get_ident()
            try:
                yield
            finally:
                self._op_owner = None

    # -- scanning --------------------------------------------------------

    def _scan(self) -> tuple[list[str], dict[str, ApplicationRecord]]:
        """Run known-app matching, discovery and install lookup in order."""
        names: list[str] = []
        records: dict[str, ApplicationRecord] = {}

        for record in self.matcher.match():
            existing = records.get(record.name)
            if existing is None:
                names.append(record.name)
                records[record.name] = record
                continue
            for data_type in CATEGORIES:
                category = record.category(data_type)
                for path in category.paths:
                    existing.category(data_type).add(path, get_size(path))

        self.discoverer.discover_into(names, records, self.matcher.exclusion())
        self.resolver.resolve_all(names, records)
        return names, records

    def rescan(self) -> Totals:
        """Clear the registry and rebuild it from the filesystem."""
        with self._exclusive():
            self._set_state(RegistryState.SCANNING)
            self._set_resetting(True)
            try:
                self.reset_begin.emit()
                with self._index_lock:
                    self._names = []
                    self._records = {}
                try:
                    names, records = self._scan()
                    with self._index_lock:
                        self._names = names
                        self._records = records
                finally:
                    # Totals follow the index even when the scan failed
                    self.reset_end.emit()
                    totals = self._recalculate()
                logger.info("Found %d apps with leftover data", len(self._names))
                return totals
            finally:
                self._set_state(RegistryState.IDLE)
                self._set_resetting(False)

    # -- deletion --------------------------------------------------------

    def _remove_category(self, record: ApplicationRecord, data_type: DataType) -> RemovalResult | None:
        category = record.category(data_type)
        if category.size_bytes <= 0:
            return None
        result = self.remover.remove(list(category.paths))
        for path in result.failed:
            self.deletion_error.emit(path)
        return result

    def _clear_record(self, record: ApplicationRecord, types: DataType) -> int:
        """
        Delete the selected categories of a record and patch the index.

        Paths that failed to delete stay in their category, so the row keeps
        showing what is left. Returns the number of bytes reclaimed.
        """
        results: dict[DataType, RemovalResult] = {}
        for data_type in CATEGORIES:
            if types & data_type:
                result = self._remove_category(record, data_type)
                if result is not None and result.bytes_reclaimed > 0:
                    results[data_type] = result

        # Leftover sizes are measured before the index is touched
        remaining = {
            data_type: [(p, get_size(p)) for p in result.failed]
            for data_type, result in results.items()
        }

        with self._index_lock:
            changed: set[Role] = set()
            for data_type, paths in remaining.items():
                category = record.category(data_type)
                category.clear()
                for path, size in paths:
                    category.add(path, size)
                changed.add(SIZE_ROLES[data_type])

            row = self._names.index(record.name)
            if not record.exists():
                del self._names[row]
                del self._records[record.name]
                self.row_removed.emit(row, record.name)
            elif changed:
                self.data_changed.emit(row, frozenset(changed))

        return sum(result.bytes_reclaimed for result in results.values())

    def _finish_deletion(self, deleted: int) -> None:
        if deleted > 0:
            self._recalculate()
            self.data_deleted.emit(deleted)

    def delete_data_sync(self, name: str, types: DataType = DataType.ALL) -> int:
        """
        Delete the selected categories of a single app.

        Unknown names are logged and ignored.

        Returns:
            Bytes reclaimed
        """
        with self._exclusive():
            with self._index_lock:
                record = self._records.get(name)
            if record is None:
                logger.warning("Registry doesn't contain the '%s' entry", name)
                return 0

            self._set_state(RegistryState.MUTATING)
            try:
                deleted = self._clear_record(record, types)
                self._finish_deletion(deleted)
                return deleted
            finally:
                self._set_state(RegistryState.IDLE)

    def delete_unused_data_sync(self, types: DataType = DataType.ALL) -> int:
        """
        Delete the selected categories of every app that is not installed.

        Returns:
            Bytes reclaimed
        """
        with self._exclusive():
            self._set_state(RegistryState.MUTATING)
            try:
                with self._index_lock:
                    snapshot = [name for name in self._names if not self._records[name].installed]

                deleted = 0
                for name in snapshot:
                    with self._index_lock:
                        record = self._records.get(name)
                    if record is None or record.installed:
                        continue
                    deleted += self._clear_record(record, types)

                self._finish_deletion(deleted)
                return deleted
            finally:
                self._set_state(RegistryState.IDLE)

    # -- background execution -------------------------------------------

    def _submit(self, func: Any, *args: Any) -> Future[Any]:
        with self._index_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="registry")
            executor = self._executor
        future = executor.submit(func, *args)
        future.add_done_callback(self._log_failure)
        return future

    @staticmethod
    def _log_failure(future: Future[Any]) -> None:
        if not future.cancelled() and future.exception() is not None:
            logger.error("Background task failed", exc_info=future.exception())

    def reset(self) -> Future[Totals]:
        """Rescan in the background."""
        return self._submit(self.rescan)

    def delete_data(self, name: str, types: DataType = DataType.ALL) -> Future[int]:
        """Delete data of one app in the background."""
        return self._submit(self.delete_data_sync, name, types)

    def delete_unused_data(self, types: DataType = DataType.ALL) -> Future[int]:
        """Delete data of all unused apps in the background."""
        return self._submit(self.delete_unused_data_sync, types)

    def shutdown(self, wait: bool = True) -> None:
        with self._index_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)
