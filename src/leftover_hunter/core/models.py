"""Data model for application records and their leftover data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class DataType(enum.Flag):
    """Categories of leftover data tracked per application."""

    NONE = 0
    CONFIG = 1
    CACHE = 2
    LOCAL_DATA = 4
    ALL = 7


# Single categories in the order they are processed and displayed
CATEGORIES: tuple[DataType, ...] = (DataType.CONFIG, DataType.CACHE, DataType.LOCAL_DATA)


class Role(str, enum.Enum):
    """Per-row fields exposed to list views."""

    NAME = "name"
    TITLE = "title"
    ICON = "icon"
    INSTALLED = "installed"
    CONFIG_SIZE = "configSize"
    CACHE_SIZE = "cacheSize"
    LOCAL_DATA_SIZE = "localDataSize"
    SORT = "sort"


SIZE_ROLES: dict[DataType, Role] = {
    DataType.CONFIG: Role.CONFIG_SIZE,
    DataType.CACHE: Role.CACHE_SIZE,
    DataType.LOCAL_DATA: Role.LOCAL_DATA_SIZE,
}


@dataclass
class CategoryData:
    """Paths contributing to one category and their cached total size."""

    paths: list[str] = field(default_factory=list)
    size_bytes: int = 0

    def add(self, path: str, size: int) -> None:
        if path not in self.paths:
            self.paths.append(path)
            self.size_bytes += size

    def set(self, path: str, size: int) -> None:
        """Make ``path`` the only path of this category."""
        self.paths = [path]
        self.size_bytes = size

    def clear(self) -> None:
        self.paths = []
        self.size_bytes = 0

    @property
    def empty(self) -> bool:
        return not self.paths


@dataclass
class ApplicationRecord:
    """Leftover data of a single application, keyed by ``name``."""

    name: str
    title: str = ""
    icon: str = ""
    installed: bool = False
    config: CategoryData = field(default_factory=CategoryData)
    cache: CategoryData = field(default_factory=CategoryData)
    local_data: CategoryData = field(default_factory=CategoryData)

    def category(self, data_type: DataType) -> CategoryData:
        """Return the category entry for a single data type."""
        if data_type == DataType.CONFIG:
            return self.config
        if data_type == DataType.CACHE:
            return self.cache
        if data_type == DataType.LOCAL_DATA:
            return self.local_data
        raise ValueError(f"Not a single data type: {data_type!r}")

    def exists(self) -> bool:
        """True while any category still has at least one path."""
        return not (self.config.empty and self.cache.empty and self.local_data.empty)

    @property
    def display_title(self) -> str:
        return self.title or self.name

    @property
    def sort_key(self) -> str:
        # "0" for installed apps, "1" for unused ones
        return ("0" if self.installed else "1") + self.display_title

    @property
    def total_size(self) -> int:
        return self.config.size_bytes + self.cache.size_bytes + self.local_data.size_bytes

    def value(self, role: Role) -> str | bool | int:
        """Return the field for a list-view role."""
        if role == Role.NAME:
            return self.name
        if role == Role.TITLE:
            return self.display_title
        if role == Role.ICON:
            return self.icon
        if role == Role.INSTALLED:
            return self.installed
        if role == Role.CONFIG_SIZE:
            return self.config.size_bytes
        if role == Role.CACHE_SIZE:
            return self.cache.size_bytes
        if role == Role.LOCAL_DATA_SIZE:
            return self.local_data.size_bytes
        if role == Role.SORT:
            return self.sort_key
        raise ValueError(f"Unknown role: {role!r}")


@dataclass(frozen=True)
class Totals:
    """Aggregate sizes over the whole record set."""

    config_size: int = 0
    cache_size: int = 0
    local_data_size: int = 0
    unused_apps_count: int = 0
    unused_config_size: int = 0
    unused_cache_size: int = 0
    unused_local_data_size: int = 0

    @classmethod
    def from_records(cls, records: list[ApplicationRecord]) -> Totals:
        """Recompute every total from scratch."""
        config = cache = local_data = 0
        unused = unused_config = unused_cache = unused_local_data = 0
        for record in records:
            config += record.config.size_bytes
            cache += record.cache.size_bytes
            local_data += record.local_data.size_bytes
            if not record.installed:
                unused += 1
                unused_config += record.config.size_bytes
                unused_cache += record.cache.size_bytes
                unused_local_data += record.local_data.size_bytes
        return cls(
            config_size=config,
            cache_size=cache,
            local_data_size=local_data,
            unused_apps_count=unused,
            unused_config_size=unused_config,
            unused_cache_size=unused_cache,
            unused_local_data_size=unused_local_data,
        )

    @property
    def total_size(self) -> int:
        return self.config_size + self.cache_size + self.local_data_size

    @property
    def unused_size(self) -> int:
        return self.unused_config_size + self.unused_cache_size + self.unused_local_data_size
