"""Known application descriptor definition."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from leftover_hunter.core.models import DataType


def expand_template(template: str, variables: dict[str, str]) -> str:
    """
    Expand a path template such as ``{config}/com.jolla/notes``.

    Raises:
        KeyError: If the template names an unknown placeholder
    """
    return os.path.normpath(os.path.expanduser(template.format_map(variables)))


@dataclass
class KnownApp:
    """An application whose leftover locations are registered in advance."""

    name: str
    config: list[str] = field(default_factory=list)
    cache: list[str] = field(default_factory=list)
    local_data: list[str] = field(default_factory=list)
    description: str = ""

    def templates(self, data_type: DataType) -> list[str]:
        """Return the path templates for a single data type."""
        if data_type == DataType.CONFIG:
            return self.config
        if data_type == DataType.CACHE:
            return self.cache
        if data_type == DataType.LOCAL_DATA:
            return self.local_data
        raise ValueError(f"Not a single data type: {data_type!r}")

    def expand(self, variables: dict[str, str]) -> KnownApp:
        """Return a copy with every template expanded to an absolute path."""
        return KnownApp(
            name=self.name,
            config=[expand_template(t, variables) for t in self.config],
            cache=[expand_template(t, variables) for t in self.cache],
            local_data=[expand_template(t, variables) for t in self.local_data],
            description=self.description,
        )
