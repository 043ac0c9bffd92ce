"""Installation status lookup through desktop entry files."""

from __future__ import annotations

import configparser
import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from leftover_hunter.core.models import ApplicationRecord
from leftover_hunter.platform.detect import DEFAULT_ICON_TEMPLATES

logger = logging.getLogger(__name__)

DESKTOP_SECTION = "Desktop Entry"


@dataclass
class DesktopEntry:
    """The parts of a ``.desktop`` file used for display."""

    path: str
    title: str = ""
    icon_name: str = ""


def read_desktop_entry(path: str, default_icon: str) -> DesktopEntry:
    """
    Parse a desktop entry file.

    Lines that are not key/value pairs are skipped. Unreadable files and
    files without a section header still describe an installed app; they
    just contribute no title and the default icon name.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.MissingSectionHeaderError, UnicodeDecodeError) as e:
        logger.warning("Malformed desktop entry '%s': %s", path, e)
        return DesktopEntry(path=path, icon_name=default_icon)
    except configparser.ParsingError as e:
        # Valid keys are kept, stray lines are dropped
        logger.warning("Ignoring malformed lines in desktop entry '%s': %s", path, e)
    except configparser.Error as e:
        logger.warning("Malformed desktop entry '%s': %s", path, e)
        return DesktopEntry(path=path, icon_name=default_icon)

    return DesktopEntry(
        path=path,
        title=parser.get(DESKTOP_SECTION, "Name", fallback=""),
        icon_name=parser.get(DESKTOP_SECTION, "Icon", fallback="") or default_icon,
    )


class InstallStatusResolver:
    """Marks records as installed when a matching desktop entry exists."""

    def __init__(
        self,
        application_dirs: Sequence[str | Path],
        icon_templates: Sequence[str] = DEFAULT_ICON_TEMPLATES,
    ):
        self.application_dirs = [str(d) for d in application_dirs]
        self.icon_templates = list(icon_templates)

    def find_desktop_file(self, name: str) -> str | None:
        """Return the first ``<name>.desktop`` in the application dirs."""
        for directory in self.application_dirs:
            candidate = os.path.join(directory, f"{name}.desktop")
            if os.path.isfile(candidate):
                return candidate
        return None

    def find_icon(self, icon_name: str) -> str:
        """Return the first existing icon file for ``icon_name``, or ''."""
        if os.path.isabs(icon_name):
            return icon_name if os.path.isfile(icon_name) else ""
        for template in self.icon_templates:
            try:
                icon = template.format(icon=icon_name)
            except (KeyError, IndexError, ValueError) as e:
                logger.warning("Skipping icon template '%s': %s", template, e)
                continue
            if os.path.isfile(icon):
                return icon
        return ""

    def resolve(self, record: ApplicationRecord) -> None:
        """Fill installed/title/icon of a single record."""
        desktop_path = self.find_desktop_file(record.name)
        if desktop_path is None:
            return

        entry = read_desktop_entry(desktop_path, default_icon=record.name)
        record.installed = True
        record.title = entry.title
        record.icon = self.find_icon(entry.icon_name)

    def resolve_all(self, names: Iterable[str], records: dict[str, ApplicationRecord]) -> None:
        """Resolve the install status of every named record."""
        for name in names:
            self.resolve(records[name])
