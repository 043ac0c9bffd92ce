"""Export registry contents to JSON and CSV formats."""

from __future__ import annotations

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal

from leftover_hunter.core.models import ApplicationRecord, Totals
from leftover_hunter.core.size import format_size

ExportFormat = Literal["json", "csv"]

CSV_FIELDS = [
    "name",
    "title",
    "installed",
    "config_size_bytes",
    "cache_size_bytes",
    "local_data_size_bytes",
    "total_size_bytes",
    "total_size_human",
    "paths",
]


def record_to_dict(record: ApplicationRecord) -> dict[str, Any]:
    """Convert an ApplicationRecord to a serializable dict."""
    return {
        "name": record.name,
        "title": record.display_title,
        "icon": record.icon,
        "installed": record.installed,
        "config": {"paths": record.config.paths, "size_bytes": record.config.size_bytes},
        "cache": {"paths": record.cache.paths, "size_bytes": record.cache.size_bytes},
        "local_data": {
            "paths": record.local_data.paths,
            "size_bytes": record.local_data.size_bytes,
        },
        "total_size_bytes": record.total_size,
        "total_size_human": format_size(record.total_size),
    }


def totals_to_dict(totals: Totals) -> dict[str, Any]:
    """Convert Totals to a serializable dict."""
    return {
        "config_size_bytes": totals.config_size,
        "cache_size_bytes": totals.cache_size,
        "local_data_size_bytes": totals.local_data_size,
        "total_size_bytes": totals.total_size,
        "total_size_human": format_size(totals.total_size),
        "unused_apps_count": totals.unused_apps_count,
        "unused_config_size_bytes": totals.unused_config_size,
        "unused_cache_size_bytes": totals.unused_cache_size,
        "unused_local_data_size_bytes": totals.unused_local_data_size,
    }


def registry_to_dict(records: list[ApplicationRecord], totals: Totals) -> dict[str, Any]:
    """Convert registry rows and totals to a serializable dict."""
    return {
        "type": "leftovers",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "app_count": len(records),
        "totals": totals_to_dict(totals),
        "apps": [record_to_dict(r) for r in records],
    }


def export_json(
    records: list[ApplicationRecord],
    totals: Totals,
    output_path: Path,
    *,
    indent: int = 2,
) -> None:
    """
    Export registry rows to a JSON file.

    Args:
        records: Rows to export
        totals: Aggregate totals to include
        output_path: Path to write JSON file
        indent: JSON indentation level (default: 2)
    """
    data = registry_to_dict(records, totals)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)


def export_csv(records: list[ApplicationRecord], output_path: Path) -> None:
    """Export registry rows to CSV, one row per app; paths are ';'-joined."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for record in records:
            writer.writerow({
                "name": record.name,
                "title": record.display_title,
                "installed": record.installed,
                "config_size_bytes": record.config.size_bytes,
                "cache_size_bytes": record.cache.size_bytes,
                "local_data_size_bytes": record.local_data.size_bytes,
                "total_size_bytes": record.total_size,
                "total_size_human": format_size(record.total_size),
                "paths": ";".join(
                    record.config.paths + record.cache.paths + record.local_data.paths
                ),
            })


def export_registry(
    records: list[ApplicationRecord],
    totals: Totals,
    output_path: Path,
    format: ExportFormat = "json",
) -> None:
    """
    Export registry contents to file in specified format.

    Raises:
        ValueError: If format is not supported
    """
    if format == "json":
        export_json(records, totals, output_path)
    elif format == "csv":
        export_csv(records, output_path)
    else:
        raise ValueError(f"Unsupported export format: {format}")
