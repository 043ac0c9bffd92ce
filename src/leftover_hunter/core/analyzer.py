"""Analyzer for displaying registry contents."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from leftover_hunter.core.models import CATEGORIES, ApplicationRecord, DataType, Totals
from leftover_hunter.core.size import format_size

CATEGORY_LABELS: dict[DataType, str] = {
    DataType.CONFIG: "Config",
    DataType.CACHE: "Cache",
    DataType.LOCAL_DATA: "Local data",
}


def _size_cell(size: int) -> str:
    return format_size(size) if size else "[dim]-[/dim]"


class Analyzer:
    """Renders rows, totals and deletion previews."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_totals(self, totals: Totals) -> None:
        """Display the aggregate totals panel."""
        summary = Panel(
            f"[bold]Config:[/bold] {format_size(totals.config_size)}   "
            f"[bold]Cache:[/bold] {format_size(totals.cache_size)}   "
            f"[bold]Local data:[/bold] {format_size(totals.local_data_size)}\n"
            f"[bold]Unused apps:[/bold] {totals.unused_apps_count} "
            f"holding [cyan]{format_size(totals.unused_size)}[/cyan]",
            title="Leftover Summary",
            border_style="blue",
        )
        self.console.print(summary)

    def display_results(
        self,
        records: list[ApplicationRecord],
        totals: Totals,
        show_all: bool = False,
    ) -> None:
        """Display rows in a formatted table, unused apps first."""
        if not records:
            self.console.print("[green]No leftover data found![/green]")
            return

        self.display_totals(totals)
        self.console.print()

        table = Table(
            title="Applications",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("App", style="white", overflow="ellipsis")
        table.add_column("Status", width=10)
        table.add_column("Config", justify="right", style="cyan", width=10)
        table.add_column("Cache", justify="right", style="cyan", width=10)
        table.add_column("Local data", justify="right", style="cyan", width=10)

        ordered = sorted(records, key=lambda r: (r.installed, r.display_title.lower()))
        shown = ordered if show_all else ordered[:20]

        for i, record in enumerate(shown, 1):
            title = record.display_title
            if title != record.name:
                title = f"{title} [dim]({record.name})[/dim]"
            status = "[green]installed[/green]" if record.installed else "[yellow]unused[/yellow]"
            table.add_row(
                str(i),
                title,
                status,
                _size_cell(record.config.size_bytes),
                _size_cell(record.cache.size_bytes),
                _size_cell(record.local_data.size_bytes),
            )

        self.console.print(table)

        if not show_all and len(records) > 20:
            self.console.print(
                f"\n[dim]Showing 20 of {len(records)} apps. Use --all to see everything.[/dim]"
            )

    def display_deletion_preview(self, records: list[ApplicationRecord], types: DataType) -> int:
        """Display what will be deleted and return the bytes to be freed."""
        total_size = 0

        self.console.print("\n[bold]The following will be deleted:[/bold]\n")

        table = Table(show_header=True, header_style="bold red")
        table.add_column("Size", justify="right", style="cyan", width=10)
        table.add_column("App", style="yellow")
        table.add_column("Type", style="green", width=10)
        table.add_column("Path", style="white")

        for record in records:
            for data_type in CATEGORIES:
                category = record.category(data_type)
                if not types & data_type or category.size_bytes <= 0:
                    continue
                total_size += category.size_bytes
                for path in category.paths:
                    table.add_row(
                        format_size(category.size_bytes),
                        record.name,
                        CATEGORY_LABELS[data_type],
                        path,
                    )

        self.console.print(table)
        self.console.print(f"\n[bold]Total to be freed:[/bold] [cyan]{format_size(total_size)}[/cyan]")
        return total_size
