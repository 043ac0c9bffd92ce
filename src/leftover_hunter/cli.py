"""Leftover Hunter CLI - Main entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from leftover_hunter import __version__
from leftover_hunter.config import (
    DEFAULT_CONFIG_TEMPLATE,
    Config,
    get_config_paths,
    load_config,
    load_config_from_file,
)
from leftover_hunter.core.analyzer import Analyzer
from leftover_hunter.core.exporter import export_registry
from leftover_hunter.core.models import ApplicationRecord, DataType
from leftover_hunter.core.registry import Registry
from leftover_hunter.core.remover import PathRemover
from leftover_hunter.core.size import format_size, parse_size
from leftover_hunter.patterns import get_known_apps
from leftover_hunter.platform.detect import get_platform_info
from leftover_hunter.ui.console import create_console, print_banner, setup_logging
from leftover_hunter.ui.prompts import confirm_deletion

app = typer.Typer(
    name="leftover-hunter",
    help="Find and remove data left behind by uninstalled apps.",
    no_args_is_help=True,
)
console = create_console()

TYPE_NAMES: dict[str, DataType] = {
    "config": DataType.CONFIG,
    "cache": DataType.CACHE,
    "local-data": DataType.LOCAL_DATA,
}


class State:
    """Global state container for CLI."""

    def __init__(self) -> None:
        self.config: Config = Config()  # Default until loaded


state = State()


def _parse_types(names: Optional[list[str]]) -> DataType:
    """Turn --type values into category flags; none given means all."""
    if not names:
        return DataType.ALL
    types = DataType.NONE
    for name in names:
        try:
            types |= TYPE_NAMES[name.lower()]
        except KeyError:
            console.print(f"[red]Invalid type: {name}[/red]")
            console.print(f"[dim]Valid options: {', '.join(TYPE_NAMES)}[/dim]")
            raise typer.Exit(1) from None
    return types


def _parse_min_size(min_size: str) -> int:
    """Parse min_size string to bytes, exit with error on invalid input."""
    try:
        return parse_size(min_size)
    except ValueError as e:
        console.print(f"[red]Invalid min-size: {e}[/red]")
        raise typer.Exit(1) from e


def _build_registry(dry_run: bool = False, trash: bool = False) -> Registry:
    """Create a registry wired to the active configuration."""
    config = state.config
    locations = config.locations()
    parallel_config = config.discovery.parallel_config
    remover = PathRemover(
        dry_run=dry_run,
        use_trash=trash,
        protected=locations.protected_paths(),
    )
    registry = Registry(
        locations,
        get_known_apps(config.known_apps),
        pattern=config.discovery.prefix,
        remover=remover,
        parallel_config=parallel_config,
    )
    registry.deletion_error.connect(
        lambda path: console.print(f"[red]Failed to delete {path}[/red]")
    )
    return registry


def _rescan(registry: Registry) -> None:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Scanning for leftovers...", total=None)
        registry.rescan()


def _print_deletion_summary(deleted: int, dry_run: bool) -> None:
    console.print()
    if dry_run:
        console.print(f"[yellow]Dry run mode - would free {format_size(deleted)}, no files were deleted.[/yellow]")
        console.print("[dim]Use --execute to actually delete files.[/dim]")
    elif deleted > 0:
        console.print(f"[green]Freed {format_size(deleted)}[/green]")
    else:
        console.print("[yellow]Nothing was deleted.[/yellow]")


def _confirm_or_exit(records: list[ApplicationRecord], size: int, dry_run: bool, yes: bool) -> None:
    if size <= 0:
        console.print("[green]Nothing to delete.[/green]")
        raise typer.Exit(0)
    interactive = state.config.defaults.interactive and not yes
    if not dry_run and interactive and not confirm_deletion(len(records), format_size(size)):
        console.print("[yellow]Aborted.[/yellow]")
        raise typer.Exit(0)


# Shared CLI options; None falls back to the [defaults] config section
DRY_RUN_OPTION = typer.Option(
    None,
    "--dry-run/--execute",
    help="Preview changes without deleting (default: dry-run)",
)

TRASH_OPTION = typer.Option(
    None,
    "--trash/--permanent",
    help="Move to trash instead of permanent deletion (default: permanent)",
)

TYPE_OPTION = typer.Option(
    None,
    "--type",
    "-t",
    help="Data to delete: config, cache, local-data (repeatable, default: all)",
)

YES_OPTION = typer.Option(
    False,
    "--yes",
    "-y",
    help="Do not ask for confirmation",
)


def _resolve_flags(dry_run: Optional[bool], trash: Optional[bool]) -> tuple[bool, bool]:
    defaults = state.config.defaults
    return (
        defaults.dry_run if dry_run is None else dry_run,
        defaults.trash if trash is None else trash,
    )


@app.command()
def scan(
    show_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Show all apps, not just the first 20",
    ),
    unused_only: bool = typer.Option(
        False,
        "--unused",
        "-u",
        help="Only show apps that are not installed",
    ),
    min_size: str = typer.Option(
        "0B",
        "--min-size",
        "-s",
        help="Minimum size to report (e.g., 1MB, 10MB, 100MB)",
    ),
    export: Optional[Path] = typer.Option(
        None,
        "--export",
        "-e",
        help="Write the results to a file",
    ),
    export_format: str = typer.Option(
        "json",
        "--format",
        "-f",
        help="Export format: json or csv",
    ),
) -> None:
    """Scan for data left behind by applications."""
    print_banner(console)

    min_size_bytes = _parse_min_size(min_size)
    if export_format not in ("json", "csv"):
        console.print(f"[red]Invalid export format: {export_format}[/red]")
        raise typer.Exit(1)

    registry = _build_registry()
    _rescan(registry)

    records = [
        r for r in registry.rows()
        if r.total_size >= min_size_bytes and not (unused_only and r.installed)
    ]

    analyzer = Analyzer(console=console)
    analyzer.display_results(records, registry.totals, show_all=show_all)

    if export is not None:
        export_registry(records, registry.totals, export, export_format)  # type: ignore[arg-type]
        console.print(f"\n[green]Exported {len(records)} apps to {export}[/green]")


@app.command()
def delete(
    name: str = typer.Argument(..., help="Application name as shown by 'scan'"),
    types: Optional[list[str]] = TYPE_OPTION,
    dry_run: Optional[bool] = DRY_RUN_OPTION,
    trash: Optional[bool] = TRASH_OPTION,
    yes: bool = YES_OPTION,
) -> None:
    """Delete leftover data of a single application."""
    print_banner(console)

    data_types = _parse_types(types)
    dry_run, trash = _resolve_flags(dry_run, trash)

    registry = _build_registry(dry_run=dry_run, trash=trash)
    _rescan(registry)

    record = registry.record(name)
    if record is None:
        console.print(f"[red]No leftover data found for '{name}'[/red]")
        raise typer.Exit(1)

    analyzer = Analyzer(console=console)
    size = analyzer.display_deletion_preview([record], data_types)
    _confirm_or_exit([record], size, dry_run, yes)

    deleted = registry.delete_data_sync(name, data_types)
    _print_deletion_summary(deleted, dry_run)


@app.command()
def purge(
    types: Optional[list[str]] = TYPE_OPTION,
    dry_run: Optional[bool] = DRY_RUN_OPTION,
    trash: Optional[bool] = TRASH_OPTION,
    yes: bool = YES_OPTION,
) -> None:
    """Delete leftover data of every application that is not installed."""
    print_banner(console)

    data_types = _parse_types(types)
    dry_run, trash = _resolve_flags(dry_run, trash)

    registry = _build_registry(dry_run=dry_run, trash=trash)
    _rescan(registry)

    unused = [r for r in registry.rows() if not r.installed]
    if not unused:
        console.print("[green]No unused apps found![/green]")
        raise typer.Exit(0)

    analyzer = Analyzer(console=console)
    size = analyzer.display_deletion_preview(unused, data_types)
    _confirm_or_exit(unused, size, dry_run, yes)

    deleted = registry.delete_unused_data_sync(data_types)
    _print_deletion_summary(deleted, dry_run)


@app.command()
def info() -> None:
    """Show platform information and search locations."""
    print_banner(console)

    platform_info = get_platform_info()
    locations = state.config.locations()

    console.print("[bold]System Information[/bold]\n")
    console.print(f"  Platform: {platform_info.name}")
    console.print(f"  Variant:  {platform_info.variant}")
    console.print(f"  Home:     {platform_info.home_dir}")
    if platform_info.is_sailfish:
        console.print("  Sailfish: Yes")

    console.print("\n[bold]Search Locations[/bold]\n")
    console.print(f"  Config:     {locations.config_root}")
    console.print(f"  Cache:      {locations.cache_root}")
    console.print(f"  Local data: {locations.data_root}")
    console.print("  Desktop entries:")
    for directory in locations.application_dirs:
        console.print(f"    {directory}")

    console.print(f"\n[dim]Leftover Hunter v{__version__}[/dim]")


# Config subcommand group
config_app = typer.Typer(
    name="config",
    help="Manage Leftover Hunter configuration.",
    no_args_is_help=True,
)
app.add_typer(config_app)


def _print_config_locations(xdg_path: Path, cwd_path: Path) -> None:
    """Print config file locations and their status."""
    console.print("\n[bold]Config locations:[/bold]")
    xdg_status = "[green]exists[/green]" if xdg_path.exists() else "[dim]not found[/dim]"
    console.print(f"  Global: {xdg_path} ({xdg_status})")

    cwd_status = "[green]exists (overrides global)[/green]" if cwd_path.exists() else "[dim]not found[/dim]"
    console.print(f"  Local:  {cwd_path} ({cwd_status})")


@config_app.command("init")
def config_init(
    global_config: bool = typer.Option(
        True,
        "--global/--local",
        help="Create in XDG config (--global) or current directory (--local)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing config file",
    ),
) -> None:
    """Generate a default configuration file with comments."""
    xdg_path, cwd_path = get_config_paths()
    target = xdg_path if global_config else cwd_path

    if target.exists() and not force:
        console.print(f"[yellow]Config already exists: {target}[/yellow]")
        console.print("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(1)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(DEFAULT_CONFIG_TEMPLATE)
    except OSError as e:
        console.print(f"[red]Permission denied: {target}[/red]")
        console.print(f"[dim]Check write permissions for {target.parent}[/dim]")
        raise typer.Exit(1) from e

    location = "global" if global_config else "local"
    console.print(f"[green]Created {location} config:[/green] {target}")


@config_app.command("show")
def config_show() -> None:
    """Display the active configuration and its source."""
    config = state.config
    xdg_path, cwd_path = get_config_paths()

    source_text = str(config._source) if config._source else "[dim]defaults only[/dim]"
    console.print(
        Panel.fit(
            f"[bold]Active config:[/bold] {source_text}",
            title="Configuration Source",
        )
    )

    table = Table(title="Resolved Configuration", show_header=True)
    table.add_column("Section", style="cyan")
    table.add_column("Key", style="green")
    table.add_column("Value")

    for section_name in ["defaults", "paths", "discovery"]:
        section = getattr(config, section_name)
        for key, value in vars(section).items():
            if not key.startswith("_"):
                table.add_row(section_name, key, str(value))
    for known_app in config.known_apps:
        table.add_row("known_apps", known_app.name, ", ".join(
            known_app.config + known_app.cache + known_app.local_data
        ))

    console.print(table)
    _print_config_locations(xdg_path, cwd_path)


@config_app.command("path")
def config_path() -> None:
    """Show configuration file locations and status."""
    xdg_path, cwd_path = get_config_paths()
    _print_config_locations(xdg_path, cwd_path)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Leftover Hunter v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (overrides default locations)",
        exists=True,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log every found app and deleted path",
    ),
) -> None:
    """Leftover Hunter - Find and remove data left behind by uninstalled apps."""
    setup_logging(console, verbose=verbose)

    try:
        state.config = load_config_from_file(config_file) if config_file else load_config()
    except ValueError as e:
        console.print(f"[red]Config error: {e}[/red]")
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
