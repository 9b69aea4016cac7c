"""fmtspec CLI commands.

This module provides CLI commands for running conformance specs outside
pytest:
- interpreters: Show which interpreter each version track resolves to
- fixtures: List the fixtures of a spec directory
- run: Register and execute the units of one or more spec directories

Example:
    $ fmtspec interpreters
    $ fmtspec run tests/python/comments tests/python/strings --ast-compare
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.errors import FmtSpecError
from .core.logging import configure_logging, parse_level
from .core.models import UnitOutcome
from .core.settings import load_settings
from .fixtures import enumerate_fixtures
from .formatters import create_formatter
from .interpreters.resolver import DEFAULT_TRACKS, resolve_tracks
from .runner import collect_directory, run_units
from .verification.snapshot import FileSnapshotStore, default_snapshot_path

app = typer.Typer(
    name="fmtspec",
    help="fmtspec - formatter conformance specs",
    no_args_is_help=True,
)

console = Console()


@app.command()
def interpreters(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Harness config file (default: ./fmtspec.yaml)"
    ),
):
    """Show the interpreter resolved for each version track.

    Example:
        $ fmtspec interpreters
    """
    try:
        settings = load_settings(config)
    except FmtSpecError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    tracks = settings.interpreters or list(DEFAULT_TRACKS)
    bindings = resolve_tracks(tracks)

    table = Table(title="Interpreters")
    table.add_column("Track", style="cyan")
    table.add_column("Constraint")
    table.add_column("Executable")
    table.add_column("Version")

    for track, binding in zip(tracks, bindings):
        if binding is None:
            table.add_row(escape(track.name), track.constraint, "[red]not found[/red]", "-")
        else:
            table.add_row(
                escape(track.name), track.constraint, escape(binding.executable), binding.version
            )

    console.print(table)


@app.command()
def fixtures(
    directory: Path = typer.Argument(..., help="Spec directory"),
):
    """List the fixtures of a spec directory, in directory order."""
    if not directory.is_dir():
        console.print(f"[bold red]Error:[/bold red] Not a directory: {escape(str(directory))}")
        raise typer.Exit(code=1)

    for path in enumerate_fixtures(directory):
        console.print(escape(path.name))


@app.command()
def run(
    directories: list[Path] = typer.Argument(..., help="Spec directories"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Harness config file (default: ./fmtspec.yaml)"
    ),
    ast_compare: bool = typer.Option(
        False, "--ast-compare", help="Also check structural round trips"
    ),
    update_snapshots: bool = typer.Option(
        False, "--update-snapshots", "-u", help="Rewrite mismatching snapshots"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run the conformance units of one or more spec directories.

    Exits with status 1 when any unit fails.

    Example:
        $ fmtspec run tests/python/comments
        $ fmtspec run tests/python/* --ast-compare -u
    """
    try:
        settings = load_settings(config)
        updates = {}
        if ast_compare:
            updates["ast_compare"] = True
        if update_snapshots:
            updates["update_snapshots"] = True
        settings = settings.model_copy(update=updates)

        configure_logging(
            level=logging.DEBUG if verbose else parse_level(settings.log_level)
        )

        if settings.formatter is None:
            raise FmtSpecError(
                "No formatter configured. Add a 'formatter' block to fmtspec.yaml"
            )
        formatter = create_formatter(settings.formatter)
        bindings = resolve_tracks(settings.interpreters or None)

        outcomes: list[UnitOutcome] = []
        for directory in directories:
            store = FileSnapshotStore(
                default_snapshot_path(directory), update=settings.update_snapshots
            )
            units = collect_directory(
                directory,
                formatter=formatter,
                settings=settings,
                bindings=bindings,
                store=store,
            )
            outcomes.extend(run_units(units))
            store.save()

    except FmtSpecError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    _print_outcomes(outcomes)

    failures = [o for o in outcomes if not o.passed]
    if failures:
        raise typer.Exit(code=1)


def _print_outcomes(outcomes: list[UnitOutcome]) -> None:
    table = Table(title="Conformance Units")
    table.add_column("Unit", style="cyan")
    table.add_column("Result")

    for outcome in outcomes:
        status = "[green]pass[/green]" if outcome.passed else "[red]FAIL[/red]"
        table.add_row(escape(outcome.name), status)

    console.print(table)

    for outcome in outcomes:
        if not outcome.passed:
            console.print()
            console.print(f"[bold red]{escape(outcome.name)}[/bold red]")
            console.print(outcome.error, markup=False, highlight=False)

    passed = sum(1 for o in outcomes if o.passed)
    console.print()
    console.print(f"[bold]{passed}/{len(outcomes)}[/bold] units passed")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
