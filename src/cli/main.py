"""Typer application: `evm-deployment-info`.

The CLI is a thin layer: it parses options, builds a `ProjectInspector`,
and renders whatever structured result comes back (Rich table, JSON or CSV).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from adapters.exporters import (
    render_json,
    render_listing_csv,
    render_listing_json,
    write_output,
)
from cli import doctor
from cli.ui_components import build_coverage_table, build_listing_table, print_audit
from core.config import APP_NAME, APP_VERSION, AppSettings
from core.domain.errors import DeploymentInfoError, InvalidFlagCombinationError
from core.interfaces.source import InspectionHooks
from core.resources_loader import catalog_from_settings
from core.services.coverage import NetworkClassifier
from core.services.inspection import ProjectInspector

app = typer.Typer(
    name=APP_NAME,
    no_args_is_help=True,
    help="A CLI tool for analyzing hardhat deployments.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


class Source(str, Enum):
    DECLARED = "declared"
    DEPLOYED = "deployed"


@dataclass
class CliState:
    root: Path
    config: Path | None
    settings: AppSettings

    def inspector(self) -> ProjectInspector:
        return ProjectInspector(
            self.root,
            self.settings,
            config_path=self.config,
            hooks=InspectionHooks(warning=_print_warning),
        )


def _print_warning(message: str) -> None:
    _err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


@contextmanager
def _fatal_errors() -> Iterator[None]:
    """Turn core errors into a red message and exit code 1."""

    try:
        yield
    except DeploymentInfoError as exc:
        _err_console.print(f"[red]Error:[/red] {escape(exc.message)}")
        raise typer.Exit(code=1) from exc


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {APP_VERSION}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        "--project",
        help="Root directory of the hardhat project.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Address book with declared deployments (defaults to deployments.json & co. in the root).",
    ),
    catalog: Optional[Path] = typer.Option(
        None,
        "--catalog",
        help="JSON file replacing the bundled mainnet/testnet catalog.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    _configure_logging(verbose)
    settings = AppSettings()
    if catalog is not None:
        settings = settings.model_copy(update={"networks_catalog_path": catalog})
    ctx.obj = CliState(root=root, config=config, settings=settings)


@app.command()
def count(ctx: typer.Context) -> None:
    """Count the number of deployments."""

    state: CliState = ctx.obj
    with _fatal_errors():
        summary = state.inspector().count()
    _console.print(f"Found {summary.deployments} deployment(s) across {summary.networks} network(s)")


@app.command(name="list")
def list_command(
    ctx: typer.Context,
    aggregate: bool = typer.Option(False, "--aggregate", help="Merge networks of the same family."),
    source: Source = typer.Option(Source.DECLARED, "--source", help="Which side to list."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON."),
    as_csv: bool = typer.Option(False, "--csv", help="Print CSV."),
    outfile: Optional[Path] = typer.Option(
        None,
        "--outfile",
        "-o",
        help="Write the output to a file (requires --json or --csv).",
    ),
) -> None:
    """List deployment addresses per network (or per family with --aggregate)."""

    state: CliState = ctx.obj
    with _fatal_errors():
        if as_json and as_csv:
            raise InvalidFlagCombinationError("--json and --csv are mutually exclusive")
        if outfile is not None and not (as_json or as_csv):
            raise InvalidFlagCombinationError("--outfile requires --json or --csv")

        groups = state.inspector().listing(aggregate=aggregate, source=source.value)

    if not (as_json or as_csv):
        _console.print(build_listing_table(groups, aggregate=aggregate))
        return

    text = render_listing_json(groups) if as_json else render_listing_csv(groups)
    if outfile is None:
        typer.echo(text, nl=False)
        return
    path = write_output(text=text, output_path=outfile)
    _console.print(f"[green]Saved to:[/green] {escape(str(path))}")


@app.command()
def audit(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON."),
    fail_on_diff: bool = typer.Option(
        False,
        "--fail-on-diff",
        help="Exit with code 2 when declared and deployed records differ.",
    ),
) -> None:
    """Report records present in only one of the address book / deployments dir."""

    state: CliState = ctx.obj
    with _fatal_errors():
        result = state.inspector().audit()

    if as_json:
        typer.echo(render_json(result), nl=False)
    else:
        print_audit(_console, result)

    if fail_on_diff and not result.is_clean:
        raise typer.Exit(code=2)


@app.command()
def coverage(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON."),
    incomplete_only: bool = typer.Option(
        False,
        "--incomplete-only",
        help="Only show families missing a mainnet or a testnet deployment.",
    ),
) -> None:
    """Show mainnet/testnet coverage per network family."""

    state: CliState = ctx.obj
    with _fatal_errors():
        report = state.inspector().coverage()

    if as_json:
        families = report.incomplete() if incomplete_only else list(report.families.values())
        typer.echo(render_json({item.family: item for item in families}), nl=False)
        return
    _console.print(build_coverage_table(report, incomplete_only=incomplete_only))


@app.command()
def classify(
    ctx: typer.Context,
    names: list[str] = typer.Argument(..., help="Raw network identifiers."),
) -> None:
    """Show the family and mainnet/testnet kind of network names."""

    state: CliState = ctx.obj
    with _fatal_errors():
        classifier = NetworkClassifier(catalog_from_settings(state.settings))

    table = Table(title="Networks")
    table.add_column("Network", style="cyan", no_wrap=True)
    table.add_column("Family", style="white")
    table.add_column("Kind", style="magenta")
    for name in names:
        table.add_row(name, classifier.normalizer.normalize(name), classifier.classify(name).label())
    _console.print(table)


def run() -> None:
    app()
