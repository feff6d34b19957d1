"""Doctor command for project diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.address_book import AddressBookReader
from adapters.deployments_dir import HardhatDeploymentsReader
from adapters.project import find_hardhat_config
from core.config import AppSettings
from core.domain.errors import DeploymentInfoError
from core.resources_loader import catalog_from_settings

app = typer.Typer(help="Project diagnostics and configuration checks.")

_console = Console()


def _check_hardhat(root: Path, settings: AppSettings) -> tuple[str, str]:
    config = find_hardhat_config(root, settings)
    if config is not None:
        return "OK", config.name
    if settings.require_hardhat_config:
        return "FAIL", f"None of {', '.join(settings.hardhat_config_files)}"
    return "OPTIONAL", "Not required (require_hardhat_config=false)"


def _check_address_book(root: Path, settings: AppSettings, config: Path | None) -> tuple[str, str]:
    reader = AddressBookReader(root, settings, path=config)
    try:
        declared = reader.read()
    except DeploymentInfoError as exc:
        return "FAIL", exc.message
    total = sum(len(addresses) for addresses in declared.networks.values())
    return "OK", f"{declared.source_path}: {total} address(es), {len(declared.networks)} network(s)"


def _check_deployments(root: Path, settings: AppSettings) -> tuple[tuple[str, str], tuple[str, str]]:
    reader = HardhatDeploymentsReader(root, settings)
    try:
        deployed = reader.read()
    except DeploymentInfoError as exc:
        return ("FAIL", exc.message), ("SKIPPED", "-")
    dirs = ("OK", f"{len(deployed.networks)} network dir(s) in {reader.deployments_dir}")
    if deployed.warnings:
        return dirs, ("WARN", f"{len(deployed.warnings)} artifact(s) skipped")
    return dirs, ("OK", "All artifacts parsed")


def _check_catalog(settings: AppSettings) -> tuple[str, str]:
    try:
        catalog = catalog_from_settings(settings)
    except DeploymentInfoError as exc:
        return "FAIL", exc.message
    origin = str(settings.networks_catalog_path) if settings.networks_catalog_path else "bundled"
    return "OK", (
        f"{origin}: {len(catalog.suffixes)} suffix rule(s), "
        f"{len(catalog.mainnets)} mainnet(s), {len(catalog.testnets)} testnet(s)"
    )


@app.callback(invoke_without_command=True)
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics over the project root."""

    state = ctx.obj
    settings: AppSettings = state.settings if state else AppSettings()
    root = (state.root if state else Path(".")).expanduser().resolve()
    config = state.config if state else None

    table = Table(title="evm-deployment-info Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if not root.is_dir():
        table.add_row("Project root", "FAIL", f"{root} is not a directory")
        _console.print(table)
        raise typer.Exit(code=1)
    table.add_row("Project root", "OK", str(root))

    table.add_row("Hardhat config", *_check_hardhat(root, settings))
    table.add_row("Address book", *_check_address_book(root, settings, config))
    dirs, artifacts = _check_deployments(root, settings)
    table.add_row("Deployments dir", *dirs)
    table.add_row("Artifacts", *artifacts)
    table.add_row("Network catalog", *_check_catalog(settings))

    _console.print(table)
