"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables are reused by several commands (list/audit/coverage/doctor).
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import AuditEntry, AuditResult, CoverageReport, ListingGroup


def _yes_no(value: bool) -> Text:
    return Text("yes", style="green") if value else Text("no", style="red")


def build_listing_table(groups: list[ListingGroup], *, aggregate: bool = False) -> Table:
    table = Table(title="Deployments")
    table.add_column("Family" if aggregate else "Network", style="cyan", no_wrap=True)
    if aggregate:
        table.add_column("Network", style="white")
    table.add_column("Contract", style="white")
    table.add_column("Address", style="magenta", no_wrap=True)

    for group in groups:
        for index, entry in enumerate(group.entries):
            key = group.key if index == 0 else ""
            row = [key]
            if aggregate:
                row.append(entry.network)
            row.extend([entry.contract or "-", entry.address])
            table.add_row(*row)
        if not group.entries:
            row = [group.key] + (["-"] if aggregate else []) + ["-", "(none)"]
            table.add_row(*row, style="dim")
    return table


def build_audit_table(title: str, entries: list[AuditEntry]) -> Table:
    table = Table(title=title)
    table.add_column("Network", style="cyan", no_wrap=True)
    table.add_column("Address", style="magenta", no_wrap=True)
    for entry in entries:
        table.add_row(*entry.as_pair())
    return table


def print_audit(console: Console, result: AuditResult) -> None:
    """Print both sides of an audit, or a single success line when clean."""

    if result.is_clean:
        console.print("[green]Declared and deployed records match.[/green]")
        return
    if result.only_in_declared:
        console.print(build_audit_table("Declared but not deployed", result.only_in_declared))
    if result.only_in_deployed:
        console.print(build_audit_table("Deployed but not declared", result.only_in_deployed))
    console.print(
        f"[yellow]{len(result.only_in_declared)} declared-only, "
        f"{len(result.only_in_deployed)} deployed-only record(s).[/yellow]"
    )


def build_coverage_table(report: CoverageReport, *, incomplete_only: bool = False) -> Table:
    table = Table(title="Network coverage")
    table.add_column("Family", style="cyan", no_wrap=True)
    table.add_column("Mainnet", justify="center")
    table.add_column("Testnet", justify="center")
    table.add_column("Networks", style="white")
    table.add_column("Unclassified", style="dim")

    items = report.incomplete() if incomplete_only else list(report.families.values())
    for item in items:
        table.add_row(
            item.family,
            _yes_no(item.has_mainnet),
            _yes_no(item.has_testnet),
            ", ".join(item.networks),
            ", ".join(item.unknown) or "-",
        )
    return table
