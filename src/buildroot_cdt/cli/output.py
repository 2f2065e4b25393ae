"""Rich output formatting helpers for the buildroot-cdt CLI."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from buildroot_cdt.descriptors.identifiers import tool_name
from buildroot_cdt.registry.debugger import DebuggerConfigRegistry
from buildroot_cdt.session import ScanReport

console = Console()


def print_scan_report(
    report: ScanReport,
    debuggers: DebuggerConfigRegistry,
    output_dir: Path,
) -> None:
    """Print registered and skipped toolchains after a scan.

    Args:
        report: Outcome of the registration pass.
        debuggers: Debugger configurations recorded during the pass.
        output_dir: Where the documents were written.
    """
    if not report.registered and not report.skipped:
        console.print("[dim]No Buildroot toolchains found.[/dim]")
    else:
        table = Table(title="Buildroot Toolchains", show_header=True, header_style="bold")
        table.add_column("Architecture", style="bold")
        table.add_column("Path")
        table.add_column("Prefix", style="dim")
        table.add_column("C++", justify="center")
        table.add_column("Status", justify="center")
        table.add_column("Debugger", style="dim")

        for definition in report.registered:
            inst = definition.installation
            key = tool_name(inst.architecture, inst.install_path)
            table.add_row(
                inst.architecture, inst.install_path, inst.tool_prefix,
                "yes" if definition.has_cpp else "-",
                Text("REGISTERED", style="bold green"),
                debuggers.get_debug_name(key) or "-",
            )
        for skipped in report.skipped:
            inst = skipped.installation
            table.add_row(
                inst.architecture, inst.install_path, inst.tool_prefix, "-",
                Text(skipped.reason.upper(), style="yellow"), "-",
            )
        console.print(table)

    for error in report.errors:
        console.print(f"[red]- {error}[/red]")

    parts = [f"[bold]{len(report.registered)}[/bold] registered"]
    if report.skipped:
        parts.append(f"[yellow]{len(report.skipped)} skipped[/yellow]")
    parts.append(f"{report.documents} documents")
    console.print(" | ".join(parts))
    if report.documents:
        console.print(f"Documents written to: {output_dir}")
