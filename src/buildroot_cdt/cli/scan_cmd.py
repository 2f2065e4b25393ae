"""``buildroot-cdt scan`` -- run a registration pass.

Reads the toolchain registry file, builds the definitions of every toolchain
whose C compiler is present, and writes one plug-in document per
contribution into the output directory. Documents left by an earlier scan
(``org.buildroot.*.xml``) are removed first, so toolchains dropped from the
registry file disappear from the output; ``--keep-stale`` keeps them.

Exit Codes:
    0 -- At least one toolchain was registered.
    1 -- Errors were reported and no toolchain was registered.
    2 -- No toolchain was registered and no error was reported.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from buildroot_cdt.descriptors.identifiers import tool_name
from buildroot_cdt.discovery.models import MalformedLinePolicy
from buildroot_cdt.exceptions import RegistrationError, SettingsError
from buildroot_cdt.registry.sink import DirectorySink
from buildroot_cdt.session import ScanReport, ToolchainSession
from buildroot_cdt.settings import Settings


def _report_to_json(report: ScanReport, session: ToolchainSession) -> dict:
    """Convert a scan report to a JSON-serializable dict."""
    registered = []
    for definition in report.registered:
        inst = definition.installation
        key = tool_name(inst.architecture, inst.install_path)
        registered.append({
            "path": inst.install_path,
            "prefix": inst.tool_prefix,
            "architecture": inst.architecture,
            "toolchain_id": definition.toolchain.id,
            "cpp": definition.has_cpp,
            "debugger": session.debuggers.get_debug_name(key),
        })
    return {
        "registered": registered,
        "skipped": [
            {"path": s.installation.install_path, "line": s.installation.line_number,
             "reason": s.reason}
            for s in report.skipped
        ],
        "errors": report.errors,
        "documents": report.documents,
    }


@click.command("scan")
@click.option(
    "--toolchains", "toolchains_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Toolchain registry file (default: ~/.buildroot-eclipse.toolchains).",
)
@click.option(
    "--output", "-o", "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory receiving the generated documents (default: ./buildroot-cdt-plugins).",
)
@click.option(
    "--settings", "settings_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file.",
)
@click.option(
    "--malformed-lines",
    type=click.Choice([p.value for p in MalformedLinePolicy]),
    default=None,
    help="Abort the scan on a malformed line (default) or skip the line.",
)
@click.option(
    "--state-dir",
    type=str,
    default=None,
    help="Directory holding the compiler spec files used by scanner discovery.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--keep-stale",
    is_flag=True,
    default=False,
    help="Keep documents written by earlier scans in the output directory.",
)
def scan_command(
    toolchains_file: Path | None,
    output_dir: Path | None,
    settings_file: Path | None,
    malformed_lines: str | None,
    state_dir: str | None,
    output_format: str,
    keep_stale: bool,
) -> None:
    """Register every Buildroot toolchain listed in the registry file."""
    try:
        settings = Settings.load(
            settings_file,
            toolchains_file=toolchains_file,
            output_dir=output_dir,
            malformed_lines=malformed_lines,
            state_dir=state_dir,
        )
    except SettingsError as exc:
        raise click.ClickException(str(exc)) from exc

    sink = DirectorySink(settings.output_dir)
    if not keep_stale:
        try:
            sink.clear()
        except RegistrationError as exc:
            raise click.ClickException(str(exc)) from exc
    with ToolchainSession(settings, sink) as session:
        report = session.start()
        if output_format == "json":
            click.echo(json.dumps(_report_to_json(report, session), indent=2))
        else:
            from buildroot_cdt.cli.output import print_scan_report
            print_scan_report(report, session.debuggers, settings.output_dir)

    if report.registered:
        sys.exit(0)
    sys.exit(1 if report.errors else 2)
