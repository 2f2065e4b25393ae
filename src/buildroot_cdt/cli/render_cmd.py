"""``buildroot-cdt render PATH PREFIX ARCH`` -- print generated documents.

Builds the definitions of a single toolchain without registering anything
and prints the build-definitions document, or the scanner-discovery
document of one compiler with ``--scanner``.

Exit Codes:
    0 -- The document was printed.
    2 -- The requested scanner profile does not exist (no C++ compiler).
"""

from __future__ import annotations

import sys

import click

from buildroot_cdt.descriptors.builder import DEFAULT_STATE_DIR, DescriptorBuilder
from buildroot_cdt.descriptors.models import ToolKind
from buildroot_cdt.discovery.models import ToolchainInstallation
from buildroot_cdt.documents.assembler import DocumentAssembler

_SCANNER_KINDS: dict[str, ToolKind] = {
    "c": ToolKind.C_COMPILER,
    "cpp": ToolKind.CPP_COMPILER,
}


@click.command("render")
@click.argument("path")
@click.argument("prefix")
@click.argument("architecture")
@click.option(
    "--scanner",
    type=click.Choice(sorted(_SCANNER_KINDS)),
    default=None,
    help="Print the scanner-discovery document of this compiler instead.",
)
@click.option(
    "--cpp/--no-cpp",
    default=None,
    help="Force the C++ branch on or off instead of probing for g++.",
)
@click.option("--state-dir", type=str, default=DEFAULT_STATE_DIR, show_default=True)
def render_command(
    path: str,
    prefix: str,
    architecture: str,
    scanner: str | None,
    cpp: bool | None,
    state_dir: str,
) -> None:
    """Print the documents generated for the toolchain at PATH."""
    installation = ToolchainInstallation(path, prefix, architecture.upper())
    definition = DescriptorBuilder(state_dir=state_dir).build(installation, has_cpp=cpp)
    assembler = DocumentAssembler()

    if scanner is None:
        click.echo(assembler.build_definition_document(definition).content, nl=False)
        sys.exit(0)

    profile = definition.scanner_profile(_SCANNER_KINDS[scanner])
    if profile is None:
        click.echo(f"No {scanner} scanner profile: C++ compiler not found.", err=True)
        sys.exit(2)
    click.echo(assembler.scanner_profile_document(profile).content, nl=False)
    sys.exit(0)
