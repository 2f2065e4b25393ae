"""buildroot-cdt CLI: register Buildroot toolchains with the CDT build system.

Entry point for the ``buildroot-cdt`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan    Run a registration pass and write the generated plug-in documents.
    render  Print the documents generated for one toolchain.

Usage::

    buildroot-cdt scan
    buildroot-cdt scan --toolchains ./toolchains.list --output ./dropins
    buildroot-cdt render /opt/br/output arm-linux- arm
    buildroot-cdt render /opt/br/output arm-linux- arm --scanner c
"""

from __future__ import annotations

import logging

import click

from buildroot_cdt import __version__
from buildroot_cdt.cli.render_cmd import render_command
from buildroot_cdt.cli.scan_cmd import scan_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """buildroot-cdt: expose Buildroot cross toolchains as CDT build targets.

    Reads the toolchains Buildroot registered in
    ~/.buildroot-eclipse.toolchains and generates toolchain, project type
    and scanner-discovery definitions for each of them.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(scan_command)
cli.add_command(render_command)
