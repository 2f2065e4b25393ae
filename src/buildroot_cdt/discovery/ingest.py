"""Reader for the Buildroot toolchain registry file.

When a Buildroot project is built with ``BR2_ECLIPSE_REGISTER``, Buildroot
appends one line describing the generated toolchain to
``$HOME/.buildroot-eclipse.toolchains``::

    /opt/br/output:arm-buildroot-linux-gnueabi-:arm

Each line holds ``path:prefix:architecture``. Fields beyond the third are
ignored and the architecture is upper-cased on read. Only the line ending
is removed, so whitespace inside a field is kept; lines holding nothing but
whitespace are skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from buildroot_cdt.discovery.models import MalformedLinePolicy, ToolchainInstallation
from buildroot_cdt.exceptions import MalformedConfigLineError, MissingConfigFileError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ":"
TOOLCHAINS_FILE_NAME = ".buildroot-eclipse.toolchains"


def default_toolchains_file() -> Path:
    """Per-user registry file written by Buildroot."""
    return Path.home() / TOOLCHAINS_FILE_NAME


def parse_line(line: str, line_number: int = 0) -> ToolchainInstallation:
    """Parse one registry line into an installation record.

    Raises:
        MalformedConfigLineError: The line has fewer than three fields.
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < 3:
        raise MalformedConfigLineError(line_number, line)
    path, prefix, architecture = fields[:3]
    return ToolchainInstallation(
        install_path=path,
        tool_prefix=prefix,
        architecture=architecture.upper(),
        line_number=line_number,
    )


def iter_installations(
    path: Path,
    policy: MalformedLinePolicy = MalformedLinePolicy.ABORT,
) -> Iterator[ToolchainInstallation]:
    """Yield installations from the registry file in file order.

    The generator is lazy: under ``ABORT`` every installation preceding a
    malformed line has already been handed to the caller when the error is
    raised.

    Raises:
        MissingConfigFileError: ``path`` does not exist.
        MalformedConfigLineError: A short line was read under ``ABORT``.
    """
    try:
        handle = path.open(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingConfigFileError(path) from exc

    with handle:
        for line_number, raw in enumerate(handle, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            try:
                yield parse_line(line, line_number)
            except MalformedConfigLineError:
                if policy is MalformedLinePolicy.ABORT:
                    raise
                logger.warning("Skipping malformed toolchain line %d: %r", line_number, line)


def read_installations(
    path: Path,
    policy: MalformedLinePolicy = MalformedLinePolicy.ABORT,
) -> list[ToolchainInstallation]:
    """Read every installation from the registry file."""
    return list(iter_installations(path, policy))
