"""Data models for toolchain discovery.

Contains ``ToolchainInstallation`` (one line of the Buildroot registry file)
and the ``MalformedLinePolicy`` switch that decides what happens when a line
cannot be parsed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Buildroot installs host tools (compilers, gdb, pkg-config) here,
# relative to the output directory recorded in the registry file.
HOST_BIN_DIR = "host/usr/bin"


class MalformedLinePolicy(str, Enum):
    """How the registry reader reacts to a line with fewer than 3 fields.

    ABORT keeps the historical behaviour: the rest of the file is not read.
    SKIP logs the line and moves on to the next one.
    """

    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True)
class ToolchainInstallation:
    """A single Buildroot toolchain listed in the registry file.

    Attributes:
        install_path: Buildroot output directory (e.g. ``/opt/br/output``).
        tool_prefix: Cross tool prefix including its trailing separator
            (e.g. ``arm-linux-``).
        architecture: Target architecture, upper-cased (e.g. ``ARM``).
        line_number: 1-based line in the registry file, for diagnostics.
            Not part of equality.
    """

    install_path: str
    tool_prefix: str
    architecture: str
    line_number: int = field(default=0, compare=False)

    @property
    def bin_dir(self) -> str:
        """Directory holding the toolchain's host binaries."""
        return f"{self.install_path}/{HOST_BIN_DIR}"

    def tool_path(self, tool: str, prefixed: bool = True) -> str:
        """Absolute command path for ``tool`` inside this installation."""
        name = f"{self.tool_prefix}{tool}" if prefixed else tool
        return f"{self.bin_dir}/{name}"
