"""Presence checks for toolchain binaries."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from buildroot_cdt.discovery.models import HOST_BIN_DIR

C_COMPILER = "gcc"
CPP_COMPILER = "g++"


@runtime_checkable
class CapabilityProbe(Protocol):
    """Answers whether a tool binary is installed for a toolchain."""

    def exists(self, path: str, prefix: str, tool: str) -> bool:
        """Return True if ``<path>/host/usr/bin/<prefix><tool>`` is executable.

        Pass an empty ``prefix`` for tools installed without one.
        """
        ...


class FilesystemProbe:
    """Probe the local filesystem for executable regular files."""

    def exists(self, path: str, prefix: str, tool: str) -> bool:
        candidate = Path(path) / HOST_BIN_DIR / f"{prefix}{tool}"
        try:
            return candidate.is_file() and os.access(candidate, os.X_OK)
        except (PermissionError, OSError):
            return False
