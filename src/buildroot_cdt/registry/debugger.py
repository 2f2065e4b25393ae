"""Debugger configurations of the registered toolchains.

The launch-configuration side of the host asks, for a given toolchain name,
which gdb to run and where the target's shared libraries live. Entries are
written once per registered installation during the startup pass and read
later; the registry is owned by the ``ToolchainSession`` and cleared when
the session stops.

Usage::

    registry = DebuggerConfigRegistry()
    registry.register("ARM", "arm-linux-", "/opt/br")
    registry.get_solib_path(tool_name("ARM", "/opt/br"))  # "/opt/br"
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from buildroot_cdt.descriptors.identifiers import tool_name
from buildroot_cdt.discovery.models import HOST_BIN_DIR

DEBUGGER_BINARY = "gdb"


@dataclass(frozen=True)
class DebuggerConfig:
    """How to debug programs built with one toolchain.

    Attributes:
        prefix: Cross tool prefix (e.g. ``arm-linux-``).
        solib_path: Root searched for target shared libraries.
        debug_name: Absolute path of the cross gdb.
    """

    prefix: str
    solib_path: str
    debug_name: str


class DebuggerConfigRegistry:
    """Map from composite toolchain name to ``DebuggerConfig``.

    Not thread-safe: writes happen during the single startup pass only.
    """

    def __init__(self) -> None:
        self._configs: dict[str, DebuggerConfig] = {}

    def register(self, architecture: str, prefix: str, path: str) -> str:
        """Record the debugger configuration of one installation.

        Returns:
            The key the configuration was stored under.
        """
        key = tool_name(architecture, path)
        self._configs[key] = DebuggerConfig(
            prefix=prefix,
            solib_path=path,
            debug_name=f"{path}/{HOST_BIN_DIR}/{prefix}{DEBUGGER_BINARY}",
        )
        return key

    def lookup(self, name: str) -> DebuggerConfig | None:
        """Return the configuration for ``name``, or None if it is not a managed toolchain."""
        return self._configs.get(name)

    def get_solib_path(self, name: str) -> str | None:
        config = self._configs.get(name)
        return config.solib_path if config is not None else None

    def get_debug_name(self, name: str) -> str | None:
        config = self._configs.get(name)
        return config.debug_name if config is not None else None

    def names(self) -> list[str]:
        return sorted(self._configs)

    def clear(self) -> None:
        self._configs.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._configs

    def __len__(self) -> int:
        return len(self._configs)

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)
