"""Session-side registries: document sinks and debugger configurations."""

from __future__ import annotations

from buildroot_cdt.registry.debugger import DebuggerConfig, DebuggerConfigRegistry
from buildroot_cdt.registry.sink import DirectorySink, InMemorySink, RegistrationSink

__all__ = [
    "DebuggerConfig",
    "DebuggerConfigRegistry",
    "DirectorySink",
    "InMemorySink",
    "RegistrationSink",
]
