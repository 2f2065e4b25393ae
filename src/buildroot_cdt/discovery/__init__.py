"""Discovery of locally registered Buildroot toolchains.

Public API::

    from buildroot_cdt.discovery import FilesystemProbe, read_installations

    probe = FilesystemProbe()
    for installation in read_installations(path):
        if probe.exists(installation.install_path, installation.tool_prefix, "gcc"):
            print(installation.architecture, installation.install_path)
"""

from __future__ import annotations

from buildroot_cdt.discovery.ingest import (
    TOOLCHAINS_FILE_NAME,
    default_toolchains_file,
    iter_installations,
    parse_line,
    read_installations,
)
from buildroot_cdt.discovery.models import MalformedLinePolicy, ToolchainInstallation
from buildroot_cdt.discovery.probe import (
    C_COMPILER,
    CPP_COMPILER,
    CapabilityProbe,
    FilesystemProbe,
)

__all__ = [
    "C_COMPILER",
    "CPP_COMPILER",
    "CapabilityProbe",
    "TOOLCHAINS_FILE_NAME",
    "FilesystemProbe",
    "MalformedLinePolicy",
    "ToolchainInstallation",
    "default_toolchains_file",
    "iter_installations",
    "parse_line",
    "read_installations",
]
