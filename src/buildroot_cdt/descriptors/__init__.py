"""Descriptor tree construction for Buildroot toolchains.

Public API::

    from buildroot_cdt.descriptors import DescriptorBuilder, identifier

    definition = DescriptorBuilder().build(installation)
    assert definition.toolchain.id == identifier(installation.install_path, "toolchain.base")
"""

from __future__ import annotations

from buildroot_cdt.descriptors.builder import DEFAULT_STATE_DIR, DescriptorBuilder
from buildroot_cdt.descriptors.identifiers import (
    autotools_toolchain_base_id,
    identifier,
    normalize_path,
    tool_name,
    toolchain_base_id,
)
from buildroot_cdt.descriptors.models import (
    ArtifactKind,
    BuildDefinition,
    ConfigurationKind,
    NatureFilter,
    ProjectType,
    ScannerDiscoveryProfile,
    Toolchain,
    ToolchainFlavor,
    ToolDescriptor,
    ToolKind,
)

__all__ = [
    "ArtifactKind",
    "BuildDefinition",
    "ConfigurationKind",
    "DEFAULT_STATE_DIR",
    "DescriptorBuilder",
    "NatureFilter",
    "ProjectType",
    "ScannerDiscoveryProfile",
    "ToolDescriptor",
    "ToolKind",
    "Toolchain",
    "ToolchainFlavor",
    "autotools_toolchain_base_id",
    "identifier",
    "normalize_path",
    "tool_name",
    "toolchain_base_id",
]
