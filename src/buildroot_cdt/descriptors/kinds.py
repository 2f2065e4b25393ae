"""Static per-kind metadata for generated tools.

One table for the managed toolchain and one for the autotools toolchain map
each ``ToolKind`` to the binary it runs, the id suffix it is registered
under, and the host template it specializes. The builder never branches on
tool kind; it looks the kind up here.
"""

from __future__ import annotations

from dataclasses import dataclass

from buildroot_cdt.descriptors.models import ArtifactKind, NatureFilter, ToolKind


@dataclass(frozen=True)
class ToolSpec:
    """Metadata needed to emit one tool.

    Attributes:
        binary: Tool base name without prefix (``gcc``, ``as``).
        prefixed: Whether the toolchain prefix is prepended to ``binary``.
        id_suffix: Suffix passed to ``identifier()``.
        description: Label fragment used in display names.
        superclass: Host tool template id.
        nature_filter: Project natures the tool applies to.
    """

    binary: str
    prefixed: bool
    id_suffix: str
    description: str
    superclass: str
    nature_filter: NatureFilter


@dataclass(frozen=True)
class InputSpec:
    """Compiler input type metadata for the managed toolchain."""

    id_suffix: str
    superclass: str
    profile_suffix: str
    spec_file_name: str


MANAGED_TOOLS: dict[ToolKind, ToolSpec] = {
    ToolKind.ASSEMBLER: ToolSpec(
        binary="as",
        prefixed=True,
        id_suffix="assembler",
        description="Assembler",
        superclass="cdt.managedbuild.tool.gnu.assembler",
        nature_filter=NatureFilter.BOTH,
    ),
    ToolKind.C_COMPILER: ToolSpec(
        binary="gcc",
        prefixed=True,
        id_suffix="c.compiler",
        description="C Compiler",
        superclass="cdt.managedbuild.tool.gnu.c.compiler",
        nature_filter=NatureFilter.BOTH,
    ),
    ToolKind.CPP_COMPILER: ToolSpec(
        binary="g++",
        prefixed=True,
        id_suffix="cc.compiler",
        description="C++ Compiler",
        superclass="cdt.managedbuild.tool.gnu.cpp.compiler",
        nature_filter=NatureFilter.CPP,
    ),
    ToolKind.C_LINKER: ToolSpec(
        binary="gcc",
        prefixed=True,
        id_suffix="c.linker",
        description="C Linker",
        superclass="cdt.managedbuild.tool.gnu.c.linker",
        nature_filter=NatureFilter.C,
    ),
    ToolKind.CPP_LINKER: ToolSpec(
        binary="g++",
        prefixed=True,
        id_suffix="cc.linker",
        description="C++ Linker",
        superclass="cdt.managedbuild.tool.gnu.cpp.linker",
        nature_filter=NatureFilter.CPP,
    ),
    ToolKind.PKG_CONFIG: ToolSpec(
        binary="pkg-config",
        prefixed=False,
        id_suffix="pkgconfig",
        description="Pkg config",
        superclass="org.eclipse.cdt.managedbuilder.pkgconfig.tool",
        nature_filter=NatureFilter.BOTH,
    ),
}

AUTOTOOLS_TOOLS: dict[ToolKind, ToolSpec] = {
    ToolKind.C_COMPILER: ToolSpec(
        binary="gcc",
        prefixed=True,
        id_suffix="autotools.c.compiler",
        description="C Compiler",
        superclass="org.eclipse.linuxtools.cdt.autotools.core.toolchain.tool.gcc",
        nature_filter=NatureFilter.BOTH,
    ),
    ToolKind.CPP_COMPILER: ToolSpec(
        binary="g++",
        prefixed=True,
        id_suffix="autotools.cc.compiler",
        description="C++ Compiler",
        superclass="org.eclipse.linuxtools.cdt.autotools.core.toolchain.tool.gpp",
        nature_filter=NatureFilter.CPP,
    ),
}

MANAGED_INPUTS: dict[ToolKind, InputSpec] = {
    ToolKind.C_COMPILER: InputSpec(
        id_suffix="c.input",
        superclass="cdt.managedbuild.tool.gnu.c.compiler.input",
        profile_suffix="ManagedMakePerProjectProfileC",
        spec_file_name="specs.c",
    ),
    ToolKind.CPP_COMPILER: InputSpec(
        id_suffix="cpp.input",
        superclass="cdt.managedbuild.tool.gnu.cpp.compiler.input",
        profile_suffix="ManagedMakePerProjectProfileCPP",
        spec_file_name="specs.cpp",
    ),
}

# Autotools compilers share the C input template regardless of language.
AUTOTOOLS_INPUT_SUPERCLASS = "cdt.managedbuild.tool.gnu.c.compiler.input"

# Order in which the managed toolchain lists its tools.
MANAGED_TOOL_ORDER: tuple[ToolKind, ...] = (
    ToolKind.ASSEMBLER,
    ToolKind.C_COMPILER,
    ToolKind.C_LINKER,
    ToolKind.CPP_COMPILER,
    ToolKind.CPP_LINKER,
    ToolKind.PKG_CONFIG,
)

CPP_KINDS = frozenset({ToolKind.CPP_COMPILER, ToolKind.CPP_LINKER})

MANAGED_ARTIFACTS: tuple[ArtifactKind, ...] = (
    ArtifactKind.EXECUTABLE,
    ArtifactKind.SHARED_LIB,
    ArtifactKind.STATIC_LIB,
)


def scanner_profile_suffix(architecture: str, kind: ToolKind) -> str:
    """Id suffix of the scanner profile for a compiler kind."""
    return f"{architecture}_{MANAGED_INPUTS[kind].profile_suffix}"
