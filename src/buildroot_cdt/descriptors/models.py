"""Typed descriptor tree for one toolchain installation.

These dataclasses describe *what* gets contributed to the host build system
(toolchains, tools, project types, scanner profiles) independently of how it
is written out. ``buildroot_cdt.documents`` renders them to XML; tests assert
directly on the tree.

All nodes are frozen so a ``BuildDefinition`` can be shared between the
assembler, the session report and the CLI without defensive copies.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from buildroot_cdt.discovery.models import ToolchainInstallation


# ---------------------------------------------------------------------------
# Tagged variants
# ---------------------------------------------------------------------------


class ToolKind(Enum):
    """The six tools a Buildroot toolchain contributes."""

    ASSEMBLER = "assembler"
    C_COMPILER = "c_compiler"
    CPP_COMPILER = "cc_compiler"
    C_LINKER = "c_linker"
    CPP_LINKER = "cc_linker"
    PKG_CONFIG = "pkg_config"


class NatureFilter(str, Enum):
    """Project natures a tool applies to."""

    C = "cnature"
    CPP = "ccnature"
    BOTH = "both"


class ArtifactKind(Enum):
    """Buildable artifact shapes; the value is the host's artefact-type suffix."""

    EXECUTABLE = "exe"
    SHARED_LIB = "sharedLib"
    STATIC_LIB = "staticLib"
    AUTOTOOLS = "autotools"


class ConfigurationKind(Enum):
    DEBUG = "debug"
    RELEASE = "release"
    DEFAULT = "default"


class ToolchainFlavor(Enum):
    MANAGED = "managed"
    AUTOTOOLS = "autotools"


# ---------------------------------------------------------------------------
# Toolchain members
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OptionCategory:
    id: str
    name: str


@dataclass(frozen=True)
class Option:
    """A string option shown in the toolchain or tool settings page.

    Attributes:
        id: Generated id.
        name: Label shown to the user.
        value: Default value.
        category: Owning ``OptionCategory`` id, if any.
        superclass: Host option this one specializes, if any.
    """

    id: str
    name: str
    value: str
    category: str | None = None
    superclass: str | None = None
    value_type: str = "string"
    resource_filter: str = "all"


@dataclass(frozen=True)
class TargetPlatform:
    id: str
    name: str
    binary_parser: str = "org.eclipse.cdt.core.GNU_ELF"
    arch_list: str = "all"
    os_list: str = "linux"


@dataclass(frozen=True)
class InputType:
    """Compiler input type; links a compiler to its scanner profile."""

    id: str
    superclass: str
    scanner_profile_id: str


@dataclass(frozen=True)
class ToolDescriptor:
    """One tool of a toolchain.

    Attributes:
        kind: Which of the six tools this is.
        id: Generated id.
        name: Display name.
        command: Absolute path of the binary.
        nature_filter: Project natures the tool applies to.
        superclass: Host tool template this tool specializes.
        input_type: Present on compilers only.
    """

    kind: ToolKind
    id: str
    name: str
    command: str
    nature_filter: NatureFilter
    superclass: str
    input_type: InputType | None = None


@dataclass(frozen=True)
class ConfigureTool:
    """The autotools ``configure`` step with its ``--host`` option."""

    id: str
    superclass: str
    host_option: Option


@dataclass(frozen=True)
class Builder:
    id: str
    name: str
    command: str = "make"
    superclass: str = "cdt.managedbuild.target.gnu.builder"


@dataclass(frozen=True)
class Toolchain:
    """A toolchain definition and everything nested inside it.

    The managed flavour carries a target platform, a builder and up to six
    tools; the autotools flavour carries a configure tool and two compilers.
    """

    flavor: ToolchainFlavor
    id: str
    name: str
    option_category: OptionCategory
    options: tuple[Option, ...]
    tools: tuple[ToolDescriptor, ...]
    superclass: str | None = None
    target_platform: TargetPlatform | None = None
    configure_tool: ConfigureTool | None = None
    builder: Builder | None = None
    environment_supplier: str | None = None

    def tool(self, kind: ToolKind) -> ToolDescriptor | None:
        """Return the tool of the given kind, or None when it was not emitted."""
        for tool in self.tools:
            if tool.kind is kind:
                return tool
        return None


# ---------------------------------------------------------------------------
# Project types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolchainRef:
    """Per-configuration reference to a toolchain definition."""

    id: str
    superclass: str


@dataclass(frozen=True)
class Configuration:
    kind: ConfigurationKind
    id: str
    name: str
    parent: str
    build_properties: str
    toolchain_ref: ToolchainRef
    clean_command: str | None = None


@dataclass(frozen=True)
class ProjectType:
    artifact: ArtifactKind
    id: str
    build_artefact_type: str
    configurations: tuple[Configuration, ...]
    environment_supplier: str | None = None


# ---------------------------------------------------------------------------
# Scanner discovery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScannerDiscoveryProfile:
    """How to ask a compiler for its built-in include paths and macros.

    Attributes:
        id: Generated profile id, referenced by the compiler input type.
        name: Display name, one per compiler kind.
        compiler_kind: ``ToolKind.C_COMPILER`` or ``ToolKind.CPP_COMPILER``.
        spec_file_name: ``specs.c`` or ``specs.cpp``.
        command: Absolute compiler path.
        state_dir: Directory holding the spec file at probe time.
    """

    id: str
    name: str
    compiler_kind: ToolKind
    spec_file_name: str
    command: str
    state_dir: str

    @property
    def arguments(self) -> str:
        """Arguments passed to the compiler when probing built-ins."""
        return f"-E -P -v -dD {self.state_dir}/{self.spec_file_name}"


# ---------------------------------------------------------------------------
# BuildDefinition: everything contributed for one installation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BuildDefinition:
    """The descriptor tree for one installation.

    ``project_types`` holds the executable, shared-library and static-library
    types in that order. ``scanner_profiles`` holds one profile per compiler
    present in the managed toolchain.
    """

    installation: ToolchainInstallation
    toolchain: Toolchain
    project_types: tuple[ProjectType, ...]
    autotools_toolchain: Toolchain
    autotools_project_type: ProjectType
    scanner_profiles: tuple[ScannerDiscoveryProfile, ...] = field(default=())

    @property
    def has_cpp(self) -> bool:
        return self.toolchain.tool(ToolKind.CPP_COMPILER) is not None

    def scanner_profile(self, kind: ToolKind) -> ScannerDiscoveryProfile | None:
        for profile in self.scanner_profiles:
            if profile.compiler_kind is kind:
                return profile
        return None

    def iter_ids(self) -> Iterator[str]:
        """Yield every id generated for this installation.

        References (superclasses, toolchain-ref targets, scanner profile
        references) are not yielded; only the ids elements declare.
        """
        for chain in (self.toolchain, self.autotools_toolchain):
            yield from _toolchain_ids(chain)
        for project_type in (*self.project_types, self.autotools_project_type):
            yield project_type.id
            for config in project_type.configurations:
                yield config.id
                yield config.toolchain_ref.id
        for profile in self.scanner_profiles:
            yield profile.id


def _toolchain_ids(chain: Toolchain) -> Iterator[str]:
    yield chain.id
    yield chain.option_category.id
    for option in chain.options:
        yield option.id
    if chain.target_platform is not None:
        yield chain.target_platform.id
    if chain.configure_tool is not None:
        yield chain.configure_tool.id
        yield chain.configure_tool.host_option.id
    for tool in chain.tools:
        yield tool.id
        if tool.input_type is not None:
            yield tool.input_type.id
    if chain.builder is not None:
        yield chain.builder.id
