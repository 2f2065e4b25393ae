"""DescriptorBuilder: compose the build-definition tree for one installation.

Build order is fixed, and later elements reference earlier ones by id:

    1. Managed toolchain (options, platform, tools, builder).
    2. Executable, shared-library and static-library project types, each with
       a debug and a release configuration pointing at the toolchain.
    3. Autotools toolchain (options, configure, C and C++ compilers).
    4. Autotools project type with one default configuration.

The C++ compiler and linker of the managed toolchain are emitted only when
the C++ compiler is present. The autotools toolchain always declares both
compilers and does not probe again.
"""

from __future__ import annotations

import logging

from buildroot_cdt.descriptors.identifiers import (
    autotools_toolchain_base_id,
    identifier,
    tool_name,
    toolchain_base_id,
)
from buildroot_cdt.descriptors.kinds import (
    AUTOTOOLS_INPUT_SUPERCLASS,
    AUTOTOOLS_TOOLS,
    CPP_KINDS,
    MANAGED_ARTIFACTS,
    MANAGED_INPUTS,
    MANAGED_TOOL_ORDER,
    MANAGED_TOOLS,
    scanner_profile_suffix,
)
from buildroot_cdt.descriptors.models import (
    ArtifactKind,
    BuildDefinition,
    Builder,
    Configuration,
    ConfigurationKind,
    ConfigureTool,
    InputType,
    Option,
    OptionCategory,
    ProjectType,
    ScannerDiscoveryProfile,
    TargetPlatform,
    Toolchain,
    ToolchainFlavor,
    ToolchainRef,
    ToolDescriptor,
    ToolKind,
)
from buildroot_cdt.discovery.models import ToolchainInstallation
from buildroot_cdt.discovery.probe import CPP_COMPILER, CapabilityProbe, FilesystemProbe

logger = logging.getLogger(__name__)

# Host-side classes referenced by name; they live in the host plug-in.
ENVIRONMENT_SUPPLIER = "org.buildroot.cdt.toolchain.BuildrootEnvironmentVariableSupplier"
PROJECT_ENVIRONMENT_SUPPLIER = (
    "org.buildroot.cdt.toolchain.managedbuilder.toolchain.BuildrootEnvironmentVariableSupplier"
)
AUTOTOOLS_TOOLCHAIN_SUPERCLASS = "org.eclipse.linuxtools.cdt.autotools.core.toolChain"
CONFIGURE_TOOL_SUPERCLASS = "org.eclipse.linuxtools.cdt.autotools.core.tool.configure"
CONFIGURE_HOST_SUPERCLASS = "org.eclipse.linuxtools.cdt.autotools.core.option.configure.host"

# Resolved by the host when the scanner provider runs.
DEFAULT_STATE_DIR = "${plugin_state_location}"

_MANAGED_CONFIGURATIONS = (ConfigurationKind.DEBUG, ConfigurationKind.RELEASE)


class DescriptorBuilder:
    """Builds a ``BuildDefinition`` per installation.

    Usage::

        builder = DescriptorBuilder()
        definition = builder.build(installation)
        print(definition.toolchain.id)
    """

    def __init__(
        self,
        probe: CapabilityProbe | None = None,
        state_dir: str = DEFAULT_STATE_DIR,
    ) -> None:
        self._probe = probe or FilesystemProbe()
        self._state_dir = state_dir

    def build(
        self,
        installation: ToolchainInstallation,
        has_cpp: bool | None = None,
    ) -> BuildDefinition:
        """Compose the full tree for ``installation``.

        Args:
            installation: The toolchain to describe. Its C compiler is
                assumed present; the session gates on that.
            has_cpp: Override the C++ probe (``None`` probes the filesystem).
        """
        if has_cpp is None:
            has_cpp = self._probe.exists(
                installation.install_path, installation.tool_prefix, CPP_COMPILER
            )
        if not has_cpp:
            logger.debug("No C++ compiler for %s, omitting C++ tools", installation.install_path)

        toolchain, profiles = self._managed_toolchain(installation, has_cpp)
        project_types = tuple(
            self._project_type(installation, artifact) for artifact in MANAGED_ARTIFACTS
        )
        return BuildDefinition(
            installation=installation,
            toolchain=toolchain,
            project_types=project_types,
            autotools_toolchain=self._autotools_toolchain(installation),
            autotools_project_type=self._autotools_project_type(installation),
            scanner_profiles=profiles,
        )

    # -- Managed toolchain ---------------------------------------------------

    def _managed_toolchain(
        self, inst: ToolchainInstallation, has_cpp: bool,
    ) -> tuple[Toolchain, tuple[ScannerDiscoveryProfile, ...]]:
        chain_id = toolchain_base_id(inst.install_path)
        category, options = _generic_options(inst, chain_id)

        tools: list[ToolDescriptor] = []
        profiles: list[ScannerDiscoveryProfile] = []
        for kind in MANAGED_TOOL_ORDER:
            if kind in CPP_KINDS and not has_cpp:
                continue
            tool = self._managed_tool(inst, kind)
            tools.append(tool)
            if tool.input_type is not None:
                profiles.append(self._scanner_profile(inst, kind, tool))

        toolchain = Toolchain(
            flavor=ToolchainFlavor.MANAGED,
            id=chain_id,
            name=tool_name(inst.architecture, inst.install_path),
            option_category=category,
            environment_supplier=ENVIRONMENT_SUPPLIER,
            options=options,
            tools=tuple(tools),
            target_platform=TargetPlatform(
                id=identifier(inst.install_path, "platform.base"),
                name=tool_name(inst.architecture, inst.install_path, "Platform"),
            ),
            builder=Builder(
                id=identifier(inst.install_path, "builder"),
                name=tool_name(inst.architecture, inst.install_path, "builder"),
            ),
        )
        return toolchain, tuple(profiles)

    def _managed_tool(self, inst: ToolchainInstallation, kind: ToolKind) -> ToolDescriptor:
        spec = MANAGED_TOOLS[kind]
        input_type = None
        input_spec = MANAGED_INPUTS.get(kind)
        if input_spec is not None:
            input_type = InputType(
                id=identifier(inst.install_path, input_spec.id_suffix),
                superclass=input_spec.superclass,
                scanner_profile_id=_scanner_profile_id(inst, kind),
            )
        return ToolDescriptor(
            kind=kind,
            id=identifier(inst.install_path, spec.id_suffix),
            name=tool_name(inst.architecture, inst.install_path, spec.description),
            command=inst.tool_path(spec.binary, prefixed=spec.prefixed),
            nature_filter=spec.nature_filter,
            superclass=spec.superclass,
            input_type=input_type,
        )

    def _scanner_profile(
        self, inst: ToolchainInstallation, kind: ToolKind, compiler: ToolDescriptor,
    ) -> ScannerDiscoveryProfile:
        return ScannerDiscoveryProfile(
            id=_scanner_profile_id(inst, kind),
            name=f"Buildroot {MANAGED_INPUTS[kind].profile_suffix}",
            compiler_kind=kind,
            spec_file_name=MANAGED_INPUTS[kind].spec_file_name,
            command=compiler.command,
            state_dir=self._state_dir,
        )

    # -- Project types -------------------------------------------------------

    def _project_type(self, inst: ToolchainInstallation, artifact: ArtifactKind) -> ProjectType:
        chain_id = toolchain_base_id(inst.install_path)
        configurations = []
        for kind in _MANAGED_CONFIGURATIONS:
            config_suffix = f"{artifact.value}.{kind.value}"
            configurations.append(Configuration(
                kind=kind,
                id=identifier(inst.install_path, config_suffix),
                name=kind.value,
                parent="cdt.managedbuild.config.gnu.base",
                build_properties=(
                    "org.eclipse.cdt.build.core.buildType="
                    f"org.eclipse.cdt.build.core.buildType.{kind.value}"
                ),
                clean_command="rm -rf",
                toolchain_ref=ToolchainRef(
                    id=identifier(inst.install_path, f"{config_suffix}.toolchain"),
                    superclass=chain_id,
                ),
            ))
        return ProjectType(
            artifact=artifact,
            id=identifier(inst.install_path, artifact.value),
            build_artefact_type=f"org.eclipse.cdt.build.core.buildArtefactType.{artifact.value}",
            configurations=tuple(configurations),
            environment_supplier=PROJECT_ENVIRONMENT_SUPPLIER,
        )

    # -- Autotools -----------------------------------------------------------

    def _autotools_toolchain(self, inst: ToolchainInstallation) -> Toolchain:
        chain_id = autotools_toolchain_base_id(inst.install_path)
        category, options = _generic_options(inst, chain_id)
        configure = ConfigureTool(
            id=identifier(inst.install_path, "autotools.tool.configure"),
            superclass=CONFIGURE_TOOL_SUPERCLASS,
            host_option=Option(
                id=identifier(inst.install_path, "autotools.toolChain.option.host"),
                name="Host",
                value=_host_triplet(inst.tool_prefix),
                superclass=CONFIGURE_HOST_SUPERCLASS,
            ),
        )
        tools = tuple(
            self._autotools_tool(inst, kind)
            for kind in (ToolKind.C_COMPILER, ToolKind.CPP_COMPILER)
        )
        return Toolchain(
            flavor=ToolchainFlavor.AUTOTOOLS,
            id=chain_id,
            name=f"Autotools {tool_name(inst.architecture, inst.install_path)}",
            option_category=category,
            environment_supplier=ENVIRONMENT_SUPPLIER,
            options=options,
            tools=tools,
            superclass=AUTOTOOLS_TOOLCHAIN_SUPERCLASS,
            configure_tool=configure,
        )

    def _autotools_tool(self, inst: ToolchainInstallation, kind: ToolKind) -> ToolDescriptor:
        spec = AUTOTOOLS_TOOLS[kind]
        return ToolDescriptor(
            kind=kind,
            id=identifier(inst.install_path, spec.id_suffix),
            name=f"Autotools {tool_name(inst.architecture, inst.install_path, spec.description)}",
            command=inst.tool_path(spec.binary, prefixed=spec.prefixed),
            nature_filter=spec.nature_filter,
            superclass=spec.superclass,
            input_type=InputType(
                id=identifier(inst.install_path, f"{kind.value}.input"),
                superclass=AUTOTOOLS_INPUT_SUPERCLASS,
                scanner_profile_id=_scanner_profile_id(inst, kind),
            ),
        )

    def _autotools_project_type(self, inst: ToolchainInstallation) -> ProjectType:
        config_suffix = f"{ArtifactKind.AUTOTOOLS.value}.{ConfigurationKind.DEFAULT.value}"
        configuration = Configuration(
            kind=ConfigurationKind.DEFAULT,
            id=identifier(inst.install_path, config_suffix),
            name="Configuration",
            parent="org.eclipse.linuxtools.cdt.autotools.core.configuration.build",
            build_properties="org.eclipse.linuxtools.cdt.autotools.core.buildType.default",
            toolchain_ref=ToolchainRef(
                id=identifier(inst.install_path, f"{config_suffix}.toolchain"),
                superclass=autotools_toolchain_base_id(inst.install_path),
            ),
        )
        return ProjectType(
            artifact=ArtifactKind.AUTOTOOLS,
            id=identifier(inst.install_path, ArtifactKind.AUTOTOOLS.value),
            build_artefact_type=(
                "org.eclipse.linuxtools.cdt.autotools.core.buildArtefactType.autotools"
            ),
            configurations=(configuration,),
        )


def _generic_options(
    inst: ToolchainInstallation, chain_id: str,
) -> tuple[OptionCategory, tuple[Option, ...]]:
    """Option category plus the Path and Prefix options of a toolchain."""
    category = OptionCategory(id=f"{chain_id}.optionCategory", name="Generic Buildroot Settings")
    options = (
        Option(
            id=f"{chain_id}.option.path",
            name="Path",
            value=inst.bin_dir,
            category=category.id,
        ),
        Option(
            id=f"{chain_id}.option.prefix",
            name="Prefix",
            value=inst.tool_prefix,
            category=category.id,
        ),
    )
    return category, options


def _scanner_profile_id(inst: ToolchainInstallation, kind: ToolKind) -> str:
    return identifier(inst.install_path, scanner_profile_suffix(inst.architecture, kind))


def _host_triplet(prefix: str) -> str:
    """``arm-linux-`` becomes ``arm-linux``, the value passed to ``--host``."""
    return prefix[:-1] if prefix.endswith("-") else prefix
