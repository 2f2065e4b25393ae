"""DocumentAssembler: render descriptor trees as registration documents.

Two document shapes are produced, both as self-contained plug-in XML:

* the build-definitions document, holding the managed toolchain, its three
  project types, the autotools toolchain and the autotools project type as
  siblings under one ``extension`` element;
* one scanner-discovery document per compiler profile, each with its own
  ``extension`` element.

Design Decision: Pure Python Implementation
-------------------------------------------
Documents are built with ``xml.etree.ElementTree`` from the typed tree in
``buildroot_cdt.descriptors.models``, so attribute escaping is handled by the
serializer rather than by string concatenation.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from buildroot_cdt.descriptors.models import (
    BuildDefinition,
    ConfigureTool,
    Configuration,
    Option,
    ProjectType,
    ScannerDiscoveryProfile,
    Toolchain,
    ToolDescriptor,
)
from buildroot_cdt.documents.models import DocumentKind, RegistrationDocument

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
ECLIPSE_PI = '<?eclipse version="3.4"?>'

BUILD_DEFINITIONS_POINT = "org.eclipse.cdt.managedbuilder.core.buildDefinitions"
SCANNER_PROFILE_POINT = "org.eclipse.cdt.make.core.ScannerConfigurationDiscoveryProfile"

COMMAND_LINE_GENERATOR = (
    "org.eclipse.cdt.managedbuilder.internal.core.ManagedCommandLineGenerator"
)
SCANNER_INFO_COLLECTOR = "org.buildroot.cdt.toolchain.DefaultGCCScannerInfoCollector"
BUILD_OUTPUT_PARSER = "org.buildroot.cdt.toolchain.ManagedGCCScannerInfoConsoleParser"
SPECS_RUN_PROVIDER = "org.eclipse.cdt.make.internal.core.scannerconfig2.GCCSpecsRunSIProvider"
SPECS_CONSOLE_PARSER = (
    "org.eclipse.cdt.make.internal.core.scannerconfig.gnu.GCCSpecsConsoleParser"
)


def _attrs(**values: str | None) -> dict[str, str]:
    """Drop unset attributes; ElementTree rejects ``None`` values."""
    return {key: value for key, value in values.items() if value is not None}


class DocumentAssembler:
    """Serialize ``BuildDefinition`` trees into registration documents.

    Usage::

        assembler = DocumentAssembler()
        for document in assembler.documents_for(definition):
            sink.register(document)
    """

    def __init__(self, indent: str | None = "  ") -> None:
        self._indent = indent

    # -- Public API ----------------------------------------------------------

    def documents_for(self, definition: BuildDefinition) -> list[RegistrationDocument]:
        """All documents for one installation, in registration order.

        Scanner profiles come first so that the compiler input types of the
        build-definitions document resolve when it is activated.
        """
        documents = [self.scanner_profile_document(p) for p in definition.scanner_profiles]
        documents.append(self.build_definition_document(definition))
        return documents

    def build_definition_document(self, definition: BuildDefinition) -> RegistrationDocument:
        plugin, extension = _plugin(point=BUILD_DEFINITIONS_POINT)
        extension.append(self._toolchain(definition.toolchain))
        for project_type in definition.project_types:
            extension.append(self._project_type(project_type))
        extension.append(self._toolchain(definition.autotools_toolchain))
        extension.append(self._project_type(definition.autotools_project_type))
        return RegistrationDocument(
            kind=DocumentKind.BUILD_DEFINITIONS,
            id=definition.toolchain.id,
            content=self._render(plugin),
        )

    def scanner_profile_document(self, profile: ScannerDiscoveryProfile) -> RegistrationDocument:
        plugin, extension = _plugin(
            point=SCANNER_PROFILE_POINT,
            id=profile.id,
            name=profile.name,
        )
        ET.SubElement(
            extension, "scannerInfoCollector",
            _attrs(**{"class": SCANNER_INFO_COLLECTOR, "scope": "project"}),
        )
        output = ET.SubElement(extension, "buildOutputProvider")
        ET.SubElement(output, "open")
        ET.SubElement(output, "scannerInfoConsoleParser", {"class": BUILD_OUTPUT_PARSER})
        provider = ET.SubElement(extension, "scannerInfoProvider", {"providerId": "specsFile"})
        ET.SubElement(provider, "run", _attrs(**{
            "arguments": profile.arguments,
            "class": SPECS_RUN_PROVIDER,
            "command": profile.command,
        }))
        ET.SubElement(provider, "scannerInfoConsoleParser", {"class": SPECS_CONSOLE_PARSER})
        return RegistrationDocument(
            kind=DocumentKind.SCANNER_PROFILE,
            id=profile.id,
            content=self._render(plugin),
        )

    # -- Element builders ----------------------------------------------------

    def _toolchain(self, chain: Toolchain) -> ET.Element:
        element = ET.Element("toolChain", _attrs(
            archList="all",
            configurationEnvironmentSupplier=chain.environment_supplier,
            id=chain.id,
            isAbstract="false",
            name=chain.name,
            osList="linux",
            superClass=chain.superclass,
        ))
        ET.SubElement(element, "optionCategory", _attrs(
            id=chain.option_category.id, name=chain.option_category.name,
        ))
        for option in chain.options:
            element.append(_option(option))
        if chain.target_platform is not None:
            platform = chain.target_platform
            ET.SubElement(element, "targetPlatform", _attrs(
                archList=platform.arch_list,
                binaryParser=platform.binary_parser,
                id=platform.id,
                isAbstract="false",
                name=platform.name,
                osList=platform.os_list,
            ))
        if chain.configure_tool is not None:
            element.append(_configure_tool(chain.configure_tool))
        for tool in chain.tools:
            element.append(_tool(tool))
        if chain.builder is not None:
            builder = chain.builder
            ET.SubElement(element, "builder", _attrs(
                command=builder.command,
                id=builder.id,
                isAbstract="false",
                name=builder.name,
                isVariableCaseSensitive="false",
                superClass=builder.superclass,
            ))
        return element

    def _project_type(self, project_type: ProjectType) -> ET.Element:
        element = ET.Element("projectType", _attrs(
            buildArtefactType=project_type.build_artefact_type,
            id=project_type.id,
            isAbstract="false",
            isTest="false",
            projectEnvironmentSupplier=project_type.environment_supplier,
        ))
        for configuration in project_type.configurations:
            element.append(_configuration(configuration))
        return element

    # -- Rendering -----------------------------------------------------------

    def _render(self, plugin: ET.Element) -> str:
        if self._indent is not None:
            ET.indent(plugin, space=self._indent)
        body = ET.tostring(plugin, encoding="unicode")
        separator = "\n" if self._indent is not None else ""
        return separator.join((XML_DECLARATION, ECLIPSE_PI, body)) + separator


def _plugin(**extension_attrs: str) -> tuple[ET.Element, ET.Element]:
    plugin = ET.Element("plugin")
    # ``point`` goes last to match the host's own manifests.
    point = extension_attrs.pop("point")
    extension = ET.SubElement(plugin, "extension", {**extension_attrs, "point": point})
    return plugin, extension


def _option(option: Option) -> ET.Element:
    return ET.Element("option", _attrs(
        category=option.category,
        id=option.id,
        isAbstract="false",
        name=option.name,
        resourceFilter=option.resource_filter,
        superClass=option.superclass,
        value=option.value,
        valueType=option.value_type,
    ))


def _configure_tool(tool: ConfigureTool) -> ET.Element:
    element = ET.Element("tool", _attrs(
        id=tool.id, isAbstract="false", superClass=tool.superclass,
    ))
    host = tool.host_option
    ET.SubElement(element, "option", _attrs(
        defaultValue=host.value,
        id=host.id,
        isAbstract="false",
        name=host.name,
        resourceFilter=host.resource_filter,
        superClass=host.superclass,
        valueType=host.value_type,
    ))
    return element


def _tool(tool: ToolDescriptor) -> ET.Element:
    element = ET.Element("tool", _attrs(
        command=tool.command,
        commandLineGenerator=COMMAND_LINE_GENERATOR,
        id=tool.id,
        isAbstract="false",
        name=tool.name,
        natureFilter=tool.nature_filter.value,
        superClass=tool.superclass,
    ))
    if tool.input_type is not None:
        ET.SubElement(element, "inputType", _attrs(
            superClass=tool.input_type.superclass,
            id=tool.input_type.id,
            scannerConfigDiscoveryProfileId=tool.input_type.scanner_profile_id,
        ))
    return element


def _configuration(configuration: Configuration) -> ET.Element:
    element = ET.Element("configuration", _attrs(
        buildProperties=configuration.build_properties,
        cleanCommand=configuration.clean_command,
        id=configuration.id,
        name=configuration.name,
        parent=configuration.parent,
    ))
    ET.SubElement(element, "toolChain", _attrs(
        id=configuration.toolchain_ref.id,
        superClass=configuration.toolchain_ref.superclass,
    ))
    return element


