"""Tests for DocumentAssembler.

Verifies:
    - Registration order (scanner profiles before build definitions).
    - Build-definitions document structure and attribute values.
    - Scanner profile documents carry the probe command and arguments.
    - No C++ ids leak into the managed part when C++ is absent.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from buildroot_cdt.descriptors.builder import DescriptorBuilder
from buildroot_cdt.descriptors.identifiers import identifier
from buildroot_cdt.descriptors.models import BuildDefinition, ToolKind
from buildroot_cdt.discovery.models import ToolchainInstallation
from buildroot_cdt.documents.assembler import (
    BUILD_DEFINITIONS_POINT,
    SCANNER_PROFILE_POINT,
    DocumentAssembler,
)
from buildroot_cdt.documents.models import DocumentKind, RegistrationDocument

from tests.helpers import FakeProbe

PATH = "/opt/br/output"


@pytest.fixture
def assembler() -> DocumentAssembler:
    return DocumentAssembler()


def _definition(installation: ToolchainInstallation, has_cpp: bool) -> BuildDefinition:
    return DescriptorBuilder(FakeProbe()).build(installation, has_cpp=has_cpp)


def _extension(document: RegistrationDocument) -> ET.Element:
    plugin = document.parse()
    assert plugin.tag == "plugin"
    (extension,) = plugin
    return extension


# ---------------------------------------------------------------------------
# Ordering and headers
# ---------------------------------------------------------------------------


class TestDocumentsFor:
    """Documents come out in registration order."""

    def test_scanner_profiles_first(
        self, assembler: DocumentAssembler, arm_installation: ToolchainInstallation,
    ) -> None:
        documents = assembler.documents_for(_definition(arm_installation, True))
        assert [d.kind for d in documents] == [
            DocumentKind.SCANNER_PROFILE,
            DocumentKind.SCANNER_PROFILE,
            DocumentKind.BUILD_DEFINITIONS,
        ]
        assert documents[0].id.endswith("ARM_ManagedMakePerProjectProfileC")
        assert documents[1].id.endswith("ARM_ManagedMakePerProjectProfileCPP")

    def test_c_only_has_two_documents(
        self, assembler: DocumentAssembler, arm_installation: ToolchainInstallation,
    ) -> None:
        documents = assembler.documents_for(_definition(arm_installation, False))
        assert len(documents) == 2

    def test_document_header(
        self, assembler: DocumentAssembler, arm_installation: ToolchainInstallation,
    ) -> None:
        for document in assembler.documents_for(_definition(arm_installation, True)):
            lines = document.content.splitlines()
            assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
            assert lines[1] == '<?eclipse version="3.4"?>'

    def test_compact_rendering(self, arm_installation: ToolchainInstallation) -> None:
        document = DocumentAssembler(indent=None).build_definition_document(
            _definition(arm_installation, True)
        )
        assert "\n" not in document.content
        assert document.parse().tag == "plugin"


# ---------------------------------------------------------------------------
# Build-definitions document
# ---------------------------------------------------------------------------


class TestBuildDefinitionDocument:
    """Structure of the main registration document."""

    @pytest.fixture
    def extension(
        self, assembler: DocumentAssembler, arm_installation: ToolchainInstallation,
    ) -> ET.Element:
        document = assembler.build_definition_document(_definition(arm_installation, True))
        assert document.id == identifier(PATH, "toolchain.base")
        return _extension(document)

    def test_extension_point(self, extension: ET.Element) -> None:
        assert extension.get("point") == BUILD_DEFINITIONS_POINT

    def test_sibling_order(self, extension: ET.Element) -> None:
        assert [child.tag for child in extension] == [
            "toolChain", "projectType", "projectType", "projectType",
            "toolChain", "projectType",
        ]

    def test_managed_toolchain_attributes(self, extension: ET.Element) -> None:
        chain = extension[0]
        assert chain.get("id") == identifier(PATH, "toolchain.base")
        assert chain.get("name") == f"Buildroot ARM - {PATH}"
        assert chain.get("isAbstract") == "false"
        assert chain.get("superClass") is None
        assert chain.get("configurationEnvironmentSupplier")

    def test_generic_options(self, extension: ET.Element) -> None:
        chain = extension[0]
        options = {o.get("name"): o for o in chain.findall("option")}
        assert options["Path"].get("value") == f"{PATH}/host/usr/bin"
        assert options["Prefix"].get("value") == "arm-linux-"
        category = chain.find("optionCategory")
        assert options["Path"].get("category") == category.get("id")

    def test_tool_commands(self, extension: ET.Element) -> None:
        tools = {t.get("id"): t for t in extension[0].findall("tool")}
        compiler = tools[identifier(PATH, "c.compiler")]
        assert compiler.get("command") == f"{PATH}/host/usr/bin/arm-linux-gcc"
        assert compiler.get("natureFilter") == "both"
        pkg_config = tools[identifier(PATH, "pkgconfig")]
        assert pkg_config.get("command") == f"{PATH}/host/usr/bin/pkg-config"

    def test_input_type_references_scanner_profile(self, extension: ET.Element) -> None:
        input_type = extension[0].find("tool/inputType")
        assert input_type.get("id") == identifier(PATH, "c.input")
        assert input_type.get("scannerConfigDiscoveryProfileId") == identifier(
            PATH, "ARM_ManagedMakePerProjectProfileC",
        )

    def test_builder_and_platform(self, extension: ET.Element) -> None:
        chain = extension[0]
        assert chain.find("builder").get("command") == "make"
        assert chain.find("targetPlatform").get("binaryParser") == "org.eclipse.cdt.core.GNU_ELF"

    def test_configurations(self, extension: ET.Element) -> None:
        exe = extension[1]
        assert exe.get("buildArtefactType") == "org.eclipse.cdt.build.core.buildArtefactType.exe"
        configs = exe.findall("configuration")
        assert [c.get("id") for c in configs] == [
            identifier(PATH, "exe.debug"), identifier(PATH, "exe.release"),
        ]
        ref = configs[0].find("toolChain")
        assert ref.get("superClass") == identifier(PATH, "toolchain.base")
        assert ref.get("id") == identifier(PATH, "exe.debug.toolchain")
        assert configs[0].get("cleanCommand") == "rm -rf"

    def test_autotools_toolchain(self, extension: ET.Element) -> None:
        chain = extension[4]
        assert chain.get("id") == identifier(PATH, "autotools.toolchain.base")
        assert chain.get("superClass") == "org.eclipse.linuxtools.cdt.autotools.core.toolChain"
        configure, *compilers = chain.findall("tool")
        host = configure.find("option")
        assert host.get("defaultValue") == "arm-linux"
        assert host.get("value") is None
        assert [c.get("id") for c in compilers] == [
            identifier(PATH, "autotools.c.compiler"),
            identifier(PATH, "autotools.cc.compiler"),
        ]

    def test_autotools_project_type(self, extension: ET.Element) -> None:
        project_type = extension[5]
        (config,) = project_type.findall("configuration")
        assert config.find("toolChain").get("superClass") == identifier(
            PATH, "autotools.toolchain.base",
        )

    def test_declared_ids_unique(
        self, assembler: DocumentAssembler, arm_installation: ToolchainInstallation,
    ) -> None:
        document = assembler.build_definition_document(_definition(arm_installation, True))
        ids = document.declared_ids()
        assert len(ids) == len(set(ids))


class TestWithoutCpp:
    """The managed part drops C++; the autotools part keeps it."""

    def test_no_cpp_ids_in_managed_toolchain(
        self, assembler: DocumentAssembler, arm_installation: ToolchainInstallation,
    ) -> None:
        document = assembler.build_definition_document(_definition(arm_installation, False))
        managed = _extension(document)[0]
        text = ET.tostring(managed, encoding="unicode")
        assert identifier(PATH, "cc.compiler") not in text
        assert identifier(PATH, "cc.linker") not in text
        assert "ManagedMakePerProjectProfileCPP" not in text

    def test_autotools_cpp_still_references_profile(
        self, assembler: DocumentAssembler, arm_installation: ToolchainInstallation,
    ) -> None:
        """The autotools C++ input references a profile nobody registered."""
        document = assembler.build_definition_document(_definition(arm_installation, False))
        autotools = _extension(document)[4]
        refs = [i.get("scannerConfigDiscoveryProfileId") for i in autotools.iter("inputType")]
        assert identifier(PATH, "ARM_ManagedMakePerProjectProfileCPP") in refs


# ---------------------------------------------------------------------------
# Scanner profile documents
# ---------------------------------------------------------------------------


class TestScannerProfileDocument:
    """One extension per compiler profile."""

    @pytest.fixture
    def definition(self, arm_installation: ToolchainInstallation) -> BuildDefinition:
        return _definition(arm_installation, True)

    def test_extension_attributes(
        self, assembler: DocumentAssembler, definition: BuildDefinition,
    ) -> None:
        profile = definition.scanner_profile(ToolKind.C_COMPILER)
        extension = _extension(assembler.scanner_profile_document(profile))
        assert extension.get("point") == SCANNER_PROFILE_POINT
        assert extension.get("id") == profile.id
        assert extension.get("name")

    def test_run_element(
        self, assembler: DocumentAssembler, definition: BuildDefinition,
    ) -> None:
        profile = definition.scanner_profile(ToolKind.CPP_COMPILER)
        extension = _extension(assembler.scanner_profile_document(profile))
        run = extension.find("scannerInfoProvider/run")
        assert run.get("command") == f"{PATH}/host/usr/bin/arm-linux-g++"
        assert run.get("arguments") == "-E -P -v -dD ${plugin_state_location}/specs.cpp"
        assert extension.find("scannerInfoProvider").get("providerId") == "specsFile"

    def test_profile_name_per_compiler(
        self, assembler: DocumentAssembler, definition: BuildDefinition,
    ) -> None:
        names = [
            _extension(assembler.scanner_profile_document(p)).get("name")
            for p in definition.scanner_profiles
        ]
        assert names == [
            "Buildroot ManagedMakePerProjectProfileC",
            "Buildroot ManagedMakePerProjectProfileCPP",
        ]

    def test_collector_and_output_parser(
        self, assembler: DocumentAssembler, definition: BuildDefinition,
    ) -> None:
        profile = definition.scanner_profile(ToolKind.C_COMPILER)
        extension = _extension(assembler.scanner_profile_document(profile))
        assert extension.find("scannerInfoCollector").get("scope") == "project"
        output = extension.find("buildOutputProvider")
        assert output.find("open") is not None
        assert output.find("scannerInfoConsoleParser") is not None

    def test_attribute_escaping(self, assembler: DocumentAssembler) -> None:
        inst = ToolchainInstallation('/opt/a&b "x"', "arm-linux-", "ARM")
        definition = _definition(inst, False)
        document = assembler.build_definition_document(definition)
        chain = _extension(document)[0]
        assert chain.get("name") == 'Buildroot ARM - /opt/a&b "x"'
