"""ToolchainSession: one startup registration pass.

For every installation listed in the registry file:

    1. Skip it unless its C compiler is present.
    2. Build its descriptor tree (C++ branch only if g++ is present) and
       skip it if any generated id is already registered in the session.
    3. Assemble the scanner-profile documents and the build-definitions
       document and submit them to the sink. If the sink rejects one,
       the documents it already accepted are withdrawn.
    4. Record its debugger configuration and hand it to the launch
       configurator, if one is set.

Nothing raises out of ``start()``: a missing registry file, a malformed line
or a sink failure is logged and recorded on the ``ScanReport``. Under the
``abort`` policy a malformed line stops the scan; installations before it
stay registered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from buildroot_cdt.descriptors.builder import DescriptorBuilder
from buildroot_cdt.descriptors.models import BuildDefinition
from buildroot_cdt.discovery.ingest import iter_installations
from buildroot_cdt.discovery.models import ToolchainInstallation
from buildroot_cdt.discovery.probe import C_COMPILER, CapabilityProbe, FilesystemProbe
from buildroot_cdt.documents.assembler import DocumentAssembler
from buildroot_cdt.documents.models import RegistrationDocument
from buildroot_cdt.exceptions import (
    MalformedConfigLineError,
    MissingConfigFileError,
    RegistrationError,
)
from buildroot_cdt.registry.debugger import DebuggerConfigRegistry
from buildroot_cdt.registry.sink import RegistrationSink
from buildroot_cdt.settings import Settings

logger = logging.getLogger(__name__)


class LaunchConfigurator(Protocol):
    """Creates debug launch configurations for a registered toolchain."""

    def create(
        self, installation: ToolchainInstallation, debuggers: DebuggerConfigRegistry,
    ) -> None: ...


@dataclass(frozen=True)
class SkippedInstallation:
    installation: ToolchainInstallation
    reason: str


@dataclass
class ScanReport:
    """Outcome of one registration pass.

    Attributes:
        registered: Definitions whose documents were all accepted by the sink.
        skipped: Installations left out, with the reason.
        errors: Error messages for failures that were logged.
        documents: Number of documents left registered in the sink.
    """

    registered: list[BuildDefinition] = field(default_factory=list)
    skipped: list[SkippedInstallation] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    documents: int = 0

    @property
    def installations(self) -> list[ToolchainInstallation]:
        return [d.installation for d in self.registered]


class ToolchainSession:
    """Owns the debugger registry for the lifetime of one host session.

    Usage::

        with ToolchainSession(Settings.load(), InMemorySink()) as session:
            report = session.start()
            session.debuggers.get_debug_name(name)
    """

    def __init__(
        self,
        settings: Settings,
        sink: RegistrationSink,
        probe: CapabilityProbe | None = None,
        launch_configurator: LaunchConfigurator | None = None,
        assembler: DocumentAssembler | None = None,
    ) -> None:
        self._settings = settings
        self._sink = sink
        self._probe = probe or FilesystemProbe()
        self._launch_configurator = launch_configurator
        self._builder = DescriptorBuilder(self._probe, state_dir=settings.state_dir)
        self._assembler = assembler or DocumentAssembler()
        self._toolchain_ids: set[str] = set()
        self._registered_ids: set[str] = set()
        self.debuggers = DebuggerConfigRegistry()

    def __enter__(self) -> ToolchainSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> ScanReport:
        """Run the registration pass over the registry file."""
        report = ScanReport()
        path = self._settings.toolchains_file
        try:
            for installation in iter_installations(path, self._settings.malformed_lines):
                self.register_installation(installation, report)
        except MissingConfigFileError as exc:
            logger.error("%s", exc)
            report.errors.append(str(exc))
        except MalformedConfigLineError as exc:
            logger.error("Aborting toolchain scan: %s", exc)
            report.errors.append(str(exc))
        logger.info(
            "Registered %d Buildroot toolchain(s), skipped %d",
            len(report.registered), len(report.skipped),
        )
        return report

    def stop(self) -> None:
        """End the session: forget every debugger configuration."""
        self.debuggers.clear()
        self._toolchain_ids.clear()
        self._registered_ids.clear()

    def register_installation(
        self, installation: ToolchainInstallation, report: ScanReport,
    ) -> bool:
        """Register one installation and record the outcome on ``report``.

        The sink ends up holding either every document of the installation
        or none of them. An installation whose generated ids overlap ids
        already registered in this session is skipped.

        Returns:
            True if the installation was registered.
        """
        path, prefix = installation.install_path, installation.tool_prefix
        if not self._probe.exists(path, prefix, C_COMPILER):
            logger.info("No C compiler under %s, ignoring toolchain", path)
            report.skipped.append(SkippedInstallation(installation, "C compiler not found"))
            return False

        definition = self._builder.build(installation)
        if definition.toolchain.id in self._toolchain_ids:
            logger.warning("Toolchain %s already registered, ignoring line %d",
                           path, installation.line_number)
            report.skipped.append(SkippedInstallation(installation, "already registered"))
            return False

        ids = set(definition.iter_ids())
        clashes = sorted(ids & self._registered_ids)
        if clashes:
            logger.warning(
                "Toolchain %s reuses id %s of a registered toolchain, ignoring line %d",
                path, clashes[0], installation.line_number,
            )
            report.skipped.append(SkippedInstallation(installation, "id collision"))
            return False

        accepted: list[RegistrationDocument] = []
        try:
            for document in self._assembler.documents_for(definition):
                self._sink.register(document)
                accepted.append(document)
        except RegistrationError as exc:
            logger.error("Failed to register toolchain %s: %s", path, exc)
            report.errors.append(str(exc))
            self._rollback(accepted, report)
            report.skipped.append(SkippedInstallation(installation, "registration failed"))
            return False

        report.documents += len(accepted)
        self._toolchain_ids.add(definition.toolchain.id)
        self._registered_ids |= ids
        self.debuggers.register(installation.architecture, prefix, path)
        if self._launch_configurator is not None:
            self._launch_configurator.create(installation, self.debuggers)
        report.registered.append(definition)
        return True

    def _rollback(self, accepted: list[RegistrationDocument], report: ScanReport) -> None:
        for document in reversed(accepted):
            try:
                self._sink.unregister(document)
            except RegistrationError as exc:
                logger.error("Failed to withdraw document %s: %s", document.id, exc)
                report.errors.append(str(exc))
