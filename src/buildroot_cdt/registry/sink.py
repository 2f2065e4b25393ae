"""Registration sinks: where assembled documents are activated.

The host registry itself is external. ``RegistrationSink`` is the contract
the session relies on; ``InMemorySink`` collects documents for callers that
inspect them and ``DirectorySink`` writes them out as plug-in files for a
host that loads contributions from disk.

Duplicate detection is *not* performed here -- the session is responsible
for never submitting the same installation twice. The session also calls
``unregister`` to withdraw the documents of an installation whose later
documents were rejected.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from buildroot_cdt.descriptors.identifiers import ID_NAMESPACE
from buildroot_cdt.documents.models import DocumentKind, RegistrationDocument
from buildroot_cdt.exceptions import RegistrationError

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".xml"


@runtime_checkable
class RegistrationSink(Protocol):
    """Accepts a document and activates it in the running session."""

    def register(self, document: RegistrationDocument) -> None:
        """Activate ``document``.

        Raises:
            RegistrationError: The document could not be activated.
        """
        ...

    def unregister(self, document: RegistrationDocument) -> None:
        """Withdraw a document previously accepted by ``register``.

        Raises:
            RegistrationError: The document could not be withdrawn.
        """
        ...


class InMemorySink:
    """Keep every registered document in memory, in registration order."""

    def __init__(self) -> None:
        self._documents: list[RegistrationDocument] = []

    def register(self, document: RegistrationDocument) -> None:
        self._documents.append(document)

    def unregister(self, document: RegistrationDocument) -> None:
        if document in self._documents:
            self._documents.remove(document)

    @property
    def documents(self) -> list[RegistrationDocument]:
        """Read-only view of the registered documents."""
        return list(self._documents)

    def of_kind(self, kind: DocumentKind) -> list[RegistrationDocument]:
        return [d for d in self._documents if d.kind is kind]


class DirectorySink:
    """Write each document to ``<directory>/<document id>.xml``.

    Creates the directory on first use. Files written by an earlier run are
    left in place until ``clear()`` removes them.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._written: list[Path] = []

    @property
    def written(self) -> list[Path]:
        return list(self._written)

    def _target(self, document: RegistrationDocument) -> Path:
        return self._directory / f"{document.id}{DOCUMENT_SUFFIX}"

    def register(self, document: RegistrationDocument) -> None:
        target = self._target(document)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            target.write_text(document.content, encoding="utf-8")
        except OSError as exc:
            raise RegistrationError(f"Cannot write {target}: {exc}") from exc
        logger.debug("Wrote %s document %s", document.kind.value, target)
        self._written.append(target)

    def unregister(self, document: RegistrationDocument) -> None:
        target = self._target(document)
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise RegistrationError(f"Cannot remove {target}: {exc}") from exc
        logger.debug("Removed %s document %s", document.kind.value, target)
        if target in self._written:
            self._written.remove(target)

    def clear(self) -> list[Path]:
        """Remove every document file this tool generated in the directory.

        Only ``org.buildroot.*.xml`` files are touched; anything else in the
        directory is kept.

        Returns:
            The removed files.

        Raises:
            RegistrationError: A file could not be removed.
        """
        if not self._directory.is_dir():
            return []
        removed = []
        for stale in sorted(self._directory.glob(f"{ID_NAMESPACE}.*{DOCUMENT_SUFFIX}")):
            try:
                stale.unlink()
            except OSError as exc:
                raise RegistrationError(f"Cannot remove {stale}: {exc}") from exc
            removed.append(stale)
        if removed:
            logger.info("Removed %d document(s) from %s", len(removed), self._directory)
        return removed
