"""Registration documents handed to a ``RegistrationSink``."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum


class DocumentKind(str, Enum):
    BUILD_DEFINITIONS = "buildDefinitions"
    SCANNER_PROFILE = "scannerProfile"


@dataclass(frozen=True)
class RegistrationDocument:
    """A self-contained plug-in document.

    Attributes:
        kind: Which extension point the document contributes to.
        id: Id of the primary element (toolchain id or scanner profile id).
            Unique per session; sinks may use it as a file name.
        content: Serialized XML, including the XML declaration.
    """

    kind: DocumentKind
    id: str
    content: str

    def parse(self) -> ET.Element:
        """Parse ``content`` back into its ``plugin`` element."""
        return ET.fromstring(self.content)

    def declared_ids(self) -> list[str]:
        """Every ``id`` attribute in the document, in document order."""
        return [el.attrib["id"] for el in self.parse().iter() if "id" in el.attrib]
