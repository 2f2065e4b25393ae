"""Registration documents rendered from descriptor trees."""

from __future__ import annotations

from buildroot_cdt.documents.assembler import DocumentAssembler
from buildroot_cdt.documents.models import DocumentKind, RegistrationDocument

__all__ = ["DocumentAssembler", "DocumentKind", "RegistrationDocument"]
