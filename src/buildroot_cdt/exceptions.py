"""buildroot-cdt exception hierarchy.

All public exceptions inherit from BuildrootCdtError, giving callers a single
base class to catch when they want to handle any toolchain-registration
failure without swallowing unrelated errors.
"""

from __future__ import annotations


class BuildrootCdtError(Exception):
    """Base exception for all buildroot-cdt errors."""


class MissingConfigFileError(BuildrootCdtError):
    """Raised when the toolchain registry file does not exist.

    The startup session treats this as a no-op scan: zero installations,
    one reported error.
    """

    def __init__(self, path: object) -> None:
        super().__init__(f"Buildroot configuration file does not exist: {path}")
        self.path = path


class MalformedConfigLineError(BuildrootCdtError):
    """Raised for a registry line with fewer than three colon-separated fields."""

    def __init__(self, line_number: int, line: str) -> None:
        super().__init__(
            f"Malformed toolchain line {line_number}: {line!r} "
            "(expected path:prefix:architecture)"
        )
        self.line_number = line_number
        self.line = line


class RegistrationError(BuildrootCdtError):
    """Raised by a registration sink that cannot activate a document.

    Covers unwritable output directories and host registries that reject
    a contribution.
    """


class SettingsError(BuildrootCdtError):
    """Raised when the settings file cannot be read or has invalid values."""
