# gac_scanner/errors.py


class ReconcileError(Exception):
    """Base exception for the GAC reconciliation pipeline."""


class ConfigError(ReconcileError):
    """Raised when the scan configuration is invalid."""


class InventoryReadError(ReconcileError):
    """Raised when an Oracle inventory file is missing or unreadable."""


class XmlParseError(ReconcileError):
    """Raised when an inventory document is not well-formed XML."""


class VersionNotFound(ReconcileError):
    """Raised when an inventory document carries no SAVED_WITH version."""


class VersionParseError(ReconcileError):
    """Raised when an installed version is not a five-group dotted version."""


class DirectoryReadError(ReconcileError):
    """Raised when a GAC root or vendor folder cannot be listed."""


class NonUnicodePathError(ReconcileError):
    """Raised when a GAC path component cannot be represented as text."""


class MalformedEntryError(ReconcileError):
    """Raised when a version folder is not named <version>__<publicKeyToken>."""


class NoInstallFound(ReconcileError):
    """Raised when no inventory location yields an installed version."""

    def __init__(self, message: str = "No Oracle install found."):
        super().__init__(message)


class VersionMismatch(ReconcileError):
    """Raised when the 32-bit and 64-bit inventories report different versions."""

    def __init__(self, readings):
        self.readings = list(readings)
        found = " and ".join(f"version {r.version} ({r.label})" for r in self.readings)
        super().__init__(f"Different Oracle versions installed. {found[0].upper()}{found[1:]} found.")


class ReportWriteError(ReconcileError):
    """Raised when the report file cannot be written."""
