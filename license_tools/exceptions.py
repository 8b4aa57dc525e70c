"""Custom exceptions for license-tools."""
from __future__ import annotations

from typing import TYPE_CHECKING

from license_tools.constants import (
    PLACEHOLDER_COPYRIGHT_HOLDER,
    PLACEHOLDER_LICENSE,
    PLACEHOLDER_YEAR,
)

if TYPE_CHECKING:
    from license_tools.models.library import LibraryRecord


class LicenseToolsError(Exception):
    """Base exception for all license-tools errors."""

    pass


class ConfigurationError(LicenseToolsError):
    """Exception raised when configuration is invalid."""

    pass


class ManifestError(LicenseToolsError):
    """Exception raised when the license manifest cannot be read or written."""

    pass


class ResolutionError(LicenseToolsError):
    """Exception raised when dependencies cannot be resolved."""

    pass


class MalformedIdentityError(LicenseToolsError):
    """Exception raised when an artifact descriptor is not ``group:name:version``."""

    def __init__(self, descriptor: str) -> None:
        self.descriptor = descriptor
        super().__init__(
            f"Malformed artifact descriptor '{descriptor}': "
            "expected 'group:name:version'"
        )


class MetadataFetchError(LicenseToolsError):
    """Exception raised when license metadata for one artifact cannot be fetched."""

    pass


class LicenseCheckError(LicenseToolsError):
    """Exception raised when a report is requested for an out-of-date manifest."""

    pass


class NotEnoughInformationError(LicenseToolsError):
    """A single record lacks the license or attribution needed for a report.

    These are collected during report generation and surfaced together
    through AggregateInsufficiencyError.
    """

    def __init__(self, record: LibraryRecord, missing: list[str]) -> None:
        self.record = record
        self.missing = missing
        super().__init__(
            f"Not enough information for {record.artifact_id}: "
            f"missing {', '.join(missing)}"
        )

    @property
    def missing_license(self) -> bool:
        return "license" in self.missing

    @property
    def missing_copyright(self) -> bool:
        return "copyrightHolder" in self.missing


class AggregateInsufficiencyError(LicenseToolsError):
    """Raised once when one or more records are not sufficient for reporting.

    The message is written in manifest syntax so entries can be patched
    directly from it.
    """

    def __init__(self, errors: list[NotEnoughInformationError]) -> None:
        self.errors = errors
        super().__init__(self._build_message(errors))

    @property
    def records(self) -> list[LibraryRecord]:
        return [error.record for error in self.errors]

    @staticmethod
    def _build_message(errors: list[NotEnoughInformationError]) -> str:
        lines = ["Not enough information for:", "---"]
        for error in errors:
            record = error.record
            lines.append(f"- artifact: {record.artifact_id}")
            lines.append(f"  name: {record.display_name}")
            if error.missing_license:
                lines.append(f"  license: {PLACEHOLDER_LICENSE}")
            if error.missing_copyright:
                lines.append(
                    f"  copyrightHolder: {PLACEHOLDER_COPYRIGHT_HOLDER} (or authors: [...])"
                )
                lines.append(f"  year: {PLACEHOLDER_YEAR} (optional)")
        return "\n".join(lines)


class ReportError(LicenseToolsError):
    """Exception raised when a report cannot be written."""

    pass
