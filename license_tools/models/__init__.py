"""Pydantic data models for license-tools."""

from license_tools.models.artifact import ArtifactMetadata, ResolvedArtifact
from license_tools.models.config import LicenseToolsConfig
from license_tools.models.identity import ArtifactIdentity
from license_tools.models.library import LibraryRecord
from license_tools.models.record_set import RecordSet

__all__ = [
    "ArtifactIdentity",
    "ArtifactMetadata",
    "LibraryRecord",
    "LicenseToolsConfig",
    "RecordSet",
    "ResolvedArtifact",
]
