"""Models exchanged with dependency resolvers and metadata fetchers."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from license_tools.models.identity import ArtifactIdentity


class ResolvedArtifact(BaseModel):
    """A dependency actually used by the build, with its exact version."""

    model_config = {"extra": "forbid", "frozen": True}

    identity: ArtifactIdentity = Field(description="Exact artifact identity")
    file: Optional[Path] = Field(default=None, description="Local artifact file")


class ArtifactMetadata(BaseModel):
    """License metadata published with an artifact (POM, PyPI, ...)."""

    model_config = {"extra": "forbid"}

    library_name: Optional[str] = Field(default=None, description="Project name")
    url: Optional[str] = Field(default=None, description="Project URL")
    license: Optional[str] = Field(default=None, description="First declared license")
    license_url: Optional[str] = Field(default=None, description="License URL")
