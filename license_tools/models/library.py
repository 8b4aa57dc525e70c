"""Library record model."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from markupsafe import Markup, escape
from pydantic import BaseModel, Field, field_validator

from license_tools.models.identity import ArtifactIdentity


class LibraryRecord(BaseModel):
    """License metadata for one dependency.

    The artifact identity is the only identifying field. Every other field
    is optional and may come from the manifest or from dependency resolution.
    """

    model_config = {"extra": "forbid"}

    artifact_id: ArtifactIdentity = Field(description="Artifact identity")
    library_name: Optional[str] = Field(
        default=None, description="Human-readable library name"
    )
    copyright_holder: Optional[str] = Field(
        default=None, description="Copyright holder"
    )
    authors: list[str] = Field(
        default_factory=list,
        description="Authors, used when no copyright holder is given",
    )
    year: Optional[str] = Field(default=None, description="Copyright year(s)")
    license: Optional[str] = Field(default=None, description="License name")
    license_url: Optional[str] = Field(default=None, description="License text URL")
    url: Optional[str] = Field(default=None, description="Project URL")
    notice: Optional[str] = Field(default=None, description="Additional notice text")
    skip: bool = Field(default=False, description="Exclude from reports")
    filename: Optional[Path] = Field(
        default=None, description="Local artifact file (informational)"
    )

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> Any:
        # YAML reads `year: 2015` as an int
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def display_name(self) -> str:
        """Library name, falling back to the artifact name."""
        return self.library_name or self.artifact_id.name

    @property
    def escaped_name(self) -> Optional[Markup]:
        """HTML-escaped library name, or None if there is no name."""
        if not self.library_name:
            return None
        return escape(self.library_name)

    @property
    def holder(self) -> Optional[str]:
        """Copyright holder, or the authors joined into one phrase."""
        if self.copyright_holder:
            return self.copyright_holder
        authors = [author for author in self.authors if author]
        if not authors:
            return None
        if len(authors) == 1:
            return authors[0]
        if len(authors) == 2:
            return f"{authors[0]} and {authors[1]}"
        return ", ".join(authors[:-1]) + f", and {authors[-1]}"

    @property
    def copyright_statement(self) -> Optional[str]:
        """Copyright line built from the holder and, when known, the year."""
        holder = self.holder
        if not holder:
            return None
        dot = "" if holder.endswith(".") else "."
        if self.year:
            return f"Copyright © {self.year} {holder}{dot} All rights reserved."
        return f"Copyright © {holder}{dot} All rights reserved."

    @property
    def normalized_license(self) -> Optional[str]:
        """License key used to group records in reports."""
        from license_tools.analysis.licenses import normalize_license

        return normalize_license(self.license)

    def missing_fields(self) -> list[str]:
        """List the fields that keep this record out of a published report.

        A record needs a license and a copyright statement. The statement
        can be synthesized from the holder alone, so the year is optional.

        Returns:
            Manifest keys of the missing information (empty if sufficient).
        """
        missing: list[str] = []
        if not self.license:
            missing.append("license")
        if not self.copyright_statement:
            missing.append("copyrightHolder")
        return missing

    @property
    def is_sufficient(self) -> bool:
        """True if the record has enough information for reporting."""
        return not self.missing_fields()
