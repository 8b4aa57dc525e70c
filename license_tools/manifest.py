"""YAML license manifest storage."""
from __future__ import annotations

import os
import shutil
import tempfile
import textwrap
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional, Union

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from license_tools.constants import (
    PLACEHOLDER_COPYRIGHT_HOLDER,
    PLACEHOLDER_LICENSE,
    PLACEHOLDER_LICENSE_URL,
    PLACEHOLDER_NAME,
    PLACEHOLDER_URL,
    PLACEHOLDER_YEAR,
)
from license_tools.exceptions import ManifestError
from license_tools.models.identity import ArtifactIdentity
from license_tools.models.library import LibraryRecord
from license_tools.models.record_set import RecordSet
from license_tools.yaml_io import format_validation_errors, read_yaml_file

logger = structlog.get_logger(__name__)


class ManifestEntry(BaseModel):
    """One entry of ``licenses.yml`` as written by hand."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    artifact: str = Field(description="Artifact descriptor, usually group:name:+")
    name: Optional[str] = Field(default=None)
    copyright_holder: Optional[str] = Field(default=None, alias="copyrightHolder")
    authors: list[str] = Field(default_factory=list)
    year: Optional[str] = Field(default=None)
    license: Optional[str] = Field(default=None)
    license_url: Optional[str] = Field(default=None, alias="licenseUrl")
    url: Optional[str] = Field(default=None)
    notice: Optional[str] = Field(default=None)
    skip: bool = Field(default=False)

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("authors", mode="before")
    @classmethod
    def _authors_as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("skip", mode="before")
    @classmethod
    def _skip_default(cls, value: Any) -> Any:
        return False if value is None else value

    def to_record(self) -> LibraryRecord:
        """Convert to a LibraryRecord.

        Raises:
            MalformedIdentityError: If the artifact descriptor is malformed.
        """
        return LibraryRecord(
            artifact_id=ArtifactIdentity.parse(self.artifact),
            library_name=self.name,
            copyright_holder=self.copyright_holder,
            authors=self.authors,
            year=self.year,
            license=self.license,
            license_url=self.license_url,
            url=self.url,
            notice=self.notice,
            skip=self.skip,
        )


class YamlManifestStore:
    """Read and write the license manifest.

    Each manifest entry is written as::

        - artifact: group:name:+
          name: Library
          copyrightHolder: Someone
          year: 2015
          license: The Apache Software License, Version 2.0
          licenseUrl: http://www.apache.org/licenses/LICENSE-2.0.txt
          url: https://example.com

    Empty fields are written as placeholder tokens. The tokens begin with
    ``#`` so they load back as empty values.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> list[dict[str, Any]]:
        """Load the raw manifest entries.

        Returns:
            Entry mappings in file order. Empty if the file does not exist.

        Raises:
            ManifestError: If the file cannot be read or is not a YAML list.
        """
        if not self.path.exists():
            logger.info("manifest not found, starting empty", path=str(self.path))
            return []

        data = read_yaml_file(self.path, ManifestError, "manifest")
        if data is None:
            return []
        if not isinstance(data, list):
            raise ManifestError(
                f"Invalid manifest '{self.path}': "
                f"expected a list of entries, got {type(data).__name__}"
            )

        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise ManifestError(
                    f"Invalid manifest '{self.path}': entry {index} is "
                    f"{type(entry).__name__}, expected a mapping"
                )
        return data

    def load_records(self) -> RecordSet:
        """Load and validate the manifest into a RecordSet.

        Raises:
            ManifestError: If an entry has unknown keys or invalid values.
            MalformedIdentityError: If an artifact descriptor is malformed.
        """
        records = RecordSet()
        for index, raw in enumerate(self.load()):
            try:
                entry = ManifestEntry.model_validate(raw)
            except ValidationError as e:
                raise ManifestError(
                    f"Invalid entry {index} in '{self.path}': "
                    f"{format_validation_errors(e)}"
                ) from e
            records.add(entry.to_record())

        logger.debug("manifest loaded", path=str(self.path), entries=len(records))
        return records

    def render(self, records: Iterable[LibraryRecord]) -> str:
        """Serialize records in manifest syntax."""
        return "".join(self._render_entry(record) for record in records)

    def save(self, records: Iterable[LibraryRecord]) -> None:
        """Replace the manifest with the given records.

        The new content is written to a temporary file in the same directory
        and renamed over the manifest, so the file is either untouched or
        fully rewritten.

        Raises:
            ManifestError: If the file cannot be written.
        """
        content = self.render(records)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(content)
                if self.path.exists():
                    shutil.copymode(self.path, tmp_name)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ManifestError(f"Cannot write manifest '{self.path}': {e}") from e

        logger.info("manifest written", path=str(self.path))

    def _render_entry(self, record: LibraryRecord) -> str:
        lines = ["- " + _yaml_field("artifact", str(record.artifact_id)).lstrip()]
        fields: list[tuple[str, Optional[str], str]] = [
            ("name", record.library_name, PLACEHOLDER_NAME),
            ("copyrightHolder", record.copyright_holder, PLACEHOLDER_COPYRIGHT_HOLDER),
            ("year", record.year, PLACEHOLDER_YEAR),
            ("license", record.license, PLACEHOLDER_LICENSE),
            ("licenseUrl", record.license_url, PLACEHOLDER_LICENSE_URL),
            ("url", record.url, PLACEHOLDER_URL),
        ]
        for key, value, placeholder in fields:
            if key == "copyrightHolder" and not value and record.authors:
                lines.append(_yaml_field("authors", record.authors))
            elif key == "year" and value and _is_plain_year(value):
                lines.append(f"  year: {value}")
            elif value:
                lines.append(_yaml_field(key, value))
            else:
                lines.append(f"  {key}: {placeholder}")
        if record.notice:
            lines.append(_yaml_field("notice", record.notice))
        if record.skip:
            lines.append("  skip: true")
        return "\n".join(lines) + "\n"


def _yaml_field(key: str, value: Any) -> str:
    """Render ``key: value`` indented under a list item, quoting as needed."""
    rendered = yaml.safe_dump(
        {key: value},
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    ).rstrip("\n")
    return textwrap.indent(rendered, "  ", lambda line: True)


def _is_plain_year(value: str) -> bool:
    # Leading zeros would load back as a YAML 1.1 octal int
    return value.isdecimal() and str(int(value)) == value
