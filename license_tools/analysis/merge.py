"""Report-time merging of manifest records with resolved dependencies."""
from __future__ import annotations

from typing import NamedTuple

import structlog

from license_tools.exceptions import (
    AggregateInsufficiencyError,
    NotEnoughInformationError,
)
from license_tools.models.library import LibraryRecord
from license_tools.models.record_set import RecordSet

logger = structlog.get_logger(__name__)


class MergeResult(NamedTuple):
    """Result of merging the manifest with resolved dependencies.

    Attributes:
        records: Merged, sufficient records in manifest order.
        insufficient: One error per record lacking license or attribution.
        skipped: Manifest records excluded by their skip flag.
    """

    records: list[LibraryRecord]
    insufficient: list[NotEnoughInformationError]
    skipped: list[LibraryRecord]

    @property
    def is_sufficient(self) -> bool:
        return not self.insufficient

    def raise_for_insufficient(self) -> None:
        """Raise AggregateInsufficiencyError if any record was insufficient."""
        if self.insufficient:
            raise AggregateInsufficiencyError(self.insufficient)


def merge_record(manifest_record: LibraryRecord, resolved: LibraryRecord) -> LibraryRecord:
    """Merge a resolved record into a manifest record.

    Precedence:

    * ``license`` and ``url``: manifest value when present, else resolved.
    * ``artifact_id`` and ``filename``: always the resolved values, so the
      report shows the exact version in use.
    * everything else: manifest value.

    The manifest record is not modified.

    Args:
        manifest_record: Record from the manifest.
        resolved: Matching record from dependency resolution.

    Returns:
        A new merged LibraryRecord.
    """
    return manifest_record.model_copy(
        update={
            "license": manifest_record.license or resolved.license,
            "url": manifest_record.url or resolved.url,
            "artifact_id": resolved.artifact_id,
            "filename": resolved.filename,
        }
    )


def assert_sufficient(record: LibraryRecord) -> None:
    """Check that a record may appear in a published report.

    Raises:
        NotEnoughInformationError: If license or copyright statement is missing.
    """
    missing = record.missing_fields()
    if missing:
        raise NotEnoughInformationError(record, missing)


def merge_for_report(manifest: RecordSet, resolved: RecordSet) -> MergeResult:
    """Merge every reportable manifest record with its resolved counterpart.

    Records flagged ``skip`` are left out entirely. Insufficient records
    are collected instead of raised so that one error can list them all.

    Args:
        manifest: Records loaded from the manifest.
        resolved: Records from dependency resolution.

    Returns:
        MergeResult in manifest order.
    """
    merged: list[LibraryRecord] = []
    insufficient: list[NotEnoughInformationError] = []
    skipped: list[LibraryRecord] = []

    for record in manifest:
        if record.skip:
            logger.info("skip library", artifact=str(record.artifact_id))
            skipped.append(record)
            continue

        match = resolved.find(record.artifact_id, exact=False)
        candidate = merge_record(record, match) if match is not None else record

        try:
            assert_sufficient(candidate)
        except NotEnoughInformationError as e:
            logger.debug(
                "not enough information",
                artifact=str(candidate.artifact_id),
                missing=e.missing,
            )
            insufficient.append(e)
            continue
        merged.append(candidate)

    return MergeResult(records=merged, insufficient=insufficient, skipped=skipped)
