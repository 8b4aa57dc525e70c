"""Manifest reconciliation against resolved dependencies."""
from __future__ import annotations

from typing import NamedTuple, Optional

import structlog

from license_tools.models.identity import ArtifactIdentity
from license_tools.models.library import LibraryRecord
from license_tools.models.record_set import RecordSet

logger = structlog.get_logger(__name__)


class ReconciliationResult(NamedTuple):
    """Result of comparing the manifest with the resolved dependencies.

    Attributes:
        undocumented: Resolved records with no manifest entry, in resolved order.
        stale: Manifest records no longer resolved, in manifest order.
        rewritten: The manifest to persist, or None if nothing changed.
    """

    undocumented: list[LibraryRecord]
    stale: list[LibraryRecord]
    rewritten: Optional[list[LibraryRecord]]

    @property
    def is_ok(self) -> bool:
        return not self.undocumented and not self.stale


def reconcile(manifest: RecordSet, resolved: RecordSet) -> ReconciliationResult:
    """Diff the manifest against resolved dependencies and plan a rewrite.

    When both sides agree nothing is rewritten. Otherwise the manifest is
    rebuilt: retained entries keep their order, stale entries are dropped
    and undocumented dependencies are appended.

    Args:
        manifest: Records loaded from the manifest.
        resolved: Records from dependency resolution.

    Returns:
        ReconciliationResult with both diffs and the rewritten manifest.
    """
    undocumented = resolved.not_listed_in(manifest)
    stale = manifest.not_listed_in(resolved)

    if not undocumented and not stale:
        return ReconciliationResult(undocumented=[], stale=[], rewritten=None)

    return ReconciliationResult(
        undocumented=undocumented,
        stale=stale,
        rewritten=rewrite_manifest(manifest, undocumented, stale),
    )


def rewrite_manifest(
    manifest: RecordSet,
    undocumented: list[LibraryRecord],
    stale: list[LibraryRecord],
) -> list[LibraryRecord]:
    """Build the new manifest entries.

    Every entry is emitted with a wildcard version; when several versions
    of one artifact are listed or undocumented only the first is kept, and a
    dropped manifest entry is logged as a warning.
    Placeholders for empty fields are left to the manifest writer.

    Args:
        manifest: Current manifest records.
        undocumented: Records to append.
        stale: Records to drop.

    Returns:
        Records in the order they should be written.
    """
    stale_ids = {record.artifact_id for record in stale}
    retained = [
        record for record in manifest if record.artifact_id not in stale_ids
    ]

    rewritten: list[LibraryRecord] = []
    seen: set[ArtifactIdentity] = set()
    for index, record in enumerate([*retained, *undocumented]):
        entry = _with_wildcard(record)
        if entry.artifact_id in seen:
            if index < len(retained):
                logger.warning(
                    "manifest entry collapsed into an earlier entry",
                    artifact=str(record.artifact_id),
                    kept_as=str(entry.artifact_id),
                )
            continue
        seen.add(entry.artifact_id)
        rewritten.append(entry)
    return rewritten


def _with_wildcard(record: LibraryRecord) -> LibraryRecord:
    return record.model_copy(
        update={"artifact_id": record.artifact_id.with_wildcard_version()}
    )
