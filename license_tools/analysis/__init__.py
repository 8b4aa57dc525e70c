"""Reconciliation and merge logic for license-tools."""
from license_tools.analysis.licenses import normalize_license
from license_tools.analysis.merge import (
    MergeResult,
    assert_sufficient,
    merge_for_report,
    merge_record,
)
from license_tools.analysis.reconcile import (
    ReconciliationResult,
    reconcile,
    rewrite_manifest,
)

__all__ = [
    "MergeResult",
    "ReconciliationResult",
    "assert_sufficient",
    "merge_for_report",
    "merge_record",
    "normalize_license",
    "reconcile",
    "rewrite_manifest",
]
