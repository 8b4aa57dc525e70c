"""Assembly of report payloads from merged library records."""
from __future__ import annotations

from typing import Any

from license_tools.analysis.merge import MergeResult
from license_tools.models.library import LibraryRecord


def record_payload(record: LibraryRecord, html: bool = False) -> dict[str, Any]:
    """Build the report fields for one record.

    Key order is part of the JSON output format. With ``html`` set the
    library name is given already escaped, as markup.
    """
    return {
        "notice": record.notice,
        "copyrightHolder": record.holder,
        "copyrightStatement": record.copyright_statement,
        "license": record.license,
        "licenseUrl": record.license_url,
        "normalizedLicense": record.normalized_license,
        "year": record.year,
        "url": record.url,
        "libraryName": record.escaped_name if html else record.library_name,
        "artifactId": {
            "name": record.artifact_id.name,
            "group": record.artifact_id.group,
            "version": record.artifact_id.version,
        },
    }


def assemble_payloads(
    result: MergeResult, html: bool = False
) -> list[dict[str, Any]]:
    """Turn merged records into report payloads, in manifest order.

    Args:
        result: Output of merge_for_report.
        html: Build payloads for the HTML page.

    Returns:
        One field mapping per reportable record.

    Raises:
        AggregateInsufficiencyError: If any record lacks license or
            attribution; no payloads are produced in that case.
    """
    result.raise_for_insufficient()
    return [record_payload(record, html=html) for record in result.records]
