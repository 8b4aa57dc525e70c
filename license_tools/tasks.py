"""License tasks: manifest check and report generation."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import NamedTuple, Optional

import httpx
import structlog

from license_tools.analysis.merge import merge_for_report
from license_tools.analysis.reconcile import ReconciliationResult, reconcile
from license_tools.exceptions import LicenseCheckError
from license_tools.manifest import YamlManifestStore
from license_tools.models.artifact import ArtifactMetadata, ResolvedArtifact
from license_tools.models.config import LicenseToolsConfig
from license_tools.models.library import LibraryRecord
from license_tools.models.record_set import RecordSet
from license_tools.output.html import LicenseHtmlFormatter
from license_tools.output.json_report import LicenseJsonFormatter
from license_tools.output.payload import assemble_payloads
from license_tools.output.writer import write_report
from license_tools.resolvers.base import DependencyResolver, MetadataFetcher
from license_tools.resolvers.environment import EnvironmentResolver
from license_tools.resolvers.pom import PomMetadataFetcher
from license_tools.resolvers.project_graph import ProjectGraphResolver
from license_tools.resolvers.pypi import PyPIMetadataFetcher

logger = structlog.get_logger(__name__)


class RecordSets(NamedTuple):
    """The two sides of a run: manifest records and resolved records."""

    manifest: RecordSet
    resolved: RecordSet


def build_resolver(config: LicenseToolsConfig) -> DependencyResolver:
    """Create the dependency resolver for the configured ecosystem."""
    if config.ecosystem == "python":
        return EnvironmentResolver(root_packages=config.root_packages)
    return ProjectGraphResolver.from_file(config.project_graph)


def build_fetcher(
    config: LicenseToolsConfig, client: Optional[httpx.AsyncClient] = None
) -> MetadataFetcher:
    """Create the metadata fetcher for the configured ecosystem."""
    if config.ecosystem == "python":
        return PyPIMetadataFetcher(client=client)
    return PomMetadataFetcher(repositories=config.repositories, client=client)


def record_from_artifact(
    artifact: ResolvedArtifact, metadata: Optional[ArtifactMetadata]
) -> LibraryRecord:
    """Build the resolved-side record for an artifact."""
    record = LibraryRecord(artifact_id=artifact.identity, filename=artifact.file)
    if metadata is None:
        return record
    return record.model_copy(
        update={
            "library_name": metadata.library_name,
            "url": metadata.url,
            "license": metadata.license,
            "license_url": metadata.license_url,
        }
    )


async def fetch_records(
    artifacts: list[ResolvedArtifact], fetcher: MetadataFetcher
) -> RecordSet:
    """Fetch metadata for each artifact, one request at a time.

    Failed lookups leave the record's license fields empty.
    """
    records = RecordSet()
    for artifact in artifacts:
        metadata = await fetcher.fetch(artifact)
        records.add(record_from_artifact(artifact, metadata))
    return records


def collect_resolved(
    config: LicenseToolsConfig,
    resolver: Optional[DependencyResolver] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> RecordSet:
    """Resolve dependencies and fetch their license metadata.

    Args:
        config: Run configuration.
        resolver: Resolver to use instead of the configured one.
        fetcher: Fetcher to use instead of the configured one.

    Returns:
        RecordSet of resolved records in resolution order.
    """
    resolver = resolver or build_resolver(config)
    artifacts = resolver.resolve(config.ignored_groups, config.ignored_projects)
    logger.info("dependencies resolved", count=len(artifacts))

    async def run() -> RecordSet:
        if fetcher is not None:
            return await fetch_records(artifacts, fetcher)
        # Shared HTTP client for connection reuse
        async with httpx.AsyncClient() as client:
            return await fetch_records(artifacts, build_fetcher(config, client))

    return asyncio.run(run())


def load_record_sets(
    config: LicenseToolsConfig,
    resolver: Optional[DependencyResolver] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> RecordSets:
    """Load the manifest and resolve the build's dependencies."""
    manifest = YamlManifestStore(config.licenses_yaml).load_records()
    resolved = collect_resolved(config, resolver=resolver, fetcher=fetcher)
    return RecordSets(manifest=manifest, resolved=resolved)


def apply_reconciliation(
    sets: RecordSets, store: YamlManifestStore
) -> ReconciliationResult:
    """Reconcile both sets and rewrite the manifest if they differ."""
    result = reconcile(sets.manifest, sets.resolved)

    if result.is_ok:
        logger.info("checkLicenses: ok")
        return result

    for record in result.undocumented:
        logger.warning(
            "library not listed in manifest, adding it",
            artifact=str(record.artifact_id),
            manifest=str(store.path),
        )
    for record in result.stale:
        logger.warning(
            "library no longer used, removing it",
            artifact=str(record.artifact_id),
            manifest=str(store.path),
        )

    store.save(result.rewritten or [])
    return result


def check_licenses(
    config: LicenseToolsConfig,
    resolver: Optional[DependencyResolver] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> ReconciliationResult:
    """Check that the manifest lists exactly the resolved dependencies.

    When it does not, the manifest is rewritten with new entries appended
    (placeholders mark the fields to fill in) and unused entries removed.

    Returns:
        ReconciliationResult; ``is_ok`` is False if the manifest was rewritten.
    """
    sets = load_record_sets(config, resolver=resolver, fetcher=fetcher)
    return apply_reconciliation(sets, YamlManifestStore(config.licenses_yaml))


def _checked_payloads(
    config: LicenseToolsConfig,
    resolver: Optional[DependencyResolver],
    fetcher: Optional[MetadataFetcher],
    html: bool = False,
) -> list[dict]:
    store = YamlManifestStore(config.licenses_yaml)
    sets = load_record_sets(config, resolver=resolver, fetcher=fetcher)

    result = apply_reconciliation(sets, store)
    if not result.is_ok:
        raise LicenseCheckError(
            f"{store.path} did not match the resolved dependencies and has been "
            "updated; fill in the placeholder fields and run again"
        )

    merged = merge_for_report(sets.manifest, sets.resolved)
    return assemble_payloads(merged, html=html)


def generate_license_page(
    config: LicenseToolsConfig,
    resolver: Optional[DependencyResolver] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> Path:
    """Check the manifest, then write the HTML license page.

    Raises:
        LicenseCheckError: If the manifest had to be rewritten.
        AggregateInsufficiencyError: If records lack license or attribution.
    """
    payloads = _checked_payloads(config, resolver, fetcher, html=True)
    content = LicenseHtmlFormatter().format_payloads(payloads)
    return write_report(content, config.output_dir, config.output_html)


def generate_license_json(
    config: LicenseToolsConfig,
    resolver: Optional[DependencyResolver] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> Path:
    """Check the manifest, then write the JSON license report.

    Raises:
        LicenseCheckError: If the manifest had to be rewritten.
        AggregateInsufficiencyError: If records lack license or attribution.
    """
    payloads = _checked_payloads(config, resolver, fetcher)
    content = LicenseJsonFormatter().format_payloads(payloads)
    return write_report(content, config.output_dir, config.output_json)
