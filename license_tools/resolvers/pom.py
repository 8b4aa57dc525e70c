"""Maven POM license metadata fetcher."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from typing import Optional

import httpx
import structlog

from license_tools.exceptions import MetadataFetchError
from license_tools.models.artifact import ArtifactMetadata, ResolvedArtifact
from license_tools.models.config import MAVEN_CENTRAL
from license_tools.models.identity import ArtifactIdentity
from license_tools.resolvers.base import MetadataFetcher

logger = structlog.get_logger(__name__)


def pom_path(identity: ArtifactIdentity) -> str:
    """Repository-relative path of an artifact's POM descriptor."""
    group_path = identity.group.replace(".", "/")
    return (
        f"{group_path}/{identity.name}/{identity.version}/"
        f"{identity.name}-{identity.version}.pom"
    )


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _text(element: ET.Element, name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


def parse_pom(content: str | bytes) -> ArtifactMetadata:
    """Extract license metadata from a POM document.

    Takes the project ``name`` and ``url`` and the first license that has
    a name. Namespaced and plain POMs are both accepted.

    Args:
        content: POM XML.

    Returns:
        ArtifactMetadata with whatever fields the POM declares.

    Raises:
        MetadataFetchError: If the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise MetadataFetchError(f"Invalid POM: {e}") from e

    metadata = ArtifactMetadata(
        library_name=_text(root, "name"),
        url=_text(root, "url"),
    )

    licenses = _child(root, "licenses")
    if licenses is not None:
        for license_element in licenses:
            if _local_name(license_element.tag) != "license":
                continue
            license_name = _text(license_element, "name")
            if license_name:
                metadata.license = license_name
                metadata.license_url = _text(license_element, "url")
                break

    return metadata


class PomMetadataFetcher(MetadataFetcher):
    """Fetch license metadata from an artifact's POM descriptor.

    A ``.pom`` file next to the local artifact file is used when present.
    Otherwise each repository is tried in order.
    """

    def __init__(
        self,
        repositories: Optional[Sequence[str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize with repositories and an optional HTTP client.

        Args:
            repositories: Maven repository base URLs. Defaults to Maven Central.
            client: Optional shared httpx.AsyncClient for connection reuse.
        """
        self._repositories = list(repositories) if repositories else [MAVEN_CENTRAL]
        self._client = client

    async def fetch(self, artifact: ResolvedArtifact) -> Optional[ArtifactMetadata]:
        try:
            content = await self.fetch_pom(artifact)
            return parse_pom(content)
        except MetadataFetchError as e:
            logger.warning(
                "unable to retrieve license",
                artifact=str(artifact.identity),
                error=str(e),
            )
            return None

    async def fetch_pom(self, artifact: ResolvedArtifact) -> bytes:
        """Fetch the raw POM for an artifact.

        Raises:
            MetadataFetchError: If no source provides the POM.
        """
        if artifact.file is not None:
            local_pom = artifact.file.with_suffix(".pom")
            if local_pom.is_file():
                logger.debug("POM", path=str(local_pom))
                try:
                    return local_pom.read_bytes()
                except OSError as e:
                    raise MetadataFetchError(
                        f"Cannot read '{local_pom}': {e}"
                    ) from e

        if self._client:
            return await self._fetch_remote(artifact.identity, self._client)

        async with httpx.AsyncClient() as new_client:
            return await self._fetch_remote(artifact.identity, new_client)

    async def _fetch_remote(
        self, identity: ArtifactIdentity, client: httpx.AsyncClient
    ) -> bytes:
        path = pom_path(identity)
        failures: list[str] = []

        for repository in self._repositories:
            url = f"{repository.rstrip('/')}/{path}"
            try:
                response = await client.get(url, timeout=httpx.Timeout(30.0))
            except httpx.RequestError as e:
                failures.append(f"{url}: {e}")
                continue

            if response.status_code == 200:
                logger.debug("POM", url=url)
                return response.content
            failures.append(f"{url}: HTTP {response.status_code}")

        raise MetadataFetchError(
            f"No POM for {identity}: " + "; ".join(failures)
        )
