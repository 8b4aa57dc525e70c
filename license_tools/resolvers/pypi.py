"""PyPI license metadata fetcher."""

from typing import Any, Optional

import httpx
import structlog

from license_tools.exceptions import MetadataFetchError
from license_tools.models.artifact import ArtifactMetadata, ResolvedArtifact
from license_tools.models.identity import ArtifactIdentity
from license_tools.resolvers.base import MetadataFetcher

logger = structlog.get_logger(__name__)

PYPI_BASE_URL = "https://pypi.org/pypi"

# Mapping of PyPI classifiers to license names
CLASSIFIER_TO_LICENSE: dict[str, str] = {
    "License :: OSI Approved :: MIT License": "MIT",
    "License :: OSI Approved :: Apache Software License": "Apache-2.0",
    "License :: OSI Approved :: BSD License": "BSD-3-Clause",
    "License :: OSI Approved :: GNU General Public License v3 (GPLv3)": "GPL-3.0",
    "License :: OSI Approved :: GNU General Public License v2 (GPLv2)": "GPL-2.0",
    "License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)": (
        "LGPL-3.0"
    ),
    "License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)": (
        "LGPL-2.0"
    ),
    "License :: OSI Approved :: ISC License (ISCL)": "ISC",
    "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)": "MPL-2.0",
    "License :: OSI Approved :: Python Software Foundation License": "PSF-2.0",
    "License :: OSI Approved :: The Unlicense (Unlicense)": "Unlicense",
    "License :: OSI Approved :: zlib/libpng License": "Zlib",
}

# project_urls keys checked for a homepage, in order
HOMEPAGE_KEYS = ["Homepage", "Home", "Source", "Source Code", "Repository"]


async def fetch_pypi_metadata(
    identity: ArtifactIdentity, client: httpx.AsyncClient
) -> dict[str, Any]:
    """Fetch release metadata from the PyPI JSON API.

    Args:
        identity: Identity of the distribution (name and exact version).
        client: HTTP client to use.

    Returns:
        PyPI JSON API response dict.

    Raises:
        MetadataFetchError: If the release is unknown or the request fails.
    """
    url = f"{PYPI_BASE_URL}/{identity.name}/{identity.version}/json"
    try:
        response = await client.get(url, timeout=httpx.Timeout(30.0))
        response.raise_for_status()
        return response.json()  # type: ignore[no-any-return]
    except httpx.HTTPStatusError as e:
        raise MetadataFetchError(
            f"PyPI returned HTTP {e.response.status_code} for {identity}"
        ) from e
    except httpx.RequestError as e:
        raise MetadataFetchError(f"Failed to fetch {identity}: {e}") from e
    except ValueError as e:
        raise MetadataFetchError(f"Invalid PyPI response for {identity}: {e}") from e


def extract_license_from_metadata(metadata: dict[str, Any]) -> Optional[str]:
    """Extract a license name from PyPI metadata.

    Checks ``license_expression``, then ``license``, then trove classifiers.

    Args:
        metadata: PyPI JSON API response dict.

    Returns:
        License name, or None if not found.
    """
    info: dict[str, Any] = metadata.get("info") or {}

    for key in ("license_expression", "license"):
        value: Optional[str] = info.get(key)
        if value and value.strip():
            cleaned = value.strip()
            # Skip common "no license" values and full license texts
            if cleaned.upper() not in ("UNKNOWN", "NONE") and "\n" not in cleaned:
                return cleaned

    classifiers: list[str] = info.get("classifiers") or []
    for classifier in classifiers:
        if classifier in CLASSIFIER_TO_LICENSE:
            return CLASSIFIER_TO_LICENSE[classifier]

    return None


def extract_url_from_metadata(metadata: dict[str, Any]) -> Optional[str]:
    """Extract the project homepage from PyPI metadata."""
    info: dict[str, Any] = metadata.get("info") or {}

    home_page: Optional[str] = info.get("home_page")
    if home_page and home_page.strip():
        return home_page.strip()

    project_urls: dict[str, str] = info.get("project_urls") or {}
    for key in HOMEPAGE_KEYS:
        if project_urls.get(key):
            return project_urls[key]

    return info.get("project_url") or None


class PyPIMetadataFetcher(MetadataFetcher):
    """Fetch license metadata for Python distributions from PyPI."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        """Initialize with an optional shared HTTP client.

        Args:
            client: Optional shared httpx.AsyncClient for connection reuse.
        """
        self._client = client

    async def fetch(self, artifact: ResolvedArtifact) -> Optional[ArtifactMetadata]:
        try:
            if self._client:
                metadata = await fetch_pypi_metadata(artifact.identity, self._client)
            else:
                async with httpx.AsyncClient() as new_client:
                    metadata = await fetch_pypi_metadata(artifact.identity, new_client)
        except MetadataFetchError as e:
            logger.warning(
                "unable to retrieve license",
                artifact=str(artifact.identity),
                error=str(e),
            )
            return None

        info: dict[str, Any] = metadata.get("info") or {}
        return ArtifactMetadata(
            library_name=info.get("name") or None,
            url=extract_url_from_metadata(metadata),
            license=extract_license_from_metadata(metadata),
        )
