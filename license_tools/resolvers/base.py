"""Base interfaces for dependency resolvers and metadata fetchers."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional

from license_tools.models.artifact import ArtifactMetadata, ResolvedArtifact


class DependencyResolver(ABC):
    """Abstract base class for dependency resolvers.

    Resolvers report the exact-version artifacts used by a project,
    deduplicated by identity.
    """

    @abstractmethod
    def resolve(
        self,
        ignored_groups: Iterable[str] = (),
        ignored_projects: Iterable[str] = (),
    ) -> list[ResolvedArtifact]:
        """Resolve the dependencies of the project.

        Args:
            ignored_groups: Artifact groups to leave out.
            ignored_projects: Subprojects whose dependencies are left out.

        Returns:
            Resolved artifacts in first-seen order, one per exact identity.

        Raises:
            ResolutionError: If the project cannot be read.
        """


class MetadataFetcher(ABC):
    """Abstract base class for per-artifact license metadata lookups."""

    @abstractmethod
    async def fetch(self, artifact: ResolvedArtifact) -> Optional[ArtifactMetadata]:
        """Fetch license metadata for one artifact.

        Lookup failures are logged and reported as None; they never
        propagate to the caller.

        Args:
            artifact: The resolved artifact.

        Returns:
            Metadata (possibly partial), or None if it could not be fetched.
        """
