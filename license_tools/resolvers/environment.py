"""Dependency resolution from the installed Python environment."""
import re
from collections.abc import Iterable
from importlib.metadata import Distribution, distributions
from typing import Optional

import structlog
from packaging.requirements import InvalidRequirement, Requirement

from license_tools.models.artifact import ResolvedArtifact
from license_tools.models.identity import ArtifactIdentity
from license_tools.resolvers.base import DependencyResolver

logger = structlog.get_logger(__name__)

_SEPARATORS = re.compile(r"[-_.]+")

# Group used for identities of Python distributions
PYPI_GROUP = "pypi"


def normalize_name(name: str) -> str:
    """Normalize a distribution name per PEP 503."""
    return _SEPARATORS.sub("-", name).lower()


class EnvironmentResolver(DependencyResolver):
    """Resolve Python distributions installed in the current environment.

    With root packages, only their transitive requirement closure is
    reported; otherwise every installed distribution is. Identities are
    ``pypi:<normalized name>:<version>``.
    """

    def __init__(
        self,
        root_packages: Optional[list[str]] = None,
        installed: Optional[Iterable[Distribution]] = None,
    ) -> None:
        """Initialize resolver with an index of installed distributions.

        Args:
            root_packages: Distributions whose closure is reported, or None
                for all installed distributions.
            installed: Distributions to index. Defaults to the environment.
        """
        self._root_packages = root_packages
        self._installed: dict[str, Distribution] = {}
        for dist in installed if installed is not None else distributions():
            name = dist.metadata.get("Name")
            if name:
                self._installed.setdefault(normalize_name(name), dist)

    def resolve(
        self,
        ignored_groups: Iterable[str] = (),
        ignored_projects: Iterable[str] = (),
    ) -> list[ResolvedArtifact]:
        if PYPI_GROUP in set(ignored_groups):
            return []
        ignored = {normalize_name(name) for name in ignored_projects}

        if self._root_packages is None:
            names = sorted(self._installed)
        else:
            names = self._closure(self._root_packages, ignored)

        artifacts: list[ResolvedArtifact] = []
        for name in names:
            if name in ignored:
                continue
            dist = self._installed.get(name)
            if dist is None:
                logger.warning("package not installed", package=name)
                continue
            artifacts.append(self._to_artifact(name, dist))
        return artifacts

    def _closure(self, roots: list[str], ignored: set[str]) -> list[str]:
        """Walk requirements from the roots, visiting each package once."""
        visited: list[str] = []
        seen: set[str] = set()
        pending = [normalize_name(root) for root in reversed(roots)]

        while pending:
            name = pending.pop()
            if name in seen or name in ignored:
                continue
            seen.add(name)
            visited.append(name)

            dist = self._installed.get(name)
            if dist is None:
                continue
            children = [
                child
                for child in self._requirements(dist)
                if child not in seen
            ]
            pending.extend(reversed(children))

        return visited

    @staticmethod
    def _requirements(dist: Distribution) -> list[str]:
        names: list[str] = []
        for req_str in dist.requires or []:
            try:
                req = Requirement(req_str)
            except InvalidRequirement:
                # Skip malformed requirements
                continue
            # Dependencies that only apply when an extra is requested
            if req.marker is not None and "extra" in str(req.marker):
                continue
            if req.marker is not None and not req.marker.evaluate():
                continue
            names.append(normalize_name(req.name))
        return names

    @staticmethod
    def _to_artifact(name: str, dist: Distribution) -> ResolvedArtifact:
        version = dist.metadata.get("Version", "unknown")
        return ResolvedArtifact(
            identity=ArtifactIdentity(group=PYPI_GROUP, name=name, version=version),
        )
