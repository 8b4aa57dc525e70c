"""Dependency resolution from an exported multi-project build graph.

The graph is a JSON (or YAML) document written by the build, for example::

    {
      "name": "app",
      "group": "com.example",
      "version": "1.0.0",
      "configurations": {
        "implementation": [
          {"artifact": "com.squareup.okio:okio:2.8.0",
           "file": "/home/me/.gradle/caches/.../okio-2.8.0.jar"},
          {"artifact": "com.example:core:unspecified"}
        ]
      },
      "subprojects": [
        {"name": "core", "group": "com.example", "version": "unspecified",
         "configurations": {"api": []}}
      ]
    }
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import BaseModel, Field, ValidationError

from license_tools.constants import UNSPECIFIED_VERSION
from license_tools.exceptions import ResolutionError
from license_tools.models.artifact import ResolvedArtifact
from license_tools.models.identity import ArtifactIdentity
from license_tools.resolvers.base import DependencyResolver
from license_tools.yaml_io import format_validation_errors, read_yaml_file

logger = structlog.get_logger(__name__)

# compile|implementation|api, release(Compile|Implementation|Api),
# releaseProduction(Compile|Implementation|Api), and so on.
CONFIGURATION_PATTERN = re.compile(
    r"^(?:release\w*)?([cC]ompile|[cC]ompileOnly|[iI]mplementation|[aA]pi)$"
)


class GraphArtifact(BaseModel):
    """A resolved artifact as exported by the build."""

    model_config = {"extra": "forbid"}

    artifact: str = Field(description="group:name:version descriptor")
    file: Optional[str] = Field(default=None, description="Local artifact file")


class GraphProject(BaseModel):
    """A project of the build and its resolved configurations."""

    model_config = {"extra": "forbid"}

    name: str = Field(description="Project name")
    group: str = Field(default="", description="Project group")
    version: str = Field(default=UNSPECIFIED_VERSION, description="Project version")
    configurations: dict[str, list[GraphArtifact]] = Field(
        default_factory=dict,
        description="Resolved artifacts per configuration name",
    )
    subprojects: list[GraphProject] = Field(
        default_factory=list, description="Nested projects"
    )

    @property
    def coordinates(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"

    def walk(self) -> Iterator[GraphProject]:
        """Yield this project and all nested subprojects, depth first."""
        yield self
        for subproject in self.subprojects:
            yield from subproject.walk()


def load_project_graph(path: Union[str, Path]) -> GraphProject:
    """Load an exported project graph.

    Raises:
        ResolutionError: If the file is missing, unparsable or invalid.
    """
    graph_path = Path(path)
    data = read_yaml_file(graph_path, ResolutionError, "project graph")

    if not isinstance(data, dict):
        raise ResolutionError(
            f"Invalid project graph '{graph_path}': expected a mapping at root level"
        )

    try:
        return GraphProject.model_validate(data)
    except ValidationError as e:
        raise ResolutionError(
            f"Invalid project graph '{graph_path}': {format_validation_errors(e)}"
        ) from e


class ProjectGraphResolver(DependencyResolver):
    """Collect the artifacts used across all projects of a build.

    Each project is visited once. When an artifact is another project of the
    same build, that project is visited next, so its dependencies follow the
    artifacts of the project that uses it.
    """

    def __init__(self, root: GraphProject) -> None:
        self._root = root

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ProjectGraphResolver:
        return cls(load_project_graph(path))

    def resolve(
        self,
        ignored_groups: Iterable[str] = (),
        ignored_projects: Iterable[str] = (),
    ) -> list[ResolvedArtifact]:
        ignored_group_set = set(ignored_groups)
        ignored_project_set = set(ignored_projects)

        projects = [
            project
            for project in self._root.walk()
            if project.name not in ignored_project_set
        ]
        by_coordinates = {project.coordinates: project for project in projects}

        visited: set[str] = set()
        resolved: dict[ArtifactIdentity, ResolvedArtifact] = {}
        pending = list(reversed(projects))

        while pending:
            project = pending.pop()
            if project.coordinates in visited:
                continue
            visited.add(project.coordinates)
            logger.debug("resolve project", project=project.name)

            referenced: list[GraphProject] = []
            for artifact in self._artifacts_of(project):
                owner = by_coordinates.get(str(artifact.identity))
                if owner is not None and owner.coordinates not in visited:
                    referenced.append(owner)

                identity = artifact.identity
                if identity.version == UNSPECIFIED_VERSION:
                    continue
                if identity.group in ignored_group_set:
                    continue
                resolved.setdefault(identity, artifact)

            pending.extend(reversed(referenced))

        return list(resolved.values())

    @staticmethod
    def _artifacts_of(project: GraphProject) -> Iterator[ResolvedArtifact]:
        for configuration, artifacts in project.configurations.items():
            if not CONFIGURATION_PATTERN.match(configuration):
                continue
            for artifact in artifacts:
                yield ResolvedArtifact(
                    identity=ArtifactIdentity.parse(artifact.artifact),
                    file=Path(artifact.file) if artifact.file else None,
                )
