"""Dependency resolvers and license metadata fetchers."""

from license_tools.resolvers.base import DependencyResolver, MetadataFetcher
from license_tools.resolvers.environment import EnvironmentResolver
from license_tools.resolvers.pom import PomMetadataFetcher
from license_tools.resolvers.project_graph import ProjectGraphResolver
from license_tools.resolvers.pypi import PyPIMetadataFetcher

__all__ = [
    "DependencyResolver",
    "EnvironmentResolver",
    "MetadataFetcher",
    "PomMetadataFetcher",
    "ProjectGraphResolver",
    "PyPIMetadataFetcher",
]
