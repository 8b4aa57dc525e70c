"""Configuration Pydantic models for license-tools."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

MAVEN_CENTRAL = "https://repo1.maven.org/maven2"


class LicenseToolsConfig(BaseModel):
    """Configuration for license-tools.

    A static set of named options. Paths are relative to the working
    directory the tasks run in.
    """

    model_config = {"extra": "forbid"}

    licenses_yaml: str = Field(
        default="licenses.yml",
        description="Path of the hand-maintained license manifest.",
    )
    ignored_groups: List[str] = Field(
        default_factory=list,
        description="Dependency groups excluded from resolution.",
    )
    ignored_projects: List[str] = Field(
        default_factory=list,
        description="Subproject names excluded from resolution.",
    )
    output_dir: str = Field(
        default="build/licenses",
        description="Directory the HTML and JSON reports are written to.",
    )
    output_html: str = Field(
        default="licenses.html",
        description="File name of the HTML report.",
    )
    output_json: str = Field(
        default="licenses.json",
        description="File name of the JSON report.",
    )
    ecosystem: Literal["gradle", "python"] = Field(
        default="gradle",
        description="Where resolved dependencies come from: an exported "
        "build project graph, or the current Python environment.",
    )
    project_graph: str = Field(
        default="build/dependency-graph.json",
        description="Exported project graph read by the gradle ecosystem.",
    )
    repositories: List[str] = Field(
        default_factory=lambda: [MAVEN_CENTRAL],
        description="Maven repositories searched for POM descriptors, in order.",
    )
    root_packages: Optional[List[str]] = Field(
        default=None,
        description="Python packages whose dependency closure is reported. "
        "All installed distributions when not set.",
    )
