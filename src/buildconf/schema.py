"""Schema of the declarative project file (``buildconf.toml``)."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from buildconf.common import LoggingConfig


class PluginEntry(BaseModel):
    """A ``[[plugins]]`` entry.

    ``version`` is optional here so that a missing version is reported by
    the loader as a configuration error naming the plugin.
    """

    model_config = ConfigDict(extra='forbid')

    id: str
    version: Optional[str] = None
    apply: bool = Field(default=True, description="Apply the plugin to the root project")


class SubprojectEntry(BaseModel):
    """A ``[[subprojects]]`` entry."""

    model_config = ConfigDict(extra='forbid')

    name: str
    evaluation_depends_on: List[str] = Field(default_factory=list)


class BuildSection(BaseModel):
    model_config = ConfigDict(extra='forbid')

    base_dir: str = Field(
        default="../build",
        description="Root build directory, relative to the project directory"
    )


class EvaluationSection(BaseModel):
    model_config = ConfigDict(extra='forbid')

    common_dependency: Optional[str] = Field(
        default=None,
        description="Subproject every other subproject is evaluated after"
    )


class ProjectConfig(BaseModel):
    """Root of the declarative project file."""

    model_config = ConfigDict(extra='forbid')

    repositories: Optional[List[str]] = None
    plugins: List[PluginEntry] = Field(default_factory=list)
    subprojects: List[SubprojectEntry] = Field(default_factory=list)
    build: BuildSection = Field(default_factory=BuildSection)
    evaluation: EvaluationSection = Field(default_factory=EvaluationSection)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
