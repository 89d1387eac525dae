"""Data model for resolved build configuration."""

from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class RepositorySource(str, Enum):
    """Package repository tag; position in a sequence is lookup priority."""

    GOOGLE = "google"
    MAVEN_CENTRAL = "mavenCentral"


class PluginRef(BaseModel):
    """A build plugin pinned to a version."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    id: str
    version: str
    apply_by_default: bool = True


class SubprojectRef(BaseModel):
    """A subproject and the subprojects whose evaluation it depends on."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    name: str
    depends_on_evaluation_of: frozenset[str] = Field(default_factory=frozenset)

    @field_serializer("depends_on_evaluation_of")
    def _sorted_dependencies(self, value: frozenset[str]) -> list[str]:
        return sorted(value)


class BuildConfiguration(BaseModel):
    """Resolved configuration handed to the external build tool.

    Paths are normalized strings (forward slashes) so the JSON form is
    identical across platforms.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    project_dir: str
    plugins: Tuple[PluginRef, ...]
    repositories: Tuple[RepositorySource, ...]
    root_build_dir: str
    build_dirs: Dict[str, str]
    subprojects: Tuple[SubprojectRef, ...]
    evaluation_order: Tuple[str, ...]
    clean_target: str
