"""Build model schema: Dependency, Model, ModelBuildingRequest, ModelBuildingResult."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass
class Dependency:
    """A dependency declared in a build model."""

    group_id: str
    artifact_id: str
    version: Optional[str] = None  # None when inherited from a parent or BOM
    scope: str = ""
    type: str = ""
    classifier: str = ""
    optional: bool = False

    @property
    def management_key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version or ''}"


@dataclass
class Model:
    """Effective build model for one project."""

    group_id: str = ""
    artifact_id: str = ""
    version: str = ""
    packaging: str = "jar"
    dependencies: list[Dependency] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def add_dependency(self, dependency: Dependency) -> None:
        self.dependencies.append(dependency)

    def dependency_by_key(self, group_id: str, artifact_id: str) -> Optional[Dependency]:
        for d in self.dependencies:
            if d.group_id == group_id and d.artifact_id == artifact_id:
                return d
        return None


@dataclass
class ModelBuildingRequest:
    """Request context handed to model modifiers by the host."""

    properties: dict[str, str] = field(default_factory=dict)
    pom_file: Optional[Path] = None


@dataclass
class ModelBuildingResult:
    """Result of model building; modifiers rewrite the effective model in place."""

    effective_model: Model = field(default_factory=Model)
