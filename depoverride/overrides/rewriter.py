"""Apply an override table to a model's dependency list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from depoverride.logging import get_logger
from depoverride.model.schema import Dependency
from depoverride.overrides.table import OverrideTable

log = get_logger("rewriter")


@dataclass
class VersionChange:
    """A dependency whose version was replaced."""

    dependency: Dependency
    old_version: Optional[str]
    new_version: str


@dataclass
class RewriteReport:
    """What one ``apply`` call did."""

    changed: list[VersionChange] = field(default_factory=list)
    unchanged: list[Dependency] = field(default_factory=list)
    injected: list[Dependency] = field(default_factory=list)

    @property
    def touched(self) -> int:
        return len(self.changed) + len(self.injected)


class ModelRewriter:
    """Overrides matching dependency versions, then injects the leftovers."""

    def __init__(self) -> None:
        self.report = RewriteReport()

    def apply(self, dependencies: list[Dependency], table: OverrideTable) -> list[Dependency]:
        """Rewrite ``dependencies`` in place and return the same list.

        Existing dependencies keep their order; overrides that matched nothing
        are appended after them. Every table entry is consumed on return.

        Args:
            dependencies: The model's dependency list (mutated).
            table: Freshly built override table for this pass.

        Returns:
            ``dependencies``.
        """
        self.report = RewriteReport()

        # Override existing
        for dependency in dependencies:
            artifacts = table.group(dependency.group_id)
            if artifacts is None:
                continue
            entry = artifacts.get(dependency.artifact_id)
            if entry is None:
                continue

            current = dependency.version
            if current != entry.version:
                dependency.version = entry.version
                self.report.changed.append(VersionChange(dependency, current, entry.version))
                log.debug(
                    f"Version of ArtifactID {dependency.artifact_id} was overridden "
                    f"from {current} to {entry.version}",
                    extra={
                        "group_id": dependency.group_id,
                        "artifact_id": dependency.artifact_id,
                        "old_version": current,
                        "new_version": entry.version,
                    },
                )
            else:
                self.report.unchanged.append(dependency)
                log.debug(
                    f"Version of ArtifactID {dependency.artifact_id} was the same as "
                    f"the override version (both are {current})",
                    extra={"group_id": dependency.group_id, "artifact_id": dependency.artifact_id},
                )
            entry.mark_consumed()

        # Add dependencies not already in model
        for entry in table.unconsumed():
            dependency = Dependency(
                group_id=entry.group_id,
                artifact_id=entry.artifact_id,
                version=entry.version,
            )
            dependencies.append(dependency)
            entry.mark_consumed()
            self.report.injected.append(dependency)
            log.debug(
                f"New dependency added: {entry.group_id}:{entry.artifact_id}={entry.version}",
                extra={
                    "group_id": entry.group_id,
                    "artifact_id": entry.artifact_id,
                    "new_version": entry.version,
                },
            )

        return dependencies
