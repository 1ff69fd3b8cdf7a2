"""Check override properties against a model before rewriting it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from depoverride.config import OverrideSettings
from depoverride.model.schema import Model
from depoverride.overrides.properties import properties_by_prefix
from depoverride.overrides.table import OverrideTableBuilder


@dataclass
class ValidationIssue:
    """A validation issue found in overrides."""

    level: str  # "info", "warning" or "error"
    message: str
    override_key: str = ""


def validate_overrides(
    properties: Mapping[str, str],
    model: Model,
    settings: Optional[OverrideSettings] = None,
) -> list[ValidationIssue]:
    """Report what the overrides would do to ``model`` without touching it.

    Returns a list of issues: malformed keys (error), overrides with no matching
    dependency that would be injected (warning), overrides already satisfied
    (info).
    """
    settings = settings or OverrideSettings()
    issues = []

    builder = OverrideTableBuilder(settings.separator)
    table = builder.build(properties_by_prefix(properties, settings.prefix))

    for name in builder.malformed:
        issues.append(
            ValidationIssue(
                level="error",
                message=f"Malformed override key: '{name}' is not <groupId>{settings.separator}<artifactId>",
                override_key=f"{settings.prefix}{name}",
            )
        )

    for entry in table.entries():
        override_key = f"{settings.prefix}{entry.group_id}{settings.separator}{entry.artifact_id}"
        dependency = model.dependency_by_key(entry.group_id, entry.artifact_id)
        if dependency is None:
            issues.append(
                ValidationIssue(
                    level="warning",
                    message=f"No dependency {entry.key} in model, it will be added at {entry.version}",
                    override_key=override_key,
                )
            )
        elif dependency.version == entry.version:
            issues.append(
                ValidationIssue(
                    level="info",
                    message=f"Dependency {entry.key} is already at {entry.version}",
                    override_key=override_key,
                )
            )

    return issues
