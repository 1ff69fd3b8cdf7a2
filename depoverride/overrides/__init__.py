"""Override table construction, application and validation."""

from depoverride.overrides.table import (
    MalformedOverrideKey,
    OverrideEntry,
    OverrideKey,
    OverrideTable,
    OverrideTableBuilder,
    build_override_table,
)
from depoverride.overrides.rewriter import ModelRewriter, RewriteReport, VersionChange
from depoverride.overrides.properties import parse_property_args, properties_by_prefix
from depoverride.overrides.loader import load_overrides
from depoverride.overrides.validator import ValidationIssue, validate_overrides

__all__ = [
    "MalformedOverrideKey",
    "ModelRewriter",
    "OverrideEntry",
    "OverrideKey",
    "OverrideTable",
    "OverrideTableBuilder",
    "RewriteReport",
    "ValidationIssue",
    "VersionChange",
    "build_override_table",
    "load_overrides",
    "parse_property_args",
    "properties_by_prefix",
    "validate_overrides",
]
