"""Model-building extension point and the dependency version override modifier."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Optional

from depoverride.config import OverrideSettings
from depoverride.logging import get_logger
from depoverride.model.schema import ModelBuildingRequest, ModelBuildingResult
from depoverride.overrides.properties import properties_by_prefix
from depoverride.overrides.rewriter import ModelRewriter
from depoverride.overrides.table import DEFAULT_SEPARATOR, OverrideTableBuilder

log = get_logger("extension")


class ModelBuildingModifier(ABC):
    """Something the host runs against every built model."""

    @abstractmethod
    def modify_build(self, request: ModelBuildingRequest, result: ModelBuildingResult) -> ModelBuildingResult:
        """Rewrite ``result`` and return it.

        Args:
            request: The host's request context, passed through untouched.
            result: Holds the effective model to modify in place.
        """
        ...


class VersionOverridePropertyUser:
    """Base for modifiers driven by ``<prefix><sep><group><sep><artifact>`` properties."""

    PROPERTY_NAME_SEPARATOR = DEFAULT_SEPARATOR

    def __init__(self, settings: Optional[OverrideSettings] = None):
        self.settings = settings or OverrideSettings(separator=self.PROPERTY_NAME_SEPARATOR)

    @property
    def separator(self) -> str:
        return self.settings.separator


class DepVersionOverride(VersionOverridePropertyUser, ModelBuildingModifier):
    """Overrides dependency versions in a model.

    The override table is built once, from the property snapshot given at
    construction, and serves exactly one ``modify_build`` call.
    """

    def __init__(self, properties: Mapping[str, str], settings: Optional[OverrideSettings] = None):
        super().__init__(settings)
        self.builder = OverrideTableBuilder(self.separator)
        self.table = self.builder.build(properties_by_prefix(properties, self.settings.prefix))
        self.rewriter = ModelRewriter()
        self._applied = False

    def modify_build(self, request: ModelBuildingRequest, result: ModelBuildingResult) -> ModelBuildingResult:
        if self._applied:
            raise RuntimeError("DepVersionOverride tables serve a single model; build a new instance")
        self._applied = True

        self.rewriter.apply(result.effective_model.dependencies, self.table)
        report = self.rewriter.report
        log.info(
            f"Applied version overrides: {len(report.changed)} changed, "
            f"{len(report.unchanged)} already matching, {len(report.injected)} added",
            extra={
                "override_count": len(self.table),
                "dependency_count": len(result.effective_model.dependencies),
            },
        )
        return result


def run_modifiers(
    request: ModelBuildingRequest,
    result: ModelBuildingResult,
    modifiers: Iterable[ModelBuildingModifier],
) -> ModelBuildingResult:
    """Run each modifier over the result in order, as the host does."""
    for modifier in modifiers:
        result = modifier.modify_build(request, result)
    return result
