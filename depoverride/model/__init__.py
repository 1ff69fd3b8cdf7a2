"""Build model types and POM reading/writing."""

from depoverride.model.schema import (
    Dependency,
    Model,
    ModelBuildingRequest,
    ModelBuildingResult,
)
from depoverride.model.pom import PomError, load_pom, render_pom
from depoverride.model.serializer import serialize_model, serialize_model_to_dict

__all__ = [
    "Dependency",
    "Model",
    "ModelBuildingRequest",
    "ModelBuildingResult",
    "PomError",
    "load_pom",
    "render_pom",
    "serialize_model",
    "serialize_model_to_dict",
]
