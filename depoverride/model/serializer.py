"""Deterministic JSON export for build models."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from depoverride.model.schema import Model


def serialize_model(model: Model) -> str:
    """Serialize a Model to deterministic JSON.

    Keys are sorted; dependencies keep their model order, which is significant
    (injected dependencies come last).
    """
    data = _model_to_dict(model)
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)


def serialize_model_to_dict(model: Model) -> dict[str, Any]:
    """Serialize a Model to a dict (for further processing)."""
    return _model_to_dict(model)


def _model_to_dict(model: Model) -> dict[str, Any]:
    return {
        "artifact_id": model.artifact_id,
        "dependencies": [asdict(d) for d in model.dependencies],
        "group_id": model.group_id,
        "metadata": dict(sorted(model.metadata.items())),
        "packaging": model.packaging,
        "version": model.version,
    }
