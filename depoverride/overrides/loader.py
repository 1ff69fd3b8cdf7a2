"""Load override properties from YAML files."""

from __future__ import annotations

from pathlib import Path

import yaml


def load_overrides(path: Path) -> dict[str, str]:
    """Load override properties from a YAML file.

    Expected format (full property names, prefix included):
    ```yaml
    version:junit:junit: 4.10
    version:org.slf4j:slf4j-api: 2.0.9
    ```

    Every scalar is read as a string, so ``4.10`` stays ``"4.10"``.

    Raises:
        ValueError: the document is not a mapping.
    """
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.load(f, Loader=yaml.BaseLoader)
    if not data:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Overrides file {path} must contain a mapping, got {type(data).__name__}")
    overrides: dict[str, str] = {}
    for name, value in data.items():
        if isinstance(value, (dict, list)):
            raise ValueError(f"Override '{name}' in {path} must be a version string")
        overrides[str(name)] = str(value)
    return overrides
