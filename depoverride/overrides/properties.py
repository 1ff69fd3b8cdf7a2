"""Property-source helpers: select override properties from a property snapshot."""

from __future__ import annotations

from typing import Iterable, Mapping

from depoverride.overrides.table import DEFAULT_SEPARATOR

VERSION_PROPERTY_NAME = "version"


def override_prefix(name: str = VERSION_PROPERTY_NAME, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return the property prefix marking an override, e.g. ``version:``."""
    return f"{name}{separator}"


def properties_by_prefix(properties: Mapping[str, str], prefix: str) -> dict[str, str]:
    """Return the properties whose name starts with ``prefix``, prefix removed.

    ``{"version:junit:junit": "4.10", "user.home": "/root"}`` with prefix
    ``version:`` gives ``{"junit:junit": "4.10"}``.
    """
    return {
        name[len(prefix):]: value
        for name, value in properties.items()
        if name.startswith(prefix)
    }


def parse_property_args(args: Iterable[str]) -> dict[str, str]:
    """Parse ``-D``-style ``name=value`` strings into a mapping.

    The value is everything after the first ``=``; a bare ``name`` maps to an
    empty string. Later duplicates replace earlier ones.
    """
    properties: dict[str, str] = {}
    for arg in args:
        if arg.startswith("-D"):
            arg = arg[2:]
        name, _, value = arg.partition("=")
        if not name:
            raise ValueError(f"Property assignment without a name: '{arg}'")
        properties[name] = value
    return properties
