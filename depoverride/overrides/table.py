"""Override table: parse group:artifact=version properties into a lookup table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional

from depoverride.logging import get_logger

log = get_logger("table")

DEFAULT_SEPARATOR = ":"


class MalformedOverrideKey(ValueError):
    """A property name that does not split into exactly group and artifact."""

    def __init__(self, property_name: str, separator: str = DEFAULT_SEPARATOR):
        super().__init__(
            f"Bad version override property name '{property_name}', "
            f"expected <groupId>{separator}<artifactId>"
        )
        self.property_name = property_name


@dataclass(frozen=True)
class OverrideKey:
    """Group and artifact coordinates identifying one override."""

    group_id: str
    artifact_id: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass
class OverrideEntry:
    """Desired version for one coordinate pair, plus whether a pass has used it."""

    key: OverrideKey
    version: str
    consumed: bool = False

    @property
    def group_id(self) -> str:
        return self.key.group_id

    @property
    def artifact_id(self) -> str:
        return self.key.artifact_id

    def mark_consumed(self) -> None:
        self.consumed = True


class OverrideTable:
    """Two-level lookup: group id -> artifact id -> OverrideEntry.

    Holds at most one entry per coordinate pair; a later ``put`` for the same
    pair replaces the earlier one. A table is meant for a single rewrite pass.
    """

    def __init__(self) -> None:
        self._groups: dict[str, dict[str, OverrideEntry]] = {}

    def put(self, entry: OverrideEntry) -> None:
        self._groups.setdefault(entry.group_id, {})[entry.artifact_id] = entry

    def group(self, group_id: str) -> Optional[dict[str, OverrideEntry]]:
        return self._groups.get(group_id)

    def get(self, group_id: str, artifact_id: str) -> Optional[OverrideEntry]:
        artifacts = self._groups.get(group_id)
        if artifacts is None:
            return None
        return artifacts.get(artifact_id)

    def entries(self) -> Iterator[OverrideEntry]:
        for artifacts in self._groups.values():
            yield from artifacts.values()

    def unconsumed(self) -> list[OverrideEntry]:
        return [e for e in self.entries() if not e.consumed]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, OverrideKey):
            return False
        return self.get(key.group_id, key.artifact_id) is not None

    def __len__(self) -> int:
        return sum(len(artifacts) for artifacts in self._groups.values())

    def __iter__(self) -> Iterator[OverrideEntry]:
        return self.entries()

    def __repr__(self) -> str:
        return f"OverrideTable({', '.join(f'{e.key}={e.version}' for e in self.entries())})"


def parse_override_key(property_name: str, separator: str = DEFAULT_SEPARATOR) -> OverrideKey:
    """Split ``group<sep>artifact`` into an OverrideKey.

    Raises:
        MalformedOverrideKey: the name has other than two parts, or an empty part.
    """
    parts = property_name.split(separator)
    if len(parts) != 2 or not all(parts):
        raise MalformedOverrideKey(property_name, separator)
    return OverrideKey(group_id=parts[0], artifact_id=parts[1])


class OverrideTableBuilder:
    """Builds an OverrideTable from prefix-stripped override properties."""

    def __init__(self, separator: str = DEFAULT_SEPARATOR):
        self.separator = separator
        self.malformed: list[str] = []

    def build(self, properties: Mapping[str, str]) -> OverrideTable:
        """Parse ``{"group:artifact": "version"}`` pairs into a table.

        Malformed names are logged and skipped; they never abort the build.

        Args:
            properties: Override properties with the prefix already removed.

        Returns:
            A populated table, empty when no valid override was found.
        """
        table = OverrideTable()
        self.malformed = []

        for property_name, version in properties.items():
            try:
                key = parse_override_key(property_name, self.separator)
            except MalformedOverrideKey as e:
                self.malformed.append(property_name)
                log.error(
                    f"Detected bad version override property. Name: {property_name}",
                    extra={"property_name": property_name, "error": str(e)},
                )
                continue

            log.debug(
                f"Detected version override property. Group: {key.group_id}  "
                f"ArtifactID: {key.artifact_id}  Target Version: {version}",
                extra={"group_id": key.group_id, "artifact_id": key.artifact_id, "new_version": version},
            )
            table.put(OverrideEntry(key=key, version=version))

        if not table:
            log.debug("No version overrides.")
        else:
            log.debug(f"Loaded {len(table)} version overrides", extra={"override_count": len(table)})

        return table


def build_override_table(properties: Mapping[str, str], separator: str = DEFAULT_SEPARATOR) -> OverrideTable:
    """Build a table in one call, discarding the malformed-key record."""
    return OverrideTableBuilder(separator).build(properties)
