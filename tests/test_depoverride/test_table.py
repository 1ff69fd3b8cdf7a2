"""Tests for override key parsing and table construction."""

import logging

import pytest

from depoverride.overrides.table import (
    MalformedOverrideKey,
    OverrideEntry,
    OverrideKey,
    OverrideTable,
    OverrideTableBuilder,
    build_override_table,
    parse_override_key,
)


class TestParseOverrideKey:
    def test_group_and_artifact(self):
        key = parse_override_key("org.apache.maven.plugins:maven-compiler-plugin")
        assert key == OverrideKey("org.apache.maven.plugins", "maven-compiler-plugin")
        assert str(key) == "org.apache.maven.plugins:maven-compiler-plugin"

    @pytest.mark.parametrize("name", ["onlyonepart", "a:b:c", ":junit", "junit:", ""])
    def test_malformed(self, name):
        with pytest.raises(MalformedOverrideKey) as exc_info:
            parse_override_key(name)
        assert exc_info.value.property_name == name

    def test_custom_separator(self):
        key = parse_override_key("junit/junit", separator="/")
        assert key == OverrideKey("junit", "junit")

    def test_keys_are_hashable(self):
        assert len({OverrideKey("a", "b"), OverrideKey("a", "b")}) == 1


class TestOverrideTable:
    def test_put_and_get(self):
        table = OverrideTable()
        table.put(OverrideEntry(OverrideKey("junit", "junit"), "4.10"))
        assert table.get("junit", "junit").version == "4.10"
        assert table.get("junit", "other") is None
        assert table.get("nope", "junit") is None
        assert OverrideKey("junit", "junit") in table
        assert "junit:junit" not in table

    def test_last_write_wins(self):
        table = OverrideTable()
        table.put(OverrideEntry(OverrideKey("junit", "junit"), "4.10"))
        table.put(OverrideEntry(OverrideKey("junit", "junit"), "4.11"))
        assert len(table) == 1
        assert table.get("junit", "junit").version == "4.11"

    def test_entries_and_unconsumed(self):
        table = OverrideTable()
        first = OverrideEntry(OverrideKey("g", "a"), "1")
        second = OverrideEntry(OverrideKey("g", "b"), "2")
        table.put(first)
        table.put(second)
        first.mark_consumed()
        assert list(table.entries()) == [first, second]
        assert table.unconsumed() == [second]

    def test_empty_table_is_falsy(self):
        table = OverrideTable()
        assert not table
        assert len(table) == 0
        assert table.unconsumed() == []


class TestOverrideTableBuilder:
    def test_build_valid(self):
        table = build_override_table({"junit:junit": "4.10", "org.slf4j:slf4j-api": "2.0.9"})
        assert len(table) == 2
        entry = table.get("org.slf4j", "slf4j-api")
        assert entry.version == "2.0.9"
        assert entry.consumed is False

    def test_single_part_key_is_skipped(self, caplog):
        caplog.set_level(logging.DEBUG, logger="depoverride")
        builder = OverrideTableBuilder()
        table = builder.build({"onlyonepart": "1.0"})
        assert len(table) == 0
        assert builder.malformed == ["onlyonepart"]
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "onlyonepart" in errors[0].getMessage()

    def test_malformed_does_not_stop_processing(self):
        builder = OverrideTableBuilder()
        table = builder.build({"a:b:c": "1", "junit:junit": "4.10", "bad": "2"})
        assert len(table) == 1
        assert table.get("junit", "junit").version == "4.10"
        assert sorted(builder.malformed) == ["a:b:c", "bad"]

    def test_empty_input(self, caplog):
        caplog.set_level(logging.DEBUG, logger="depoverride")
        table = build_override_table({})
        assert table is not None
        assert len(table) == 0
        assert any(r.getMessage() == "No version overrides." for r in caplog.records)

    def test_malformed_record_resets_between_builds(self):
        builder = OverrideTableBuilder()
        builder.build({"bad": "1"})
        builder.build({"junit:junit": "4.10"})
        assert builder.malformed == []

    def test_each_build_returns_fresh_entries(self):
        properties = {"junit:junit": "4.10"}
        first = build_override_table(properties)
        first.get("junit", "junit").mark_consumed()
        second = build_override_table(properties)
        assert second.get("junit", "junit").consumed is False
