"""Tests for applying override tables to dependency lists."""

import logging

from depoverride.model.schema import Dependency
from depoverride.overrides.properties import properties_by_prefix
from depoverride.overrides.rewriter import ModelRewriter
from depoverride.overrides.table import build_override_table


def _table(properties):
    return build_override_table(properties_by_prefix(properties, "version:"))


def _coords(dependencies):
    return [(d.group_id, d.artifact_id, d.version) for d in dependencies]


class TestOverrideExisting:
    def test_version_changed(self, dependencies, caplog):
        caplog.set_level(logging.DEBUG, logger="depoverride")
        table = _table({"version:junit:junit": "4.10"})

        result = ModelRewriter().apply(dependencies, table)

        assert result is dependencies
        assert _coords(result) == [
            ("org.example", "libX", "1.0"),
            ("junit", "junit", "4.10"),
        ]
        changes = [r for r in caplog.records if "was overridden from" in r.getMessage()]
        assert len(changes) == 1
        assert changes[0].old_version == "4.8.1"
        assert changes[0].new_version == "4.10"
        assert not any("New dependency added" in r.getMessage() for r in caplog.records)

    def test_same_version_is_noop(self, dependencies, caplog):
        caplog.set_level(logging.DEBUG, logger="depoverride")
        table = _table({"version:junit:junit": "4.8.1"})
        rewriter = ModelRewriter()

        rewriter.apply(dependencies, table)

        assert dependencies[1].version == "4.8.1"
        assert rewriter.report.changed == []
        assert rewriter.report.unchanged == [dependencies[1]]
        assert any("was the same as the override version" in r.getMessage() for r in caplog.records)

    def test_exact_string_comparison(self):
        deps = [Dependency("g", "a", "1.0")]
        ModelRewriter().apply(deps, _table({"version:g:a": "1.0.0"}))
        assert deps[0].version == "1.0.0"

    def test_missing_version_always_overridden(self):
        deps = [Dependency("org.slf4j", "slf4j-api", None)]
        rewriter = ModelRewriter()
        rewriter.apply(deps, _table({"version:org.slf4j:slf4j-api": "2.0.9"}))
        assert len(deps) == 1
        assert deps[0].version == "2.0.9"
        assert rewriter.report.changed[0].old_version is None

    def test_group_match_but_other_artifact(self, dependencies):
        table = _table({"version:junit:junit-dep": "4.10"})
        ModelRewriter().apply(dependencies, table)
        assert dependencies[1].version == "4.8.1"
        assert _coords(dependencies)[-1] == ("junit", "junit-dep", "4.10")

    def test_other_fields_preserved(self):
        deps = [Dependency("junit", "junit", "4.8.1", scope="test", classifier="tests")]
        ModelRewriter().apply(deps, _table({"version:junit:junit": "4.10"}))
        assert deps[0].scope == "test"
        assert deps[0].classifier == "tests"


class TestInjectMissing:
    def test_injected_dependency_appended(self):
        deps = [Dependency("org.example", "libX", "1.0")]
        rewriter = ModelRewriter()

        rewriter.apply(deps, _table({"version:com.foo:newlib": "2.0"}))

        assert _coords(deps) == [
            ("org.example", "libX", "1.0"),
            ("com.foo", "newlib", "2.0"),
        ]
        assert rewriter.report.injected == [deps[1]]

    def test_no_duplicate_on_second_table(self):
        deps = [Dependency("org.example", "libX", "1.0")]
        properties = {"version:com.foo:newlib": "2.0"}

        ModelRewriter().apply(deps, _table(properties))
        ModelRewriter().apply(deps, _table(properties))

        assert len(deps) == 2
        assert [d.artifact_id for d in deps].count("newlib") == 1

    def test_injected_after_all_originals(self, dependencies):
        table = _table({
            "version:a.b:one": "1",
            "version:junit:junit": "4.10",
            "version:c.d:two": "2",
        })
        ModelRewriter().apply(dependencies, table)

        assert len(dependencies) == 4
        assert _coords(dependencies)[:2] == [
            ("org.example", "libX", "1.0"),
            ("junit", "junit", "4.10"),
        ]
        assert set(_coords(dependencies)[2:]) == {("a.b", "one", "1"), ("c.d", "two", "2")}

    def test_empty_list(self):
        deps = []
        ModelRewriter().apply(deps, _table({"version:g:a": "1"}))
        assert _coords(deps) == [("g", "a", "1")]


class TestPassInvariants:
    def test_all_entries_consumed(self, dependencies):
        table = _table({
            "version:junit:junit": "4.10",
            "version:org.example:libX": "1.0",
            "version:com.foo:newlib": "2.0",
        })
        ModelRewriter().apply(dependencies, table)
        assert all(e.consumed for e in table.entries())
        assert table.unconsumed() == []

    def test_length_grows_by_unmatched_entries(self, dependencies):
        table = _table({
            "version:junit:junit": "4.10",
            "version:com.foo:newlib": "2.0",
            "version:com.foo:other": "3.0",
        })
        ModelRewriter().apply(dependencies, table)
        assert len(dependencies) == 4

    def test_idempotent_on_reapply(self, dependencies):
        properties = {"version:junit:junit": "4.10"}
        ModelRewriter().apply(dependencies, _table(properties))

        table = _table(properties)
        rewriter = ModelRewriter()
        rewriter.apply(dependencies, table)

        assert rewriter.report.changed == []
        assert rewriter.report.touched == 0
        assert dependencies[1].version == "4.10"
        assert all(e.consumed for e in table.entries())

    def test_empty_table_leaves_list_untouched(self, dependencies):
        before = _coords(dependencies)
        ModelRewriter().apply(dependencies, _table({}))
        assert _coords(dependencies) == before

    def test_report_reset_per_apply(self, dependencies):
        rewriter = ModelRewriter()
        rewriter.apply(dependencies, _table({"version:com.foo:newlib": "2.0"}))
        rewriter.apply(dependencies, _table({}))
        assert rewriter.report.injected == []
