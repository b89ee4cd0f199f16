"""
Tests for the in-memory build graph — sources, rules, targets, deferral.
"""

import logging

import pytest

from fluidwrap.core.errors import DuplicateOutputError, FluidWrapError, MissingDefinitionError
from fluidwrap.core.graph import BuildGraph, SourceTable
from fluidwrap.core.models import DeferredAction


class TestSourceTable:
    def test_relative_resolves_against_base(self):
        table = SourceTable("/src")
        assert table.resolve("ui/win.fl") == "/src/ui/win.fl"
        assert table.resolve("/abs/x.fl") == "/abs/x.fl"

    def test_get_does_not_create(self):
        table = SourceTable("/src")
        assert table.get("win.fl") is None
        assert len(table) == 0

    def test_get_or_create_is_stable(self):
        table = SourceTable("/src")
        a = table.get_or_create("win.fl")
        b = table.get_or_create("/src/win.fl")
        assert a is b
        assert a.full_path == "/src/win.fl"
        assert "win.fl" in table
        assert list(table) == [a]


class TestCustomCommands:
    def test_register_and_lookup(self, graph: BuildGraph):
        rule = graph.add_custom_command(["/build/gui/a.cxx"], ["/src/a.fl"], ["fluid"])
        assert graph.rule_for("/build/gui/a.cxx") is rule
        assert graph.custom_commands == [rule]
        assert graph.sources.get("/build/gui/a.cxx").generated is True

    def test_duplicate_output_rejected(self, graph: BuildGraph):
        graph.add_custom_command(["/build/gui/a.cxx"], [], ["fluid"])
        with pytest.raises(DuplicateOutputError):
            graph.add_custom_command(["/build/gui/a.cxx"], [], ["fluid"])
        assert len(graph.custom_commands) == 1


class TestDefinitionsAndIncludes:
    def test_required_definition(self, graph: BuildGraph):
        assert graph.get_required_definition("FLTK_FLUID_EXECUTABLE") == "/usr/bin/fluid"

    def test_missing_required_definition(self, bare_graph: BuildGraph):
        with pytest.raises(MissingDefinitionError, match="FLTK_FLUID_EXECUTABLE"):
            bare_graph.get_required_definition("FLTK_FLUID_EXECUTABLE")

    def test_empty_definition_counts_as_missing(self, bare_graph: BuildGraph):
        bare_graph.add_definition("FLTK_FLUID_EXECUTABLE", "")
        with pytest.raises(MissingDefinitionError):
            bare_graph.get_required_definition("FLTK_FLUID_EXECUTABLE")

    def test_include_directories_deduplicated(self, graph: BuildGraph):
        graph.add_include_directories(["/build/gui", "/opt/inc"])
        graph.add_include_directories(["/build/gui"])
        assert graph.include_directories == ["/build/gui", "/opt/inc"]


class TestTargets:
    def test_add_and_find(self, graph: BuildGraph):
        graph.add_target("app", ["main.cxx"])
        graph.add_target("app", ["main.cxx", "extra.cxx"])
        target = graph.find_local_non_alias_target("app")
        assert target is not None
        assert target.sources == ["main.cxx", "extra.cxx"]

    def test_alias_is_not_a_target(self, graph: BuildGraph):
        graph.add_target("app")
        graph.add_alias("app::app", "app")
        assert graph.find_local_non_alias_target("app::app") is None

    def test_alias_to_unknown_target(self, graph: BuildGraph):
        with pytest.raises(FluidWrapError, match="does not exist"):
            graph.add_alias("x::x", "x")


class TestFinalize:
    def test_runs_each_action_once_in_order(self, graph: BuildGraph):
        seen = []
        graph.register_deferred_handler(
            "validate_target_exists", lambda g, a: seen.append((a.target_name, a.state))
        )
        graph.add_deferred_action(DeferredAction(target_name="one"))
        graph.add_deferred_action(DeferredAction(target_name="two"))

        graph.finalize()
        graph.finalize()

        assert seen == [("one", "pending"), ("two", "pending")]
        assert all(a.state == "executed" for a in graph.deferred_actions)
        assert graph.configured

    def test_missing_handler_still_marks_executed(self, graph: BuildGraph):
        action = graph.add_deferred_action(DeferredAction(target_name="x"))
        graph.finalize()
        assert action.done

    def test_raising_handler_does_not_strand_the_queue(self, graph: BuildGraph):
        calls = []

        def handler(g, action):
            calls.append(action.target_name)
            if action.target_name == "a":
                raise RuntimeError("boom")

        graph.register_deferred_handler("validate_target_exists", handler)
        first = graph.add_deferred_action(DeferredAction(target_name="a"))
        second = graph.add_deferred_action(DeferredAction(target_name="b"))

        with pytest.raises(RuntimeError, match="boom"):
            graph.finalize()
        assert first.state == "executed"
        assert second.state == "pending"

        graph.finalize()
        assert calls == ["a", "b"]
        assert second.state == "executed"

    def test_schedule_after_finalize_rejected(self, graph: BuildGraph):
        graph.finalize()
        with pytest.raises(FluidWrapError, match="already finalized"):
            graph.add_deferred_action(DeferredAction(target_name="late"))


class TestMessages:
    def test_warning_sink(self, graph: BuildGraph):
        graph.message("careful")
        graph.message("fyi", level="status")
        assert graph.warnings == ["careful"]
        assert len(graph.messages) == 2

    def test_messages_logged_at_info(self, graph: BuildGraph, caplog):
        with caplog.at_level(logging.INFO, logger="fluidwrap.core.graph.build_graph"):
            graph.message("careful")
        records = [r for r in caplog.records if "careful" in r.getMessage()]
        assert [r.levelno for r in records] == [logging.INFO]
