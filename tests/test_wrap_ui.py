"""
Tests for the wrap_ui and configure use cases.
"""

import pytest

from fluidwrap.core.errors import ArgumentCountError, MissingDefinitionError
from fluidwrap.core.graph import BuildGraph
from fluidwrap.core.models import BuildFile
from fluidwrap.core.use_cases.configure import run_configure
from fluidwrap.core.use_cases.wrap_ui import wrap_ui


class TestWrapUi:
    def test_scenario(self, graph: BuildGraph):
        graph.add_target("app")
        result = wrap_ui(graph, ["app", "win.fl", "dlg.fl"])

        assert result.variable == "app_FLTK_UI_SRCS"
        assert result.value == "/build/gui/win.cxx;/build/gui/dlg.cxx"
        assert graph.get_definition("app_FLTK_UI_SRCS") == result.value
        assert result.generated_paths == ["/build/gui/win.cxx", "/build/gui/dlg.cxx"]
        assert len(result.rules) == 4
        assert len(graph.deferred_actions) == 1

        graph.finalize()
        assert graph.warnings == []

    def test_too_few_arguments(self, graph: BuildGraph):
        with pytest.raises(ArgumentCountError, match="incorrect number of arguments"):
            wrap_ui(graph, ["app"])
        assert graph.include_directories == []
        assert graph.deferred_actions == []

    def test_no_arguments(self, graph: BuildGraph):
        with pytest.raises(ArgumentCountError):
            wrap_ui(graph, [])

    def test_missing_fluid_executable(self, bare_graph: BuildGraph):
        with pytest.raises(MissingDefinitionError, match="FLTK_FLUID_EXECUTABLE"):
            wrap_ui(bare_graph, ["app", "win.fl"])
        assert bare_graph.custom_commands == []

    def test_missing_target_still_publishes(self, graph: BuildGraph):
        result = wrap_ui(graph, ["missing", "win.fl"])
        graph.finalize()

        assert result.value == "/build/gui/win.cxx"
        assert graph.get_definition("missing_FLTK_UI_SRCS") == "/build/gui/win.cxx"
        assert len(graph.warnings) == 1
        assert "missing" in graph.warnings[0]
        assert "/src" in graph.warnings[0]

    def test_target_created_after_wrap_call(self, graph: BuildGraph):
        wrap_ui(graph, ["late", "win.fl"])
        graph.add_target("late")
        graph.finalize()
        assert graph.warnings == []

    def test_to_dict(self, graph: BuildGraph):
        data = wrap_ui(graph, ["app", "win.fl"]).to_dict()
        assert data["target"] == "app"
        assert data["generated"] == ["/build/gui/win.cxx"]
        assert data["rules"][1]["outputs"] == ["/build/gui/win.h"]


class TestRunConfigure:
    def test_runs_all_calls_then_finalizes(self, graph: BuildGraph):
        build_file = BuildFile.model_validate({
            "wrap_ui": [
                {"target": "app", "sources": ["win.fl"]},
                {"target": "tool", "sources": ["dlg.fl"]},
            ],
        })
        graph.add_target("app")
        graph.add_target("tool")

        result = run_configure(build_file, graph)

        assert [r.target for r in result.results] == ["app", "tool"]
        assert graph.configured
        assert result.warnings == []

    def test_warns_for_each_missing_target(self, graph: BuildGraph):
        build_file = BuildFile.model_validate({
            "wrap_ui": [
                {"target": "ghost", "sources": ["win.fl"]},
                {"target": "phantom", "sources": ["dlg.fl"]},
            ],
        })
        result = run_configure(build_file, graph)
        assert len(result.warnings) == 2
        assert "ghost" in result.warnings[0]
        assert "phantom" in result.warnings[1]

    def test_to_dict(self, graph: BuildGraph):
        build_file = BuildFile.model_validate({"wrap_ui": [{"target": "app", "sources": ["w.fl"]}]})
        data = run_configure(build_file, graph).to_dict()
        assert data["binary_dir"] == "/build/gui"
        assert data["include_directories"] == ["/build/gui"]
        assert data["wrap_ui"][0]["value"] == "/build/gui/w.cxx"
        assert len(data["warnings"]) == 1
