"""
Wrap UI use case — the FLTK_WRAP_UI command.

Takes the raw argument list ``[target, source, ...]``, resolves the
fluid executable from the scope's definitions, and hands off to the
Fluid generator. Publishing and the deferred target check happen here
so every caller gets the same contract.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from fluidwrap.core.errors import ArgumentCountError
from fluidwrap.core.graph import BuildGraph
from fluidwrap.core.models.rule import CustomCommandRule
from fluidwrap.core.models.source import SourceRecord
from fluidwrap.core.services.generators import fluid

logger = logging.getLogger(__name__)


@dataclass
class WrapResult:
    """Outcome of one wrap call."""

    target: str = ""
    variable: str = ""
    value: str = ""
    generated: list[SourceRecord] = field(default_factory=list)
    rules: list[CustomCommandRule] = field(default_factory=list)

    @property
    def generated_paths(self) -> list[str]:
        return [r.full_path for r in self.generated]

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "variable": self.variable,
            "value": self.value,
            "generated": self.generated_paths,
            "rules": [r.model_dump(mode="json") for r in self.rules],
        }


def wrap_ui(graph: BuildGraph, args: Sequence[str]) -> WrapResult:
    """Run FLTK_WRAP_UI against ``graph``.

    Args:
        graph: The configuration scope.
        args: ``[target, source1, source2, ...]``.

    Returns:
        WrapResult with the published variable and registered rules.

    Raises:
        ArgumentCountError: If fewer than two arguments are given.
        MissingDefinitionError: If FLTK_FLUID_EXECUTABLE is not defined.
        DuplicateOutputError: If two outputs would collide.
    """
    if len(args) < 2:
        raise ArgumentCountError("called with incorrect number of arguments")

    tool_path = graph.get_required_definition(fluid.FLUID_EXECUTABLE_VAR)
    target_name, sources = args[0], list(args[1:])

    generated, rules = fluid.generate(
        graph,
        target_name,
        sources,
        output_dir=graph.current_binary_dir,
        tool_path=tool_path,
        source_dir=graph.current_source_dir,
    )

    value = fluid.publish_sources(graph, target_name, generated)
    fluid.schedule_target_check(graph, target_name)

    return WrapResult(
        target=target_name,
        variable=fluid.sources_variable_name(target_name),
        value=value,
        generated=generated,
        rules=rules,
    )
