"""
Configure use case — run every wrap call of a build file, then finalize.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fluidwrap.core.graph import BuildGraph
from fluidwrap.core.models.build_file import BuildFile
from fluidwrap.core.use_cases.wrap_ui import WrapResult, wrap_ui

logger = logging.getLogger(__name__)


@dataclass
class ConfigureResult:
    """Result of a full configuration pass."""

    graph: BuildGraph
    results: list[WrapResult] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return self.graph.warnings

    def to_dict(self) -> dict:
        return {
            "source_dir": self.graph.current_source_dir,
            "binary_dir": self.graph.current_binary_dir,
            "include_directories": self.graph.include_directories,
            "wrap_ui": [r.to_dict() for r in self.results],
            "warnings": self.warnings,
        }


def run_configure(build_file: BuildFile, graph: BuildGraph) -> ConfigureResult:
    """Process ``build_file.wrap_ui`` in order and close configuration.

    Errors from any call propagate; deferred checks only run once every
    call has been registered.
    """
    result = ConfigureResult(graph=graph)

    for call in build_file.wrap_ui:
        result.results.append(wrap_ui(graph, call.as_args()))

    graph.finalize()
    logger.info(
        "Configured %d wrap call(s), %d warning(s)",
        len(result.results), len(result.warnings),
    )
    return result
