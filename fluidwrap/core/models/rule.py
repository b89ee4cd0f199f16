"""
Rule models — what the Fluid wrapper asks the build graph to do.

A ``GeneratedPair`` is the derived path data for one interface file.
A ``CustomCommandRule`` is the declarative build step registered per
output; two of them share one command line for every wrapped file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CustomCommandRule(BaseModel):
    """A command that produces ``outputs`` from ``dependencies``.

    The build graph stores rules; it never runs them.
    """

    outputs: list[str]
    dependencies: list[str] = Field(default_factory=list)
    command_line: list[str]

    @property
    def primary_output(self) -> str:
        return self.outputs[0]


class GeneratedPair(BaseModel):
    """Header/implementation outputs derived from one ``.fl`` source.

    Attributes:
        source:        The source identifier as the caller gave it.
        base_name:     ``<output_dir>/<stem>`` without extension.
        header_path:   ``base_name + ".h"``.
        impl_path:     ``base_name + ".cxx"``.
        original_path: ``<source_dir>/<source>``.
    """

    source: str
    base_name: str
    header_path: str
    impl_path: str
    original_path: str

    def dependencies(self, tool_path: str) -> list[str]:
        """Dependencies shared by both rules: the input, then the tool."""
        return [self.original_path, tool_path]

    def command_line(self, tool_path: str) -> list[str]:
        """The fixed fluid invocation for this pair."""
        return [
            tool_path,
            "-c",                    # batch mode, no GUI
            "-h", self.header_path,
            "-o", self.impl_path,
            self.original_path,
        ]
