"""
Target model — a named build product declared in the build description.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Target(BaseModel):
    """A build target. Aliases live in the graph, not on the target."""

    name: str
    sources: list[str] = Field(default_factory=list)

    def add_sources(self, paths: list[str]) -> None:
        for path in paths:
            if path not in self.sources:
                self.sources.append(path)
