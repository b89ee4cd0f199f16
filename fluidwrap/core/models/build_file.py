"""
Build file model — the YAML build description fed to the CLI.

Loaded from fluidwrap.yml, this declares the scope the wrapper runs in:
directories, definitions, targets, per-file properties, and the wrap
calls to make.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class TargetDecl(BaseModel):
    """A target declared in the build file."""

    name: str
    sources: list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)


class WrapCall(BaseModel):
    """One FLTK_WRAP_UI invocation: a target and its .fl sources."""

    target: str
    sources: list[str] = Field(default_factory=list)

    def as_args(self) -> list[str]:
        """The raw argument list the command dispatcher expects."""
        return [self.target, *self.sources]


class BuildFile(BaseModel):
    """Root build description.

    ``source_dir`` and ``binary_dir`` may be relative; the loader
    resolves them against the directory holding the file.
    """

    source_dir: str | None = None
    binary_dir: str | None = None

    definitions: dict[str, str] = Field(default_factory=dict)
    targets: list[TargetDecl] = Field(default_factory=list)
    sources: dict[str, dict[str, Any]] = Field(default_factory=dict)
    wrap_ui: list[WrapCall] = Field(default_factory=list)

    @field_validator("definitions", mode="before")
    @classmethod
    def _stringify_definitions(cls, value: Any) -> Any:
        if isinstance(value, dict):
            out = {}
            for k, v in value.items():
                if isinstance(v, bool):
                    v = "ON" if v else "OFF"
                out[str(k)] = "" if v is None else str(v)
            return out
        return value
