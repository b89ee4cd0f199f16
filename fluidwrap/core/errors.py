"""
Error types — the fatal configuration failures of a wrap call.

Anything raised from here aborts the current command. Advisory problems
(a target that was never created, for instance) are not exceptions: they
go through the build graph's message sink instead.
"""

from __future__ import annotations


class FluidWrapError(Exception):
    """Base class for all fatal fluidwrap errors."""


class ArgumentCountError(FluidWrapError):
    """Raised when a wrap call gets fewer than a target and one source."""


class MissingDefinitionError(FluidWrapError):
    """Raised when a required definition is absent from the scope."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Required definition '{name}' is not set.")


class DuplicateOutputError(FluidWrapError):
    """Raised when two rules would claim the same output path."""

    def __init__(self, output: str, message: str = ""):
        self.output = output
        super().__init__(message or f"A rule for output '{output}' is already registered.")
