"""
Shared test fixtures and configuration.
"""

import pytest

from fluidwrap.core.graph import BuildGraph

FLUID = "/usr/bin/fluid"


@pytest.fixture
def graph() -> BuildGraph:
    """A scope at /src → /build/gui with the fluid executable defined."""
    g = BuildGraph(source_dir="/src", binary_dir="/build/gui")
    g.add_definition("FLTK_FLUID_EXECUTABLE", FLUID)
    return g


@pytest.fixture
def bare_graph() -> BuildGraph:
    """A scope with no definitions at all."""
    return BuildGraph(source_dir="/src", binary_dir="/build/gui")
