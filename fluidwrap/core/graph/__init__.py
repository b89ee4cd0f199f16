"""
Build graph — in-memory stand-in for the build-graph engine.

The wrapper only talks to the engine through ``BuildGraph``; the engine
stores sources, rules, definitions and targets, and owns the deferred
action queue. It never executes a rule.
"""

from fluidwrap.core.graph.build_graph import BuildGraph, DeferredHandler
from fluidwrap.core.graph.source_table import SourceTable

__all__ = ["BuildGraph", "DeferredHandler", "SourceTable"]
