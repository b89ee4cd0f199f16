"""
Generators — register code-generation rules in a build graph.

Each generator module exposes a ``generate()`` function that registers
custom commands and returns the generated source records.
"""
