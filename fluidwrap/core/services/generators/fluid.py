"""
Fluid generator — rules that turn FLTK ``.fl`` files into C++ sources.

For every interface file not marked ``WRAP_EXCLUDE``, two custom
commands are registered (one per output) that run::

    fluid -c -h <out>/<stem>.h -o <out>/<stem>.cxx <src>/<file>.fl

The generated ``.cxx`` files are published as ``<target>_FLTK_UI_SRCS``
and a deferred check warns if ``<target>`` never gets created.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Sequence

from fluidwrap.core.errors import DuplicateOutputError
from fluidwrap.core.graph import BuildGraph
from fluidwrap.core.models.deferred import VALIDATE_TARGET_EXISTS, DeferredAction
from fluidwrap.core.models.rule import CustomCommandRule, GeneratedPair
from fluidwrap.core.models.source import SourceRecord

logger = logging.getLogger(__name__)

FLUID_EXECUTABLE_VAR = "FLTK_FLUID_EXECUTABLE"
SOURCES_VAR_SUFFIX = "_FLTK_UI_SRCS"
COMMAND_NAME = "FLTK_WRAP_UI"


# ── Paths ───────────────────────────────────────────────────────


def source_stem(src: str) -> str:
    """File name without directory and without its last extension."""
    name = posixpath.basename(src)
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def derive_output_paths(output_dir: str, stem: str) -> tuple[str, str]:
    """Return ``(header_path, impl_path)`` for a stem in ``output_dir``."""
    base = f"{output_dir}/{stem}"
    return f"{base}.h", f"{base}.cxx"


def plan_pairs(
    graph: BuildGraph,
    sources: Sequence[str],
    output_dir: str,
    source_dir: str,
) -> list[GeneratedPair]:
    """Compute the pairs for every included source, in input order.

    Raises:
        DuplicateOutputError: If two sources share a stem, or an output
            already has a rule in ``graph``. Raised before anything is
            registered.
    """
    pairs: list[GeneratedPair] = []
    claimed: dict[str, str] = {}

    for src in sources:
        record = graph.sources.get_or_create(src)
        if record.exclude_from_generation:
            logger.debug("Skipping %s (WRAP_EXCLUDE)", src)
            continue

        stem = source_stem(src)
        header, impl = derive_output_paths(output_dir, stem)
        pair = GeneratedPair(
            source=src,
            base_name=f"{output_dir}/{stem}",
            header_path=header,
            impl_path=impl,
            original_path=f"{source_dir}/{src}",
        )

        for output in (pair.impl_path, pair.header_path):
            if output in claimed:
                raise DuplicateOutputError(
                    output,
                    f"Sources '{claimed[output]}' and '{src}' would both generate "
                    f"'{output}'. Fluid sources wrapped together need distinct names.",
                )
            if graph.rule_for(output) is not None:
                raise DuplicateOutputError(output)
            claimed[output] = src

        pairs.append(pair)

    return pairs


# ── Rule generator ──────────────────────────────────────────────


def generate(
    graph: BuildGraph,
    target_name: str,
    sources: Sequence[str],
    output_dir: str,
    tool_path: str,
    source_dir: str,
) -> tuple[list[SourceRecord], list[CustomCommandRule]]:
    """Register fluid rules for ``sources`` and collect the outputs.

    Args:
        graph: Build graph receiving the rules.
        target_name: Target meant to consume the generated sources.
        sources: Interface files, relative to ``source_dir``.
        output_dir: Directory the generated files are declared in.
        tool_path: Resolved path to the fluid executable.
        source_dir: Directory the sources live in.

    Returns:
        (generated implementation records in input order, registered rules).
    """
    pairs = plan_pairs(graph, sources, output_dir, source_dir)

    # generated headers are included from the .cxx files
    graph.add_include_directories([output_dir])

    generated: list[SourceRecord] = []
    rules: list[CustomCommandRule] = []
    for pair in pairs:
        depends = pair.dependencies(tool_path)
        command_line = pair.command_line(tool_path)

        rules.append(graph.add_custom_command([pair.impl_path], depends, command_line))
        rules.append(graph.add_custom_command([pair.header_path], depends, command_line))

        impl = graph.sources.get_or_create(pair.impl_path)
        impl.add_depend(pair.header_path)
        impl.add_depend(pair.original_path)
        generated.append(impl)

    logger.info(
        "%s(%s): %d of %d source(s) wrapped",
        COMMAND_NAME, target_name, len(generated), len(sources),
    )
    return generated, rules


# ── Aggregator ──────────────────────────────────────────────────


def sources_variable_name(target_name: str) -> str:
    return target_name + SOURCES_VAR_SUFFIX


def join_sources(records: Sequence[SourceRecord]) -> str:
    """Join full paths with ``;`` in order. Empty input gives ``""``."""
    return ";".join(r.full_path for r in records)


def publish_sources(
    graph: BuildGraph,
    target_name: str,
    records: Sequence[SourceRecord],
) -> str:
    """Define ``<target>_FLTK_UI_SRCS`` in the graph and return its value."""
    value = join_sources(records)
    graph.add_definition(sources_variable_name(target_name), value)
    return value


# ── Deferred validator ──────────────────────────────────────────


def validate_target_exists(graph: BuildGraph, target_name: str) -> bool:
    """Warn through the message sink if ``target_name`` was never created.

    Advisory only: rules and the published variable are left in place.
    """
    if graph.find_local_non_alias_target(target_name) is not None:
        return True

    graph.message(
        f"{COMMAND_NAME} was called with a target that was never created: "
        f"{target_name}.  The problem was found while processing the source "
        f"directory: {graph.current_source_dir}.  This {COMMAND_NAME} call "
        "will be ignored.",
        level="warning",
    )
    return False


def _run_target_check(graph: BuildGraph, action: DeferredAction) -> None:
    validate_target_exists(graph, action.target_name)


def schedule_target_check(graph: BuildGraph, target_name: str) -> DeferredAction:
    """Queue a target-existence check for when configuration closes."""
    graph.register_deferred_handler(VALIDATE_TARGET_EXISTS, _run_target_check)
    return graph.add_deferred_action(DeferredAction(target_name=target_name))
