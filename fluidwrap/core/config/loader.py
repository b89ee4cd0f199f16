"""
Configuration loader — reads fluidwrap.yml into a build graph scope.

This is the primary entry point for loading a build description.
It reads YAML, validates against Pydantic schemas, and seeds a
``BuildGraph`` with the declared directories, definitions, targets
and source properties.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from fluidwrap.core.errors import FluidWrapError
from fluidwrap.core.graph import BuildGraph
from fluidwrap.core.models.build_file import BuildFile

logger = logging.getLogger(__name__)

# Default config filename
BUILD_CONFIG_FILE = "fluidwrap.yml"

# Binary directory used when the build file names none
DEFAULT_BINARY_SUBDIR = "build"


class ConfigError(FluidWrapError):
    """Raised when the build description is invalid or missing."""


def find_build_file(start_dir: Path | None = None) -> Path | None:
    """Search for fluidwrap.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to fluidwrap.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / BUILD_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_build_file(path: Path | None = None) -> BuildFile:
    """Load and validate a build description.

    Args:
        path: Explicit path to fluidwrap.yml. If None, searches upward.

    Returns:
        Validated BuildFile model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_build_file()

    if path is None:
        raise ConfigError(
            f"No {BUILD_CONFIG_FILE} found. Create one, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading build description from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        build_file = BuildFile.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid build description: {e}") from e

    logger.info(
        "Loaded %s: %d target(s), %d wrap call(s)",
        path.name, len(build_file.targets), len(build_file.wrap_ui),
    )
    return build_file


def _resolve_dir(value: str | None, base: Path, default: Path) -> str:
    if not value:
        return default.as_posix()
    p = Path(value)
    if not p.is_absolute():
        p = base / p
    return p.as_posix()


def build_graph_from(build_file: BuildFile, base_dir: Path) -> BuildGraph:
    """Create a BuildGraph scope from a build description.

    Relative directories resolve against ``base_dir``. The source
    directory defaults to ``base_dir`` and the binary directory to
    ``<source_dir>/build``.
    """
    source_dir = _resolve_dir(build_file.source_dir, base_dir, base_dir)
    binary_dir = _resolve_dir(
        build_file.binary_dir, base_dir, Path(source_dir) / DEFAULT_BINARY_SUBDIR
    )
    graph = BuildGraph(source_dir=source_dir, binary_dir=binary_dir)

    for name, value in build_file.definitions.items():
        graph.add_definition(name, value)

    for decl in build_file.targets:
        graph.add_target(decl.name, decl.sources)
        for alias in decl.aliases:
            graph.add_alias(alias, decl.name)

    for path, props in build_file.sources.items():
        record = graph.sources.get_or_create(path)
        for key, value in (props or {}).items():
            record.set_property(key, value)

    logger.debug("Scope: source_dir=%s binary_dir=%s", source_dir, binary_dir)
    return graph


def config_dir(config_path: Path) -> Path:
    """Get the directory holding a build file."""
    return config_path.parent.resolve()
