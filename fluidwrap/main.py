"""
fluidwrap — CLI entrypoint.

Usage:
    python -m fluidwrap.main --help
    python -m fluidwrap.main wrap app win.fl dlg.fl -D FLTK_FLUID_EXECUTABLE=/usr/bin/fluid
    python -m fluidwrap.main configure
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from fluidwrap import __version__
from fluidwrap.core.errors import FluidWrapError
from fluidwrap.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    level_from_flags,
    setup_logging,
)

if TYPE_CHECKING:
    from fluidwrap.core.graph import BuildGraph
    from fluidwrap.core.models.build_file import BuildFile


@click.group()
@click.version_option(version=__version__, prog_name="fluidwrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to fluidwrap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """fluidwrap — build rules for FLTK Fluid UI files."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


# ── Helpers ─────────────────────────────────────────────────────


def _parse_defines(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    defines: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{item}'")
        defines[name] = value
    return defines


def _load_scope(
    ctx: click.Context,
    source_dir: str | None = None,
    binary_dir: str | None = None,
    require_file: bool = False,
) -> tuple[BuildFile, BuildGraph]:
    """Load the build file (if any) and create the graph scope."""
    from fluidwrap.core.config.loader import (
        build_graph_from,
        config_dir,
        find_build_file,
        load_build_file,
    )
    from fluidwrap.core.models.build_file import BuildFile

    config_path: Path | None = ctx.obj.get("config_path") or find_build_file()

    if config_path is None and not require_file:
        build_file, base = BuildFile(), Path.cwd()
    else:
        build_file = load_build_file(config_path)
        base = config_dir(config_path) if config_path else Path.cwd()

    updates = {}
    if source_dir:
        updates["source_dir"] = Path(source_dir).absolute().as_posix()
    if binary_dir:
        updates["binary_dir"] = Path(binary_dir).absolute().as_posix()
    if updates:
        build_file = build_file.model_copy(update=updates)

    return build_file, build_graph_from(build_file, base)


def _fail(message: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps({"ok": False, "error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def _print_wrap(result, quiet: bool) -> None:
    click.secho(
        f"🔧 {result.target}: {len(result.generated)} generated source(s)",
        fg="cyan",
        bold=True,
    )
    if not quiet:
        for rule in result.rules:
            click.echo(f"   {rule.primary_output}")
            click.echo(f"      $ {' '.join(rule.command_line)}")
    click.echo(f"   {result.variable} = {result.value}")


def _print_warnings(warnings: list[str]) -> None:
    for text in warnings:
        click.secho(f"⚠️  {text}", fg="yellow")


# ── Commands ────────────────────────────────────────────────────


@cli.command()
@click.argument("target")
@click.argument("sources", nargs=-1)
@click.option(
    "-D",
    "--define",
    "defines",
    multiple=True,
    metavar="NAME=VALUE",
    callback=_parse_defines,
    help="Set or override a definition (e.g. FLTK_FLUID_EXECUTABLE).",
)
@click.option("--source-dir", default=None, help="Directory the .fl files live in.")
@click.option("--binary-dir", default=None, help="Directory generated files are declared in.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def wrap(
    ctx: click.Context,
    target: str,
    sources: tuple[str, ...],
    defines: dict[str, str],
    source_dir: str | None,
    binary_dir: str | None,
    as_json: bool,
) -> None:
    """Generate fluid rules for TARGET from SOURCES (.fl files)."""
    from fluidwrap.core.use_cases.wrap_ui import wrap_ui

    try:
        _, graph = _load_scope(ctx, source_dir, binary_dir)
        for name, value in defines.items():
            graph.add_definition(name, value)
        result = wrap_ui(graph, [target, *sources])
        graph.finalize()
    except FluidWrapError as e:
        _fail(str(e), as_json)
        return

    if as_json:
        data = {"ok": True, **result.to_dict(), "warnings": graph.warnings}
        click.echo(json.dumps(data, indent=2))
        return

    _print_wrap(result, ctx.obj.get("quiet", False))
    _print_warnings(graph.warnings)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def configure(ctx: click.Context, as_json: bool) -> None:
    """Run every wrap_ui call in fluidwrap.yml and report the rules."""
    from fluidwrap.core.use_cases.configure import run_configure

    try:
        build_file, graph = _load_scope(ctx, require_file=True)
        result = run_configure(build_file, graph)
    except FluidWrapError as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps({"ok": True, **result.to_dict()}, indent=2))
        return

    if not result.results:
        click.secho("No wrap_ui calls declared.", fg="yellow")
    for wrap_result in result.results:
        _print_wrap(wrap_result, ctx.obj.get("quiet", False))
    _print_warnings(result.warnings)


if __name__ == "__main__":
    cli()
