"""
BuildGraph — one configuration scope of the build-graph engine.

Configuration happens in two phases that never overlap:

    configure  → sources, rules, definitions, targets are registered
    finalize   → queued deferred actions run, once, in queue order

Rules are declarative. The graph refuses a second rule for an output
it already owns, and nothing here touches the filesystem.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from fluidwrap.core.errors import DuplicateOutputError, FluidWrapError, MissingDefinitionError
from fluidwrap.core.graph.source_table import SourceTable
from fluidwrap.core.models.deferred import DeferredAction, Message
from fluidwrap.core.models.rule import CustomCommandRule
from fluidwrap.core.models.target import Target

logger = logging.getLogger(__name__)

DeferredHandler = Callable[["BuildGraph", DeferredAction], None]


class BuildGraph:
    """Storage and bookkeeping for one build directory.

    Features:
        - Source table with explicit get-or-create
        - Custom command registration, unique per output
        - Include directories and definitions for the scope
        - Targets, with aliases kept apart from real targets
        - Deferred action queue drained by ``finalize()``
        - Message sink for user-facing warnings
    """

    def __init__(self, source_dir: str, binary_dir: str):
        self._source_dir = source_dir
        self._binary_dir = binary_dir
        self.sources = SourceTable(source_dir)

        self._rules: list[CustomCommandRule] = []
        self._rules_by_output: dict[str, CustomCommandRule] = {}
        self._include_dirs: list[str] = []
        self._definitions: dict[str, str] = {}
        self._targets: dict[str, Target] = {}
        self._aliases: dict[str, str] = {}

        self._deferred: list[DeferredAction] = []
        self._handlers: dict[str, DeferredHandler] = {}
        self._messages: list[Message] = []
        self._configured = False

    # ── Scope ───────────────────────────────────────────────────

    @property
    def current_source_dir(self) -> str:
        return self._source_dir

    @property
    def current_binary_dir(self) -> str:
        return self._binary_dir

    @property
    def configured(self) -> bool:
        """True once ``finalize()`` has closed configuration."""
        return self._configured

    # ── Custom commands ─────────────────────────────────────────

    def add_custom_command(
        self,
        outputs: list[str],
        dependencies: Iterable[str],
        command_line: list[str],
    ) -> CustomCommandRule:
        """Register a rule producing ``outputs``.

        Raises:
            DuplicateOutputError: If any output already has a rule.
        """
        for output in outputs:
            if output in self._rules_by_output:
                raise DuplicateOutputError(output)

        rule = CustomCommandRule(
            outputs=list(outputs),
            dependencies=list(dependencies),
            command_line=list(command_line),
        )
        self._rules.append(rule)
        for output in outputs:
            self._rules_by_output[output] = rule
            self.sources.get_or_create(output).generated = True

        logger.debug("Registered rule for %s", ", ".join(outputs))
        return rule

    @property
    def custom_commands(self) -> list[CustomCommandRule]:
        return list(self._rules)

    def rule_for(self, output: str) -> CustomCommandRule | None:
        """The rule that produces ``output``, if any."""
        return self._rules_by_output.get(output)

    # ── Include directories / definitions ───────────────────────

    def add_include_directories(self, dirs: Iterable[str]) -> None:
        for d in dirs:
            if d not in self._include_dirs:
                self._include_dirs.append(d)

    @property
    def include_directories(self) -> list[str]:
        return list(self._include_dirs)

    def add_definition(self, name: str, value: str) -> None:
        self._definitions[name] = value
        logger.debug("Defined %s=%s", name, value)

    def get_definition(self, name: str) -> str | None:
        return self._definitions.get(name)

    def get_required_definition(self, name: str) -> str:
        """Look up a definition that must be set and non-empty.

        Raises:
            MissingDefinitionError: If the definition is absent or empty.
        """
        value = self._definitions.get(name)
        if not value:
            raise MissingDefinitionError(name)
        return value

    # ── Targets ─────────────────────────────────────────────────

    def add_target(self, name: str, sources: Iterable[str] = ()) -> Target:
        """Create a target, or extend the sources of an existing one."""
        target = self._targets.get(name)
        if target is None:
            target = Target(name=name)
            self._targets[name] = target
        target.add_sources(list(sources))
        return target

    def add_alias(self, alias: str, target_name: str) -> None:
        """Make ``alias`` refer to an existing real target."""
        if target_name not in self._targets:
            raise FluidWrapError(
                f"Cannot alias '{alias}' to '{target_name}': target does not exist."
            )
        self._aliases[alias] = target_name

    def find_local_non_alias_target(self, name: str) -> Target | None:
        """Look up a real target; alias names never match."""
        return self._targets.get(name)

    # ── Deferred actions ────────────────────────────────────────

    def register_deferred_handler(self, kind: str, handler: DeferredHandler) -> None:
        """Register the function that runs deferred actions of ``kind``."""
        self._handlers[kind] = handler

    def add_deferred_action(self, action: DeferredAction) -> DeferredAction:
        """Queue an action to run when configuration closes.

        Raises:
            FluidWrapError: If configuration is already finalized.
        """
        if self._configured:
            raise FluidWrapError(
                f"Cannot schedule '{action.kind}' for '{action.target_name}': "
                "configuration is already finalized."
            )
        self._deferred.append(action)
        return action

    @property
    def deferred_actions(self) -> list[DeferredAction]:
        return list(self._deferred)

    def finalize(self) -> None:
        """Close configuration and drain the deferred queue.

        Each action runs at most once, even if its handler raises; the
        error propagates and a later call drains the actions still
        pending. Once everything has executed, further calls are no-ops.
        """
        if not self._configured:
            self._configured = True
            for action in self._deferred:
                action.state = "pending"

        for action in self._deferred:
            if action.done:
                continue
            handler = self._handlers.get(action.kind)
            try:
                if handler is None:
                    logger.warning("No handler for deferred action '%s', skipping", action.kind)
                else:
                    handler(self, action)
            finally:
                action.state = "executed"

        logger.info("Configuration finalized: %d deferred action(s)", len(self._deferred))

    # ── Messages ────────────────────────────────────────────────

    def message(self, text: str, level: str = "warning") -> Message:
        """Record a user-facing message."""
        msg = Message(level=level, text=text)
        self._messages.append(msg)
        logger.info("[%s] %s", level, text)
        return msg

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def warnings(self) -> list[str]:
        return [m.text for m in self._messages if m.level == "warning"]
