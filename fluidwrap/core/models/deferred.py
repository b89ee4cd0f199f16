"""
Deferred action and message models — the post-configuration contract.

Deferred actions are queued while the build description is processed
and drained exactly once when configuration closes. Messages are the
user-facing sink that advisory checks report through.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

VALIDATE_TARGET_EXISTS = "validate_target_exists"

DeferredState = Literal["scheduled", "pending", "executed"]


class DeferredAction(BaseModel):
    """Work that must run after every configuration-time call.

    Lifecycle: ``scheduled`` (queued) → ``pending`` (configuration
    closed) → ``executed`` (terminal). No retries.
    """

    kind: Literal["validate_target_exists"] = VALIDATE_TARGET_EXISTS
    target_name: str
    state: DeferredState = "scheduled"

    @property
    def done(self) -> bool:
        return self.state == "executed"


class Message(BaseModel):
    """One entry in the build graph's message sink."""

    level: Literal["warning", "status"] = "warning"
    text: str
