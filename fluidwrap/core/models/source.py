"""
Source record model — the build graph's view of one file path.

Records carry free-form string properties (``WRAP_EXCLUDE`` and
friends) and an ordered list of extra dependencies. Property values are
interpreted with build-system boolean rules: exactly ``1``, ``ON``,
``YES``, ``TRUE`` and ``Y`` (any case) are true, everything else is false.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

EXCLUDE_PROPERTY = "WRAP_EXCLUDE"

_TRUE_WORDS = frozenset({"1", "ON", "YES", "TRUE", "Y"})


def is_on(value: str | None) -> bool:
    """Interpret a property value as a build-system boolean."""
    if value is None:
        return False
    return value.upper() in _TRUE_WORDS


def _as_property_value(value: Any) -> str:
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if value is None:
        return ""
    return str(value)


class SourceRecord(BaseModel):
    """A file known to the build graph.

    Attributes:
        path:       Path as first given by the caller.
        full_path:  Path resolved against the scope's source directory.
        properties: String-valued properties set on the file.
        depends:    Extra dependencies, in insertion order, no repeats.
        generated:  Whether a rule in this scope produces the file.
    """

    path: str
    full_path: str
    properties: dict[str, str] = Field(default_factory=dict)
    depends: list[str] = Field(default_factory=list)
    generated: bool = False

    @field_validator("properties", mode="before")
    @classmethod
    def _stringify_properties(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): _as_property_value(v) for k, v in value.items()}
        return value

    def get_property(self, name: str) -> str | None:
        return self.properties.get(name)

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = _as_property_value(value)

    def get_property_as_bool(self, name: str) -> bool:
        return is_on(self.properties.get(name))

    @property
    def exclude_from_generation(self) -> bool:
        """Whether the Fluid wrapper must leave this file alone."""
        return self.get_property_as_bool(EXCLUDE_PROPERTY)

    def add_depend(self, path: str) -> None:
        """Add an extra dependency (ignored if already present)."""
        if path not in self.depends:
            self.depends.append(path)
