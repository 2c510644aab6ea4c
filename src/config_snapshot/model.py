"""Configuration tree model consumed by the projection engine.

Defines the closed set of node kinds a discovery layer may hand over:

- ``ScalarFormat``: Enum of scalar value kinds.
- ``Scalar``: A single value with its format and raw flag.
- ``Mapping``: Ordered key/value pairs with unique keys.
- ``Sequence``: Ordered list of nodes.

All nodes are frozen; the engine only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class ScalarFormat(str, Enum):
    """Kinds of scalar values a configurator may report."""

    STRING = "string"
    MULTILINE_STRING = "multiline_string"
    NUMBER = "number"
    FLOATING = "floating"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Scalar:
    """A leaf value.

    Attributes:
        value: Text of the value, or ``None`` when unset.
        format: Kind of value, drives the emitted YAML tag.
        raw: True when ``value`` is already a safe bare token
            (a rendered number, boolean or identifier).
    """

    value: str | None
    format: ScalarFormat = ScalarFormat.STRING
    raw: bool = False


@dataclass(frozen=True)
class Mapping:
    """Ordered key/value pairs; keys are unique."""

    entries: tuple[tuple[str, ConfigNode], ...] = ()

    def __post_init__(self) -> None:
        keys = [key for key, _ in self.entries]
        if len(keys) != len(set(keys)):
            dupes = sorted({k for k in keys if keys.count(k) > 1})
            raise ValueError(f"Duplicate mapping keys: {dupes}")

    @classmethod
    def of(cls, items: dict[str, ConfigNode] | Iterable) -> Mapping:
        """Build a mapping from a dict or an iterable of pairs."""
        if isinstance(items, dict):
            items = items.items()
        return cls(tuple((str(k), v) for k, v in items))

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]


@dataclass(frozen=True)
class Sequence:
    """Ordered list of nodes."""

    items: tuple[ConfigNode, ...] = ()

    @classmethod
    def of(cls, items: Iterable[ConfigNode]) -> Sequence:
        return cls(tuple(items))


ConfigNode = Union[Mapping, Sequence, Scalar]
