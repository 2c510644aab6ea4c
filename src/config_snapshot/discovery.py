"""Boundary between the application and the snapshot engine.

Configuration roots are supplied explicitly as an ordered list of
``RootConfigurator`` objects together with a ``ConfigurationContext``;
there is no process-wide registry.

Usage:
    from config_snapshot.discovery import (
        ConfigurationContext, StaticRoot, describe_roots,
    )

    roots = [StaticRoot("server", {"port": 8080})]
    pairs = list(describe_roots(roots, ConfigurationContext()))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Iterator, Protocol, runtime_checkable

from .errors import ConfiguratorError
from .model import ConfigNode, Mapping, Scalar, ScalarFormat, Sequence

logger = logging.getLogger(__name__)


@dataclass
class ConfigurationContext:
    """State handed to every configurator during one export.

    Attributes:
        source: The application object whose settings are described.
    """

    source: Any = None


@runtime_checkable
class RootConfigurator(Protocol):
    """Describes one top-level configuration section."""

    name: str

    def describe(self, context: ConfigurationContext) -> ConfigNode | None:
        ...


@dataclass
class StaticRoot:
    """Configurator over a fixed plain-Python value."""

    name: str
    value: Any

    def describe(self, context: ConfigurationContext) -> ConfigNode:
        return from_python(self.value)


@dataclass
class CallableRoot:
    """Configurator that reads its value from a callable at export time.

    The callable receives the context's ``source`` and returns plain
    Python data, which is converted with ``from_python()``.
    """

    name: str
    reader: Any

    def describe(self, context: ConfigurationContext) -> ConfigNode:
        return from_python(self.reader(context.source))


def _format_float(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    return repr(value)


def mapping_key(key: Any) -> str:
    """Return the text of a mapping key as YAML spells it.

    Booleans and ``None`` (as produced by ``yaml.safe_load`` for keys such
    as ``on`` or ``null``) become ``true``, ``false`` and ``null``; other
    keys are converted with ``str``.
    """
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def from_python(value: Any) -> ConfigNode:
    """Build a configuration tree from plain Python data.

    Dicts become mappings (keys converted with ``mapping_key()``),
    lists and tuples become sequences.  Numbers and booleans are raw
    scalars; strings are quoted, or written as literal blocks when they
    contain a newline.
    ``None`` becomes an empty scalar, which the projection prunes.

    Raises:
        ConfiguratorError: If ``value`` contains an unsupported type.
    """
    match value:
        case None:
            return Scalar(None)
        case bool():
            return Scalar(
                "true" if value else "false", ScalarFormat.BOOLEAN, raw=True
            )
        case int():
            return Scalar(str(value), ScalarFormat.NUMBER, raw=True)
        case float():
            return Scalar(
                _format_float(value), ScalarFormat.FLOATING, raw=True
            )
        case date():
            return Scalar(value.isoformat())
        case str() if "\n" in value:
            return Scalar(value, ScalarFormat.MULTILINE_STRING)
        case str():
            return Scalar(value)
        case dict():
            return Mapping.of(
                (mapping_key(k), from_python(v))
                for k, v in value.items()
            )
        case list() | tuple():
            return Sequence.of(from_python(item) for item in value)
        case _:
            raise ConfiguratorError(
                f"Cannot describe value of type {type(value).__name__}"
            )


def describe_roots(
    configurators: Iterable[RootConfigurator],
    context: ConfigurationContext,
) -> Iterator[tuple[str, ConfigNode]]:
    """Yield ``(name, node)`` for each configurator in registration order.

    Configurators that describe ``None`` are skipped.  Unexpected
    exceptions are wrapped in ``ConfiguratorError`` naming the root;
    a ``ConfiguratorError`` propagates unchanged.
    """
    for configurator in configurators:
        name = configurator.name
        try:
            node = configurator.describe(context)
        except ConfiguratorError:
            raise
        except Exception as e:
            raise ConfiguratorError(
                f"Failed to describe configuration root '{name}': {e}",
                root=name,
            ) from e
        if node is None:
            logger.debug("Root '%s' described nothing, skipping", name)
            continue
        yield name, node
