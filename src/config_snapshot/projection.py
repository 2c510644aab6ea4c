"""Projection of configuration trees onto YAML node trees.

Converts the ``model`` tagged union into PyYAML ``Node`` objects that the
writer can serialize directly:

- ``project_scalar`` -- one scalar to a tagged, styled ``ScalarNode``.
- ``project_node``   -- any node, recursively, with key sorting and
  pruning of empty values.
- ``assemble_document`` -- the root mapping, one entry per named root.

Empty scalars, empty mappings and empty sequences never appear in the
output.  Pruning is bottom-up, so a mapping whose children are all empty
disappears from its own parent as well.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

import yaml

from .model import ConfigNode, Mapping, Scalar, ScalarFormat, Sequence

STR_TAG = "tag:yaml.org,2002:str"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"
BOOL_TAG = "tag:yaml.org,2002:bool"
MAP_TAG = "tag:yaml.org,2002:map"
SEQ_TAG = "tag:yaml.org,2002:seq"

_FORMAT_TAGS: dict[ScalarFormat, str] = {
    ScalarFormat.NUMBER: INT_TAG,
    ScalarFormat.FLOATING: FLOAT_TAG,
    ScalarFormat.BOOLEAN: BOOL_TAG,
}


class ScalarStyle(Enum):
    """Scalar styles understood by the PyYAML emitter."""

    PLAIN = None
    DOUBLE_QUOTED = '"'
    LITERAL_BLOCK = "|"


def tag_for(fmt: ScalarFormat) -> str:
    """Return the YAML tag for a scalar format (str by default)."""
    return _FORMAT_TAGS.get(fmt, STR_TAG)


def style_for(scalar: Scalar) -> ScalarStyle:
    """Pick the rendering style of a scalar.

    Multiline text that is not raw becomes a literal block, raw tokens
    are written bare, everything else is double-quoted.
    """
    if scalar.format is ScalarFormat.MULTILINE_STRING and not scalar.raw:
        return ScalarStyle.LITERAL_BLOCK
    if scalar.raw:
        return ScalarStyle.PLAIN
    return ScalarStyle.DOUBLE_QUOTED


def _key_node(key: str) -> yaml.ScalarNode:
    return yaml.ScalarNode(STR_TAG, key, style=ScalarStyle.PLAIN.value)


def project_scalar(scalar: Scalar) -> yaml.ScalarNode | None:
    """Convert a scalar to a YAML scalar node.

    Args:
        scalar: The scalar to convert.

    Returns:
        A ``ScalarNode`` carrying the inferred tag and style, or ``None``
        when the scalar has no text.
    """
    if not scalar.value:
        return None
    return yaml.ScalarNode(
        tag_for(scalar.format),
        scalar.value,
        style=style_for(scalar).value,
    )


def project_node(node: ConfigNode) -> yaml.Node | None:
    """Recursively convert a configuration node to a YAML node.

    Mapping keys are sorted; sequence items keep their order.  Entries
    and items that project to nothing are dropped, and a container left
    empty projects to nothing itself.

    Args:
        node: Mapping, sequence or scalar to convert.

    Returns:
        The projected node, or ``None`` when nothing is left to emit.

    Raises:
        TypeError: If ``node`` is not one of the model node kinds.
    """
    match node:
        case Scalar():
            return project_scalar(node)
        case Mapping():
            tuples: list[tuple[yaml.Node, yaml.Node]] = []
            for key, value in sorted(node.entries, key=lambda e: e[0]):
                value_node = project_node(value)
                if value_node is None:
                    continue
                tuples.append((_key_node(key), value_node))
            if not tuples:
                return None
            return yaml.MappingNode(MAP_TAG, tuples, flow_style=False)
        case Sequence():
            items = [
                n
                for n in (project_node(item) for item in node.items)
                if n is not None
            ]
            if not items:
                return None
            return yaml.SequenceNode(SEQ_TAG, items, flow_style=False)
        case _:
            raise TypeError(
                f"Unsupported configuration node: {type(node).__name__}"
            )


def assemble_document(
    roots: Iterable[tuple[str, ConfigNode]],
) -> yaml.MappingNode:
    """Build the root document mapping from named configuration roots.

    Roots keep the order they are given in (registration order); only
    nested mappings are sorted.  Roots that project to nothing contribute
    no key.  Exceptions raised while iterating ``roots`` or projecting
    one of them propagate and no document is returned.

    Args:
        roots: ``(name, node)`` pairs in registration order.

    Returns:
        A block ``MappingNode``; empty when every root was pruned.
    """
    tuples: list[tuple[yaml.Node, yaml.Node]] = []
    for name, node in roots:
        value_node = project_node(node)
        if value_node is None:
            continue
        tuples.append((_key_node(name), value_node))
    return yaml.MappingNode(MAP_TAG, tuples, flow_style=False)
