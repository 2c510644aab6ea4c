"""Fixed-option YAML writer for projected snapshot documents.

The emitter options are not configurable by callers apart from the line
width: block collections, UTF-8 output, unicode kept unescaped, and long
lines split at ``width`` columns.  Scalar tags and styles come from the
nodes themselves (see ``projection``).
"""

import logging
from typing import BinaryIO

import yaml

from .errors import EmissionError

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80


def serialize_document(
    document: yaml.Node, width: int = DEFAULT_WIDTH
) -> bytes:
    """Serialize a YAML node tree to UTF-8 bytes.

    Args:
        document: Root node, normally from ``assemble_document()``.
        width: Preferred maximum line width before splitting.

    Returns:
        The encoded YAML document.

    Raises:
        EmissionError: If the emitter rejects the node tree.
    """
    try:
        data = yaml.serialize(
            document,
            Dumper=yaml.SafeDumper,
            encoding="utf-8",
            allow_unicode=True,
            width=width,
        )
    except (yaml.YAMLError, UnicodeError) as e:
        raise EmissionError(f"Failed to emit YAML document: {e}") from e
    logger.debug("Serialized snapshot document (%d bytes)", len(data))
    return data


def write_document(
    document: yaml.Node,
    stream: BinaryIO,
    width: int = DEFAULT_WIDTH,
) -> int:
    """Serialize ``document`` and write it to a binary stream.

    Returns:
        Number of bytes written.

    Raises:
        EmissionError: If emission or the stream write fails.
    """
    data = serialize_document(document, width=width)
    try:
        stream.write(data)
    except OSError as e:
        raise EmissionError(f"Failed to write YAML document: {e}") from e
    return len(data)
