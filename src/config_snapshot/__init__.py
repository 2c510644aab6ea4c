"""Canonical YAML snapshots of in-memory application configuration.

Public exports
--------------
``Mapping``, ``Sequence``, ``Scalar``, ``ScalarFormat``: configuration
tree model.  ``project_scalar``, ``project_node``, ``assemble_document``:
projection onto YAML nodes.  ``serialize_document``, ``write_document``:
fixed-option writer.  ``SnapshotBackup``, ``ChangeWatcher``, ``export``:
change-triggered persistence.
"""

__version__ = "0.1.0"

from .backup import ChangeWatcher, SnapshotBackup, export
from .discovery import (
    CallableRoot,
    ConfigurationContext,
    RootConfigurator,
    StaticRoot,
    describe_roots,
    from_python,
    mapping_key,
)
from .errors import ConfiguratorError, EmissionError, SnapshotError
from .model import ConfigNode, Mapping, Scalar, ScalarFormat, Sequence
from .projection import (
    ScalarStyle,
    assemble_document,
    project_node,
    project_scalar,
)
from .writer import serialize_document, write_document

__all__ = [
    "CallableRoot",
    "ChangeWatcher",
    "ConfigNode",
    "ConfigurationContext",
    "ConfiguratorError",
    "EmissionError",
    "Mapping",
    "RootConfigurator",
    "Scalar",
    "ScalarFormat",
    "ScalarStyle",
    "Sequence",
    "SnapshotBackup",
    "SnapshotError",
    "StaticRoot",
    "__version__",
    "assemble_document",
    "describe_roots",
    "export",
    "from_python",
    "mapping_key",
    "project_node",
    "project_scalar",
    "serialize_document",
    "write_document",
]
