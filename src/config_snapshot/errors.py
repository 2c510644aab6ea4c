"""Exception types raised while exporting a configuration snapshot.

Two failure kinds are kept apart so callers can tell them apart:

- ``ConfiguratorError``: building or describing a configuration root
  failed.  Nothing was projected.
- ``EmissionError``: projection succeeded but writing the YAML document
  failed.
"""


class SnapshotError(Exception):
    """Base class for snapshot export failures."""


class ConfiguratorError(SnapshotError):
    """A configuration root could not be described.

    Attributes:
        root: Name of the failing root, when known.
    """

    def __init__(self, message: str, root: str | None = None) -> None:
        super().__init__(message)
        self.root = root


class EmissionError(SnapshotError):
    """The YAML writer failed after a complete projection."""
