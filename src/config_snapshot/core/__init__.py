"""Core helpers shared between the backup listener and the CLI."""

from .async_utils import run_sync

__all__ = ["run_sync"]
