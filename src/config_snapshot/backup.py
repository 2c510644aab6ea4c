"""Snapshot backup triggered by configuration changes.

Exports every configuration root into a single YAML document and writes
it to ``<backup_dir>/<filename>`` (``user.yaml`` by default) whenever a
relevant object is saved.

Key design choices:

* **Export before touching disk** -- the document is rendered into memory
  first; a failed export leaves any previous snapshot in place.
* **Plain overwrite** -- the snapshot file is rewritten in place, not via
  a temp file and rename.
* **Listener never raises** -- ``on_change()`` logs failures and returns
  ``None`` so a broken snapshot never breaks the save that triggered it.
  ``export()`` is the raising variant.

Usage:
    backup = SnapshotBackup(roots, Path("/var/lib/app/config.d"))
    backup.on_change(saved_settings)
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from .core.async_utils import run_sync
from .discovery import ConfigurationContext, RootConfigurator, describe_roots
from .projection import assemble_document
from .writer import DEFAULT_WIDTH, serialize_document

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "user.yaml"


def export(
    configurators: Iterable[RootConfigurator],
    context: ConfigurationContext | None = None,
    width: int = DEFAULT_WIDTH,
) -> bytes:
    """Describe, project and serialize all roots into one YAML document.

    Args:
        configurators: Roots in registration order.
        context: Context handed to each configurator.
        width: Line width for the writer.

    Returns:
        UTF-8 encoded YAML.

    Raises:
        ConfiguratorError: If any root fails to describe itself.
        EmissionError: If the YAML writer fails.
    """
    ctx = context if context is not None else ConfigurationContext()
    document = assemble_document(describe_roots(configurators, ctx))
    return serialize_document(document, width=width)


class SnapshotBackup:
    """Writes a fresh snapshot each time a relevant object changes.

    Args:
        configurators: Roots in registration order.  Re-iterated on
            every export, so pass a list rather than a generator.
        backup_dir: Directory that receives the snapshot file.
        filename: Snapshot file name inside ``backup_dir``.
        accepts: Predicate deciding which saved objects trigger an
            export.  ``None`` accepts everything.
        context: Context handed to configurators.  Defaults to an empty
            ``ConfigurationContext``.
        width: Line width for the writer.
    """

    def __init__(
        self,
        configurators: Iterable[RootConfigurator],
        backup_dir: Path,
        *,
        filename: str = DEFAULT_FILENAME,
        accepts: Callable[[Any], bool] | None = None,
        context: ConfigurationContext | None = None,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self._configurators = list(configurators)
        self._backup_dir = Path(backup_dir)
        self._filename = filename
        self._accepts = accepts
        self._context = context or ConfigurationContext()
        self._width = width

    @property
    def backup_path(self) -> Path:
        return self._backup_dir / self._filename

    def on_change(self, saved: Any) -> Path | None:
        """Handle a save event.

        Args:
            saved: The object that was just saved.

        Returns:
            Path of the written snapshot, or ``None`` if the event was
            ignored or the snapshot could not be produced.
        """
        if self._accepts is not None and not self._accepts(saved):
            return None

        try:
            data = export(self._configurators, self._context, self._width)
        except Exception:
            logger.warning(
                "Failed to export configuration snapshot", exc_info=True
            )
            return None

        if not self._ensure_dir():
            return None

        target = self.backup_path
        try:
            target.write_bytes(data)
        except OSError:
            logger.warning(
                "Failed to save snapshot %s", target, exc_info=True
            )
            return None

        logger.debug("Snapshot saved: %s", target.resolve())
        return target

    def _ensure_dir(self) -> bool:
        backup_dir = self._backup_dir
        if backup_dir.is_file():
            logger.error("%s is a regular file", backup_dir)
            return False
        try:
            backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.error(
                "Cannot create snapshot directory %s",
                backup_dir,
                exc_info=True,
            )
            return False
        return True


_STOP = object()


class ChangeWatcher:
    """Consumes save events from a queue and runs the backup for each.

    Events are handled one at a time, so two snapshots never race on the
    same file.  Each export runs in a worker thread via ``run_sync()``.

    Args:
        backup: The backup that handles each event.
    """

    def __init__(self, backup: SnapshotBackup) -> None:
        self._backup = backup
        self._queue: asyncio.Queue[Any] = asyncio.Queue()

    def notify(self, saved: Any) -> None:
        """Queue a save event."""
        self._queue.put_nowait(saved)

    def stop(self) -> None:
        """Ask ``run()`` to return once queued events are handled."""
        self._queue.put_nowait(_STOP)

    async def run(self) -> int:
        """Process events until ``stop()`` is called.

        Returns:
            Number of snapshots written.
        """
        written = 0
        while True:
            saved = await self._queue.get()
            try:
                if saved is _STOP:
                    break
                path = await run_sync(self._backup.on_change, saved)
                if path is not None:
                    written += 1
            finally:
                self._queue.task_done()
        logger.info("Change watcher stopped after %d snapshot(s)", written)
        return written
