"""Task persistence to local key-value storage.

This module serializes the task collection to JSON text under a fixed storage
key, and provides a background writer that issues saves one at a time,
coalescing bursts of changes down to the latest snapshot.
"""

from __future__ import annotations

import json
import logging
import queue
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .exceptions import PersistenceReadFailure, PersistenceWriteFailure, StorageError
from .models import Notice, Task

if TYPE_CHECKING:
    from .storage import FileKeyValueStorage

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


def serialize_tasks(tasks: Iterable[Task]) -> str:
    """Encode tasks as a JSON array of ``{"key", "value"}`` objects."""
    return json.dumps([task.to_dict() for task in tasks])


def deserialize_tasks(text: str) -> list[Task]:
    """Decode a JSON array produced by serialize_tasks.

    Args:
        text: Serialized task collection

    Returns:
        Tasks in stored order

    Raises:
        ValueError: If the document is not a valid task array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise ValueError(f"Invalid task JSON: {err}") from err

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of tasks, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[str] = set()
    for index, entry in enumerate(data):
        try:
            task = Task.from_dict(entry)
        except (KeyError, TypeError) as err:
            raise ValueError(f"Invalid task entry at index {index}: {err}") from err
        if task.id in seen:
            raise ValueError(f"Duplicate task key {task.id!r} at index {index}")
        seen.add(task.id)
        tasks.append(task)

    return tasks


class TaskPersister:
    """Saves and loads the full task collection as one snapshot."""

    def __init__(self, storage: FileKeyValueStorage, key: str = TASKS_KEY):
        """Initialize task persister.

        Args:
            storage: Key-value storage to read and write
            key: Storage key holding the serialized collection
        """
        self.storage = storage
        self.key = key

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the stored collection with the given tasks.

        Raises:
            PersistenceWriteFailure: If the storage write fails
        """
        payload = serialize_tasks(tasks)
        try:
            self.storage.set_item(self.key, payload)
        except (StorageError, OSError) as err:
            raise PersistenceWriteFailure(f"Failed to save tasks: {err}") from err

    def load(self) -> list[Task] | None:
        """Read the stored collection.

        Returns:
            Stored tasks, or None if nothing has been saved yet

        Raises:
            PersistenceReadFailure: If storage is unreadable or the data is malformed
        """
        try:
            payload = self.storage.get_item(self.key)
        except (StorageError, OSError) as err:
            raise PersistenceReadFailure(f"Failed to load tasks: {err}") from err

        if payload is None:
            return None

        try:
            return deserialize_tasks(payload)
        except ValueError as err:
            raise PersistenceReadFailure(f"Failed to load tasks: {err}") from err


class SaveWorker:
    """Background thread that writes task snapshots one at a time.

    Only the most recent submitted snapshot is kept pending, so a burst of
    changes results in at most one write in flight plus one queued. Write
    failures are published as Notice objects on the notice queue.
    """

    def __init__(self, persister: TaskPersister, notice_queue: queue.Queue[Notice]):
        """Initialize save worker.

        Args:
            persister: Persister performing the actual writes
            notice_queue: Queue receiving a Notice for each failed write
        """
        self.persister = persister
        self.notice_queue = notice_queue

        self._pending: tuple[Task, ...] | None = None
        self._writing = False
        self._stopping = False
        self._condition = threading.Condition()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def submit(self, tasks: Iterable[Task]) -> None:
        """Schedule a snapshot for saving, replacing any unsaved one."""
        snapshot = tuple(tasks)
        with self._condition:
            if self._pending is not None:
                logger.debug("Coalescing pending save with newer snapshot")
            self._pending = snapshot
            self._condition.notify_all()

    def _take_pending(self) -> tuple[Task, ...] | None:
        # Caller must hold the condition
        snapshot = self._pending
        self._pending = None
        if snapshot is not None:
            self._writing = True
        return snapshot

    def _write(self, snapshot: tuple[Task, ...]) -> None:
        try:
            self.persister.save(snapshot)
            logger.debug(f"Saved {len(snapshot)} task(s)")
        except PersistenceWriteFailure as err:
            logger.error(f"Task save failed: {err}")
            self.notice_queue.put_nowait(Notice.save_failed())
        finally:
            with self._condition:
                self._writing = False
                self._condition.notify_all()

    def _run(self) -> None:
        """Main write loop running in background thread."""
        logger.info("SaveWorker started")

        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._pending is not None or self._stopping)
                snapshot = self._take_pending()
                if snapshot is None:
                    break

            self._write(snapshot)

        logger.info("SaveWorker stopped")

    def start(self) -> None:
        """Start the background writer thread."""
        if self.is_running:
            logger.warning("SaveWorker already running")
            return

        with self._condition:
            self._stopping = False
        self._thread = threading.Thread(target=self._run, daemon=True, name="SaveWorker")
        self._thread.start()

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every submitted snapshot has been written.

        Without a running thread, the pending snapshot is written inline.

        Args:
            timeout: Maximum seconds to wait (None waits indefinitely)

        Returns:
            True if nothing is left pending or in flight, False on timeout
        """
        if not self.is_running:
            with self._condition:
                snapshot = self._take_pending()
            if snapshot is not None:
                self._write(snapshot)

        with self._condition:
            return self._condition.wait_for(
                lambda: self._pending is None and not self._writing, timeout
            )

    def stop(self, timeout: float = 5.0) -> None:
        """Write any pending snapshot, then stop the background thread."""
        if self._thread is None:
            self.flush(timeout)
            return

        logger.info("Stopping SaveWorker...")
        with self._condition:
            self._stopping = True
            self._condition.notify_all()

        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("SaveWorker thread did not stop within timeout")
        self._thread = None
