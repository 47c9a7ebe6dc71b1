"""Task store: the single source of truth for the task list.

The store owns the ordered task collection and the transient edit session.
Every change to the collection is announced to subscribed observers, which
is how persistence is wired in without the operations knowing about it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .models import Task

logger = logging.getLogger(__name__)

TaskObserver = Callable[[tuple[Task, ...]], None]


@dataclass
class EditSession:
    """Entry buffer plus the id of the task being edited, if any."""

    text: str = ""
    task_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.task_id is not None

    def clear(self) -> None:
        self.text = ""
        self.task_id = None


class TaskStore:
    """Ordered task collection with add/edit/remove operations."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)
        self._session = EditSession()
        self._observers: list[TaskObserver] = []

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def entry_text(self) -> str:
        return self._session.text

    @property
    def is_editing(self) -> bool:
        return self._session.is_editing

    @property
    def editing_task_id(self) -> str | None:
        return self._session.task_id

    # Observers

    def subscribe(self, observer: TaskObserver) -> None:
        """Register a callback invoked after each collection change."""
        self._observers.append(observer)

    def unsubscribe(self, observer: TaskObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self) -> None:
        snapshot = self.tasks
        for observer in list(self._observers):
            observer(snapshot)

    # Entry buffer

    def set_entry_text(self, text: str) -> None:
        """Replace the entry buffer with the given text."""
        self._session.text = text

    def cancel_edit(self) -> None:
        """Leave edit mode without changing any task."""
        self._session.clear()

    # Mutations

    def add_task(self, text: str) -> Task | None:
        """Append a new task.

        Empty text is ignored. Whitespace-only text is accepted as-is.

        Args:
            text: Task label

        Returns:
            The created task, or None if text was empty
        """
        if len(text) == 0:
            return None

        task = Task.create(text)
        self._tasks.append(task)
        self._session.text = ""
        logger.debug(f"Added task {task.id}")
        self._notify()
        return task

    def begin_edit(self, task: Task) -> None:
        """Load a task's text into the entry buffer and target it for update."""
        self._session.text = task.text
        self._session.task_id = task.id
        logger.debug(f"Editing task {task.id}")

    def update_task(self, text: str) -> None:
        """Replace the text of the task targeted by the edit session.

        Does nothing when no edit session is active. When the targeted task
        has been removed meanwhile, no task changes but the session is still
        cleared.

        Args:
            text: New task label
        """
        target_id = self._session.task_id
        if target_id is None:
            logger.debug("update_task called outside an edit session, ignoring")
            return

        self._tasks = [
            Task(id=task.id, text=text) if task.id == target_id else task
            for task in self._tasks
        ]
        self._session.clear()
        logger.debug(f"Updated task {target_id}")
        self._notify()

    def remove_task(self, task_id: str) -> None:
        """Remove the task with the given id; unknown ids are ignored.

        An edit session targeting the removed task is left in place.
        """
        remaining = [task for task in self._tasks if task.id != task_id]
        if len(remaining) == len(self._tasks):
            return

        self._tasks = remaining
        logger.debug(f"Removed task {task_id}")
        self._notify()

    def hydrate(self, tasks: Iterable[Task]) -> None:
        """Replace the whole collection with a loaded snapshot."""
        self._tasks = list(tasks)
        logger.info(f"Hydrated store with {len(self._tasks)} task(s)")
        self._notify()
