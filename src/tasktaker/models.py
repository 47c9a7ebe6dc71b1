"""Domain models for TaskTaker.

This module defines the Task entity and the Notice payload used to surface
persistence failures to the user.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

ERROR_TITLE = "Error"
SAVE_FAILED_MESSAGE = "Failed to save tasks"
LOAD_FAILED_MESSAGE = "Failed to load tasks"


def generate_task_id() -> str:
    """Return a new locally unique task identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Task:
    """A single to-do entry.

    Attributes:
        id: Opaque identifier, stable for the task's lifetime
        text: Human-entered label
    """

    id: str
    text: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to the persisted ``{"key", "value"}`` layout."""
        return {"key": self.id, "value": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        """Create a Task from its persisted layout.

        Args:
            data: Mapping with string ``key`` and ``value`` fields

        Returns:
            Task instance

        Raises:
            KeyError: If a field is missing
            TypeError: If data is not a mapping or a field is not a string
        """
        if not isinstance(data, dict):
            raise TypeError(f"Task entry must be an object, got {type(data).__name__}")

        task_id = data["key"]
        text = data["value"]
        if not isinstance(task_id, str) or not isinstance(text, str):
            raise TypeError("Task key and value must be strings")

        return cls(id=task_id, text=text)

    @classmethod
    def create(cls, text: str) -> Task:
        """Create a Task with a freshly generated identifier."""
        return cls(id=generate_task_id(), text=text)


@dataclass(frozen=True)
class Notice:
    """One-shot user-visible message shown as a modal dialog."""

    title: str
    message: str

    @classmethod
    def save_failed(cls) -> Notice:
        return cls(title=ERROR_TITLE, message=SAVE_FAILED_MESSAGE)

    @classmethod
    def load_failed(cls) -> Notice:
        return cls(title=ERROR_TITLE, message=LOAD_FAILED_MESSAGE)
