"""Custom exceptions for TaskTaker.

This module defines a small hierarchy of exceptions so that storage and
persistence failures can be caught at the persistence boundary and turned
into user-visible notices.
"""


class TaskTakerError(Exception):
    """Base exception for all TaskTaker errors."""


class StorageError(TaskTakerError):
    """Raised when the key-value store cannot be read or written."""


class PersistenceError(TaskTakerError):
    """Base exception for task persistence failures."""


class PersistenceWriteFailure(PersistenceError):
    """Raised when the task collection cannot be saved."""


class PersistenceReadFailure(PersistenceError):
    """Raised when the task collection cannot be loaded."""


class ConfigError(TaskTakerError):
    """Raised when configuration is invalid or cannot be loaded."""
