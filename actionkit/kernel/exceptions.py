"""Core exception hierarchy for actionkit.

All actionkit exceptions inherit from ActionKitError. Two families matter
to callers of the engine:

- contract violations (:class:`ProtocolViolationError`) mean the producer
  broke the add-before-run protocol; they are raised to the caller and
  should be fixed at the call site, never retried.
- execution failures (:class:`ActionExecutionError`) are recorded on the
  offending action as ``failed`` and the queue moves on.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class ActionKitError(Exception):
    """Base exception for all actionkit errors."""

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(ActionKitError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("logging", "unknown format 'xml'")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(ActionKitError):
    """Raised when data validation fails.

    Examples
    --------
    Example usage::

        raise ValidationError("work_dir", "must be absolute", value="project")
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the field that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


# ============================================================================
# Engine Errors
# ============================================================================


class ProtocolViolationError(ActionKitError):
    """Raised when a producer breaks the engine's calling contract.

    This is never a runtime condition to recover from: the caller has a bug
    (for example it ran an action it never registered).

    Examples
    --------
    Example usage::

        raise ProtocolViolationError("Action a1 not found")
    """

    pass


class ActionExecutionError(ActionKitError):
    """Raised when dispatching a single action fails.

    Examples
    --------
    Example usage::

        raise ActionExecutionError("a1", "file", "disk full")
    """

    def __init__(self, action_id: str, action_type: str, reason: str) -> None:
        """Initialize action execution error.

        Args
        ----
            action_id: Identifier of the failed action
            action_type: Kind of the failed action (file/shell/start)
            reason: Explanation of what went wrong
        """
        super().__init__(f"Action '{action_id}' ({action_type}) failed: {reason}")
        self.action_id = action_id
        self.action_type = action_type
        self.reason = reason


# ============================================================================
# Store Errors
# ============================================================================


class FileStoreError(ActionKitError):
    """Raised when a virtual file store operation fails.

    Examples
    --------
    Example usage::

        raise FileStoreError("/home/project/a.txt", "path is empty")
    """

    def __init__(self, path: str, reason: str) -> None:
        """Initialize file store error.

        Args
        ----
            path: The workspace path that caused the error
            reason: Explanation of what went wrong
        """
        super().__init__(f"File store error at '{path}': {reason}")
        self.path = path
        self.reason = reason


class StorageError(ActionKitError):
    """Raised by persistence drivers when a key cannot be read or written."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Storage error for key '{key}': {reason}")
        self.key = key
        self.reason = reason


__all__ = [
    "ActionExecutionError",
    "ActionKitError",
    "ConfigurationError",
    "FileStoreError",
    "ProtocolViolationError",
    "StorageError",
    "ValidationError",
]
