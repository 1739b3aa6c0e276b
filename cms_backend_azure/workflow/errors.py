"""Typed exception hierarchy for editorial workflow errors.

All exceptions inherit from BackendError. Caller-input errors additionally
inherit from ValueError.
"""

from cms_backend_azure.vcs_client.errors import BackendError


class WorkflowError(BackendError):
    """Base exception for all workflow errors."""
    pass


class InvalidContentKeyError(WorkflowError, ValueError):
    """Raised when a collection, slug, content key or branch is malformed."""

    def __init__(self, value: str, reason: str):
        super().__init__(f"Invalid content key input {value!r}: {reason}")
        self.value = value
        self.reason = reason


class MissingEntryIdentifierError(WorkflowError, ValueError):
    """Raised when neither an id nor a collection and slug pair is supplied."""

    def __init__(self):
        super().__init__("Missing unpublished entry id or collection and slug")


class LockAcquisitionError(WorkflowError):
    """Raised when the workflow lock cannot be acquired in time.

    Attributes:
        operation: Name of the guarded operation that could not run
        timeout: Seconds waited before giving up
    """

    def __init__(self, operation: str, timeout: float):
        super().__init__(
            f"Failed to acquire {operation} lock after {timeout}s. "
            f"Another workflow operation may still be running."
        )
        self.operation = operation
        self.timeout = timeout
