"""Mutual exclusion for workflow-state mutations.

Updating a draft's status, deleting a draft and publishing a draft each run
several remote calls (read branch state, compute, write back) that the remote
API does not make atomic. The backend funnels all of them through one
WorkflowLock so that only one of them runs at a time. The lock is
backend-wide, not per entry, because the same remote workflow metadata is
touched by every transition.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from .errors import LockAcquisitionError

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_LOCK_TIMEOUT = 15.0


class WorkflowLock:
    """A single mutex with a bounded wait.

    Waiters are admitted one at a time. A waiter that cannot get the lock
    within the timeout fails with LockAcquisitionError instead of blocking
    forever.

    Example:
        >>> lock = WorkflowLock(timeout=5.0)
        >>> with lock.hold("publish entry"):
        ...     api.publish_unpublished_entry("posts", "hello")
    """

    def __init__(self, timeout: float = DEFAULT_LOCK_TIMEOUT):
        if timeout <= 0:
            raise ValueError(f"Lock timeout must be positive, got {timeout}")
        self.timeout = timeout
        self._lock = threading.Lock()

    def acquire(self, timeout: Optional[float] = None) -> bool:
        """Wait for the lock. Returns False if the timeout expired."""
        wait = self.timeout if timeout is None else timeout
        return self._lock.acquire(timeout=wait)

    def release(self) -> None:
        self._lock.release()

    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        """Hold the lock for the duration of the block.

        Args:
            operation: Name of the guarded operation (used in errors and logs)

        Raises:
            LockAcquisitionError: If the lock is not acquired within the timeout
        """
        logger.debug(f"Acquiring workflow lock for {operation}")
        if not self.acquire():
            logger.warning(f"Timed out after {self.timeout}s waiting for {operation} lock")
            raise LockAcquisitionError(operation, self.timeout)

        logger.debug(f"Workflow lock acquired for {operation}")
        try:
            yield
        finally:
            self.release()
            logger.debug(f"Workflow lock released for {operation}")


def run_with_lock(lock: WorkflowLock, func: Callable[[], T], operation: str) -> T:
    """Run func while holding lock.

    The lock is released whether func returns or raises. If the lock cannot
    be acquired, func is never called.

    Args:
        lock: The backend's workflow lock
        func: Zero-argument callable performing the remote calls
        operation: Name of the guarded operation

    Returns:
        Whatever func returns

    Raises:
        LockAcquisitionError: If the lock is not acquired within its timeout
        Other exceptions: Raised by func, passed through unchanged
    """
    with lock.hold(operation):
        return func()
