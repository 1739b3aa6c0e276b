"""Bounded-concurrency fetching of remote files.

Media libraries and entry folders can hold hundreds of files. Downloading
them all at once floods the remote API, downloading them one by one is slow.
BoundedFetcher runs downloads in parallel while keeping at most
max_concurrent of them in flight. The limit is shared by every batch run
through the same fetcher, so two overlapping media listings on one backend
still stay under the ceiling together.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

# Maximum simultaneous remote reads per backend
MAX_CONCURRENT_DOWNLOADS = 10

T = TypeVar('T')
R = TypeVar('R')


class BoundedFetcher:
    """Runs remote reads with a fixed ceiling on concurrency.

    Example:
        >>> fetcher = BoundedFetcher()
        >>> blobs = fetcher.map(download, descriptors)  # same order as descriptors
    """

    def __init__(self, max_concurrent: int = MAX_CONCURRENT_DOWNLOADS):
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be at least 1, got {max_concurrent}")
        self.max_concurrent = max_concurrent
        self._semaphore = threading.BoundedSemaphore(max_concurrent)

    def call(self, func: Callable[..., R], *args, **kwargs) -> R:
        """Run one read while holding a download slot.

        Blocks until a slot is free. Errors from func propagate.
        """
        with self._semaphore:
            return func(*args, **kwargs)

    def map(self, func: Callable[[T], R], items: Iterable[T]) -> List[R]:
        """Apply func to every item in parallel, each call holding a slot.

        func must not call back into this fetcher. Results are returned in the
        order of items, whatever order the reads complete in.

        Raises:
            Exception: The first error (in input order) raised by func
        """
        items = list(items)
        if not items:
            return []

        logger.debug(
            f"Fetching {len(items)} files (max {self.max_concurrent} concurrent)"
        )

        workers = min(self.max_concurrent, len(items))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.call, func, item) for item in items]
            return [future.result() for future in futures]
