"""Registry of locally minted object URLs.

The editor displays media through short opaque URLs ("blob:<uuid>") that
resolve to in-memory file content, so media can be previewed without another
remote round trip. Whoever receives a URL owns it and should revoke it when
the preview is gone.
"""

import logging
import threading
import uuid
from typing import Dict, Optional

from .models import FileObject

logger = logging.getLogger(__name__)

OBJECT_URL_SCHEME = 'blob:'


class ObjectURLRegistry:
    """Thread-safe mapping of object URLs to file content."""

    def __init__(self):
        self._files: Dict[str, FileObject] = {}
        self._lock = threading.Lock()

    def create_object_url(self, file_obj: FileObject) -> str:
        url = f"{OBJECT_URL_SCHEME}{uuid.uuid4()}"
        with self._lock:
            self._files[url] = file_obj
        logger.debug(f"Created object URL {url} for {file_obj.name} ({file_obj.size} bytes)")
        return url

    def resolve(self, url: str) -> Optional[FileObject]:
        """Return the file behind url, or None if unknown or revoked."""
        with self._lock:
            return self._files.get(url)

    def revoke_object_url(self, url: str) -> bool:
        """Forget url. Returns False if it was not registered."""
        with self._lock:
            removed = self._files.pop(url, None)
        if removed is None:
            logger.debug(f"Object URL {url} was not registered")
            return False
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._files
