"""Reading media files as bytes and hashing them."""

import hashlib
import mimetypes
import posixpath
from typing import Callable, Optional, Union

from .models import FileObject

# read_file(path, sha, parse_text=...) as provided by the API client
ReadFile = Callable[..., Union[str, bytes]]

SVG_CONTENT_TYPE = 'image/svg+xml'


def basename(path: str) -> str:
    return posixpath.basename(path.rstrip('/'))


def get_media_as_blob(path: str, sha: Optional[str], read_file: ReadFile) -> FileObject:
    """Download a media file into a FileObject.

    SVG files are read as text so the client does not mangle them, then
    re-encoded as UTF-8 and tagged image/svg+xml. Everything else is read as
    raw bytes. Errors from read_file propagate.
    """
    name = basename(path)
    if path.lower().endswith('.svg'):
        text = read_file(path, sha, parse_text=True)
        data = text.encode('utf-8') if isinstance(text, str) else text
        return FileObject(name=name, data=data, content_type=SVG_CONTENT_TYPE)

    content = read_file(path, sha, parse_text=False)
    data = content.encode('utf-8') if isinstance(content, str) else content
    content_type, _ = mimetypes.guess_type(name)
    return FileObject(name=name, data=data, content_type=content_type)


def get_blob_sha(data: bytes) -> str:
    """Return the SHA-256 hex digest used as a media asset id."""
    return hashlib.sha256(data).hexdigest()
