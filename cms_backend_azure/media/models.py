"""Data models for media files and assets."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FileObject:
    """In-memory file: a name, its bytes and an optional MIME type."""

    name: str
    data: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class AssetProxy:
    """A media file the editor wants to upload.

    Attributes:
        path: Target repository path (may carry a leading slash)
        file_obj: File content
    """

    path: str
    file_obj: FileObject


@dataclass
class DisplayURL:
    """Identity of a media file whose display URL should be resolved."""

    id: Optional[str]
    path: str


@dataclass
class MediaAsset:
    """A media file resolved into something the editor can display.

    Attributes:
        id: Asset id (remote object id, content hash or path)
        display_url: URL the editor can render (an object URL or remote URL)
        path: Repository-relative path
        name: File name
        size: Size in bytes
        file: Loaded file content, when the bytes were fetched
        url: Object URL minted for the file, when one was created
    """

    id: str
    display_url: str
    path: str
    name: str
    size: int
    file: Optional[FileObject] = None
    url: Optional[str] = None


@dataclass
class UnpublishedEntryMediaFile:
    """Reference to a media file stored on a draft branch."""

    path: str
    id: Optional[str] = None
