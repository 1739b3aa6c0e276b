"""Value types exchanged with the version-control API client.

These are the records the remote client returns: users, file listings, file
metadata and commit status records. All models are plain dataclasses.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """Authenticated remote user profile.

    Attributes:
        id: Remote user identifier
        display_name: Human-readable name (used as commit author name)
        email_address: Email address (used as commit author email)
    """

    id: str
    display_name: str
    email_address: str


@dataclass
class CommitAuthor:
    """Author recorded on commits created by the backend."""

    name: str
    email: str


@dataclass
class RemoteFile:
    """A file listed under a remote folder.

    Also serves as the media file descriptor: its identity is known without
    downloading the content.

    Attributes:
        object_id: Git object id (blob SHA) of the file
        relative_path: Path relative to the repository root
        size: Size in bytes
        url: Direct remote URL of the file content
    """

    object_id: str
    relative_path: str
    size: int = 0
    url: str = ""


@dataclass
class FileMetadata:
    """Last-commit metadata of a file."""

    author: str = ""
    updated_on: Optional[datetime] = None


@dataclass
class StatusRecord:
    """A commit status / check record attached to a branch.

    Attributes:
        context: Status context name (e.g. "deploy/netlify")
        target_url: URL the status links to
        state: Remote state string ("success", "pending", "failure", ...)
    """

    context: str
    target_url: str
    state: str
