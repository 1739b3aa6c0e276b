"""Data models for entry listing and persistence.

Entries are the content documents the editor works with. On read they are a
file identity plus its raw text; on write they are a set of data files plus
the media assets the entry references.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from cms_backend_azure.media.models import AssetProxy


@dataclass
class ImplementationFile:
    """Identity of a remote entry file.

    Attributes:
        path: Repository-relative path
        id: Git object id, when known (lets the client read a fixed revision)
        label: Optional display label for file collections
        author: Last commit author, filled in from file metadata
        updated_on: Last commit time, filled in from file metadata
    """

    path: str
    id: Optional[str] = None
    label: Optional[str] = None
    author: str = ""
    updated_on: Optional[datetime] = None


@dataclass
class ImplementationEntry:
    """An entry file loaded from the remote together with its raw content."""

    file: ImplementationFile
    data: str


@dataclass
class DataFile:
    """A content file to write as part of an entry.

    Attributes:
        path: Target repository path
        slug: Entry slug
        raw: Serialized file content
        new_path: New path when the entry is being renamed
    """

    path: str
    slug: str
    raw: str
    new_path: Optional[str] = None


@dataclass
class Entry:
    """An entry to persist: its data files and referenced media assets."""

    data_files: List[DataFile]
    assets: List["AssetProxy"] = field(default_factory=list)


@dataclass
class PersistOptions:
    """Options controlling how files are committed.

    Attributes:
        commit_message: Message of the commit
        new_entry: True when the entry does not exist yet
        use_workflow: Persist to a draft branch instead of the main branch
        status: Workflow status for a newly created draft
        unpublished: True when updating an existing draft
        collection_name: Collection the entry belongs to
    """

    commit_message: str
    new_entry: bool = False
    use_workflow: bool = False
    status: Optional[str] = None
    unpublished: bool = False
    collection_name: Optional[str] = None
