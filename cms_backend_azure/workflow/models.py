"""Data models for the editorial workflow.

An unpublished entry is a draft backed by its own git branch. Its workflow
status moves through an open set of states; the well-known ones are listed
in WorkflowStatus.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class WorkflowStatus(str, Enum):
    """Well-known workflow states of a draft."""

    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    PENDING_PUBLISH = "pending_publish"


@dataclass
class UnpublishedEntryDiff:
    """A file changed on a draft branch relative to the main branch.

    Attributes:
        id: Git object id of the changed file
        path: Repository-relative path
        new_file: True when the file does not exist on the main branch
    """

    id: str
    path: str
    new_file: bool = False


@dataclass
class UnpublishedEntry:
    """A draft entry as stored on its branch.

    Attributes:
        slug: Entry slug
        collection: Collection name
        status: Workflow status string
        diffs: Files changed on the draft branch
        updated_on: Time of the last change to the draft
        pull_request_author: Author of the draft, if the remote tracks one
    """

    slug: str
    collection: str
    status: str
    diffs: List[UnpublishedEntryDiff] = field(default_factory=list)
    updated_on: Optional[datetime] = None
    pull_request_author: Optional[str] = None

    def media_files(self, media_folder: str) -> List[UnpublishedEntryDiff]:
        """Return the diffs that live under the media folder."""
        prefix = media_folder.strip("/") + "/"
        return [d for d in self.diffs if d.path.lstrip("/").startswith(prefix)]

    def data_files(self, media_folder: str) -> List[UnpublishedEntryDiff]:
        """Return the diffs that are not media files."""
        media_paths = {d.path for d in self.media_files(media_folder)}
        return [d for d in self.diffs if d.path not in media_paths]


@dataclass
class DeployStatus:
    """Deploy preview for a draft branch.

    Attributes:
        url: Preview URL reported by the CI system
        state: Remote state string ("success", "pending", "failure")
    """

    url: str
    state: str
