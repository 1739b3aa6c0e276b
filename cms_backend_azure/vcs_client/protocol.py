"""Capability interface of the remote version-control API client.

The backend never depends on a concrete client class. Anything that provides
these operations (a REST client for Azure DevOps, the in-memory client used in
development, a test double) can be plugged into AzureBackend.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Protocol, Union

if TYPE_CHECKING:
    from cms_backend_azure.config.models import AzureRepo
    from cms_backend_azure.entries.models import DataFile, PersistOptions
    from cms_backend_azure.media.models import AssetProxy
    from cms_backend_azure.vcs_client.models import (
        CommitAuthor,
        FileMetadata,
        RemoteFile,
        StatusRecord,
        User,
    )
    from cms_backend_azure.workflow.models import UnpublishedEntry


@dataclass
class ApiConfig:
    """Settings handed to the client factory when authenticating.

    Attributes:
        api_root: Base URL of the remote API
        repo: Repository location
        branch: Main branch name
        path: Root path inside the repository
        squash_merges: Squash draft branches when publishing
        initial_workflow_status: Status given to newly created drafts
    """

    api_root: str
    repo: "AzureRepo"
    branch: str
    path: str = "/"
    squash_merges: bool = False
    initial_workflow_status: str = ""


class VersionControlAPI(Protocol):
    """Operations the backend needs from the remote version-control system."""

    commit_author: Optional["CommitAuthor"]

    def user(self) -> "User":
        """Return the profile of the authenticated user."""

    def read_file(
        self,
        path: str,
        sha: Optional[str] = None,
        *,
        branch: Optional[str] = None,
        parse_text: bool = True,
    ) -> Union[str, bytes]:
        """Read a file, as text when parse_text is True, else as bytes."""

    def read_file_metadata(self, path: str, sha: Optional[str] = None) -> "FileMetadata":
        """Return last-commit metadata of a file."""

    def list_files(self, folder: str) -> List["RemoteFile"]:
        """List files under a folder of the main branch."""

    def list_unpublished_branches(self) -> List[str]:
        """List the branches backing unpublished entries."""

    def persist_files(
        self,
        data_files: List["DataFile"],
        media_files: List["AssetProxy"],
        options: "PersistOptions",
    ) -> None:
        """Write data and media files as one changeset."""

    def delete_files(self, paths: List[str], commit_message: str) -> None:
        """Delete files from the main branch in one changeset."""

    def retrieve_unpublished_entry_data(self, content_key: str) -> "UnpublishedEntry":
        """Return the draft stored under a content key."""

    def update_unpublished_entry_status(
        self, collection: str, slug: str, new_status: str
    ) -> None:
        """Move a draft to a new workflow status."""

    def delete_unpublished_entry(self, collection: str, slug: str) -> None:
        """Delete a draft and its branch."""

    def publish_unpublished_entry(self, collection: str, slug: str) -> None:
        """Merge a draft branch into the main branch and delete it."""

    def get_statuses(self, collection: str, slug: str) -> List["StatusRecord"]:
        """Return commit status records of a draft branch."""
