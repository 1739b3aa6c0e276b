"""In-memory implementation of the version-control API.

InMemoryAPI keeps branches, drafts and commit statuses in dictionaries. It
behaves like a remote repository closely enough to develop an editor against
it without network access, and it is what the integration tests run on.
Each call is atomic with respect to the others; nothing persists after the
process exits.
"""

import hashlib
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple, Union

from cms_backend_azure.entries.models import DataFile, PersistOptions
from cms_backend_azure.media.models import AssetProxy
from cms_backend_azure.workflow.content_key import (
    CMS_BRANCH_PREFIX,
    branch_from_collection_slug,
    branch_from_content_key,
    generate_content_key,
)
from cms_backend_azure.workflow.models import (
    UnpublishedEntry,
    UnpublishedEntryDiff,
    WorkflowStatus,
)

from .errors import APIError, InvalidCredentialsError, NotFoundError
from .models import CommitAuthor, FileMetadata, RemoteFile, StatusRecord, User
from .protocol import ApiConfig

logger = logging.getLogger(__name__)

API_NAME = 'In-memory'

Content = Union[str, bytes]


def _as_bytes(content: Content) -> bytes:
    return content.encode('utf-8') if isinstance(content, str) else content


def git_blob_sha(content: Content) -> str:
    """Object id git would give this content."""
    data = _as_bytes(content)
    return hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()


@dataclass
class Commit:
    """A changeset recorded by InMemoryAPI."""

    branch: str
    message: str
    paths: List[str]
    author: Optional[CommitAuthor] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class _Draft:
    collection: str
    slug: str
    status: str
    updated_on: datetime
    # main branch files when the draft branch was created
    base: Dict[str, Content] = field(default_factory=dict)


class InMemoryAPI:
    """Version-control API backed by process memory.

    Example:
        >>> api = InMemoryAPI(User("1", "Jane", "jane@example.com"),
        ...                   files={"content/posts/a.md": "---\\ntitle: A\\n---"})
        >>> backend = AzureBackend(config, api_factory=memory_api_factory(api))
    """

    def __init__(
        self,
        user: Optional[User] = None,
        files: Optional[Dict[str, Content]] = None,
        branch: str = 'master',
        initial_workflow_status: str = "",
        squash_merges: bool = False,
    ):
        self._user = user
        self.branch = branch
        self.initial_workflow_status = initial_workflow_status or WorkflowStatus.DRAFT.value
        self.squash_merges = squash_merges
        self.commit_author: Optional[CommitAuthor] = None
        self.commits: List[Commit] = []

        self._branches: Dict[str, Dict[str, Content]] = {branch: dict(files or {})}
        self._metadata: Dict[Tuple[str, str], FileMetadata] = {}
        self._drafts: Dict[str, _Draft] = {}
        self._statuses: Dict[str, List[StatusRecord]] = {}
        self._lock = threading.RLock()

    def configure(self, config: ApiConfig) -> None:
        """Apply settings passed by AzureBackend.authenticate()."""
        with self._lock:
            if config.branch != self.branch:
                self._branches[config.branch] = self._branches.pop(self.branch)
                self.branch = config.branch
            if config.initial_workflow_status:
                self.initial_workflow_status = config.initial_workflow_status
            self.squash_merges = config.squash_merges

    def user(self) -> User:
        if self._user is None:
            raise InvalidCredentialsError(endpoint=API_NAME)
        return self._user

    def _files(self, branch: Optional[str]) -> Dict[str, Content]:
        name = branch or self.branch
        if name not in self._branches:
            raise NotFoundError(f"Branch {name}", api_name=API_NAME)
        return self._branches[name]

    def read_file(
        self,
        path: str,
        sha: Optional[str] = None,
        *,
        branch: Optional[str] = None,
        parse_text: bool = True,
    ) -> Content:
        with self._lock:
            files = self._files(branch)
            path = path.lstrip('/')
            if path not in files:
                raise NotFoundError(f"File {path}", api_name=API_NAME)
            content = files[path]

        if sha is not None and git_blob_sha(content) != sha:
            logger.debug(f"Requested revision {sha} of {path} is not current, returning head")

        if parse_text:
            return content.decode('utf-8') if isinstance(content, bytes) else content
        return _as_bytes(content)

    def read_file_metadata(self, path: str, sha: Optional[str] = None) -> FileMetadata:
        with self._lock:
            return self._metadata.get((self.branch, path.lstrip('/')), FileMetadata())

    def list_files(self, folder: str) -> List[RemoteFile]:
        """List files directly inside folder on the main branch."""
        prefix = folder.strip('/')
        prefix = f"{prefix}/" if prefix else ""
        with self._lock:
            files = self._files(None)
            listed = [
                RemoteFile(
                    object_id=git_blob_sha(content),
                    relative_path=path,
                    size=len(_as_bytes(content)),
                    url=f"memory://{self.branch}/{path}",
                )
                for path, content in files.items()
                if path.startswith(prefix) and '/' not in path[len(prefix):]
            ]
        return sorted(listed, key=lambda f: f.relative_path)

    def list_unpublished_branches(self) -> List[str]:
        with self._lock:
            return sorted(b for b in self._branches if b.startswith(f"{CMS_BRANCH_PREFIX}/"))

    def _commit(self, branch: str, message: str, changes: Dict[str, Optional[Content]]) -> None:
        files = self._files(branch)
        now = datetime.now(timezone.utc)
        author = self.commit_author.name if self.commit_author else ""
        for path, content in changes.items():
            if content is None:
                files.pop(path, None)
                self._metadata.pop((branch, path), None)
            else:
                files[path] = content
                self._metadata[(branch, path)] = FileMetadata(author=author, updated_on=now)
        self.commits.append(
            Commit(
                branch=branch,
                message=message,
                paths=sorted(changes),
                author=self.commit_author,
                timestamp=now,
            )
        )
        logger.debug(f"Committed {len(changes)} files to {branch}: {message}")

    def persist_files(
        self,
        data_files: List[DataFile],
        media_files: List[AssetProxy],
        options: PersistOptions,
    ) -> None:
        changes: Dict[str, Optional[Content]] = {}
        for data_file in data_files:
            target = (data_file.new_path or data_file.path).lstrip('/')
            if data_file.new_path and data_file.new_path != data_file.path:
                changes[data_file.path.lstrip('/')] = None
            changes[target] = data_file.raw
        for media_file in media_files:
            changes[media_file.path.lstrip('/')] = media_file.file_obj.data

        with self._lock:
            if not options.use_workflow:
                self._commit(self.branch, options.commit_message, changes)
                return

            if not data_files or not options.collection_name:
                raise APIError(
                    "Workflow persist needs a collection name and at least one data file",
                    status_code=400,
                    api_name=API_NAME,
                )
            collection, slug = options.collection_name, data_files[0].slug
            content_key = generate_content_key(collection, slug)
            branch = branch_from_content_key(content_key)

            if branch not in self._branches:
                self._branches[branch] = dict(self._branches[self.branch])
                self._drafts[content_key] = _Draft(
                    collection=collection,
                    slug=slug,
                    status=options.status or self.initial_workflow_status,
                    updated_on=datetime.now(timezone.utc),
                    base=dict(self._branches[self.branch]),
                )
                logger.info(f"Created draft branch {branch}")

            self._commit(branch, options.commit_message, changes)
            self._drafts[content_key].updated_on = datetime.now(timezone.utc)

    def delete_files(self, paths: List[str], commit_message: str) -> None:
        with self._lock:
            files = self._files(None)
            missing = [p for p in paths if p.lstrip('/') not in files]
            if missing:
                raise NotFoundError(f"Files {', '.join(missing)}", api_name=API_NAME)
            self._commit(self.branch, commit_message, {p.lstrip('/'): None for p in paths})

    def _draft(self, content_key: str) -> _Draft:
        draft = self._drafts.get(content_key)
        if draft is None:
            raise NotFoundError(f"Unpublished entry {content_key}", api_name=API_NAME)
        return draft

    def _branch_changes(self, content_key: str) -> Dict[str, Content]:
        """Files changed on a draft branch since it was created."""
        draft = self._draft(content_key)
        branch_files = self._branches[branch_from_content_key(content_key)]
        return {
            path: content
            for path, content in branch_files.items()
            if draft.base.get(path) != content
        }

    def retrieve_unpublished_entry_data(self, content_key: str) -> UnpublishedEntry:
        with self._lock:
            draft = self._draft(content_key)
            main_files = self._branches[self.branch]
            diffs = [
                UnpublishedEntryDiff(
                    id=git_blob_sha(content),
                    path=path,
                    new_file=path not in main_files,
                )
                for path, content in sorted(self._branch_changes(content_key).items())
            ]
            return UnpublishedEntry(
                slug=draft.slug,
                collection=draft.collection,
                status=draft.status,
                diffs=diffs,
                updated_on=draft.updated_on,
                pull_request_author=self.commit_author.name if self.commit_author else None,
            )

    def update_unpublished_entry_status(
        self, collection: str, slug: str, new_status: str
    ) -> None:
        with self._lock:
            draft = self._draft(generate_content_key(collection, slug))
            logger.info(f"Moving {collection}/{slug} from {draft.status} to {new_status}")
            draft.status = new_status
            draft.updated_on = datetime.now(timezone.utc)

    def delete_unpublished_entry(self, collection: str, slug: str) -> None:
        content_key = generate_content_key(collection, slug)
        branch = branch_from_content_key(content_key)
        with self._lock:
            self._draft(content_key)
            del self._drafts[content_key]
            del self._branches[branch]
            self._statuses.pop(branch, None)
            for key in [k for k in self._metadata if k[0] == branch]:
                del self._metadata[key]

    def publish_unpublished_entry(self, collection: str, slug: str) -> None:
        content_key = generate_content_key(collection, slug)
        branch = branch_from_content_key(content_key)
        with self._lock:
            changes: Dict[str, Optional[Content]] = dict(self._branch_changes(content_key))
            verb = "Squash merge" if self.squash_merges else "Merge"
            self._commit(self.branch, f"{verb} {branch} into {self.branch}", changes)
            self.delete_unpublished_entry(collection, slug)
        logger.info(f"Published {content_key}")

    def get_statuses(self, collection: str, slug: str) -> List[StatusRecord]:
        branch = branch_from_collection_slug(collection, slug)
        with self._lock:
            if branch not in self._branches:
                raise NotFoundError(f"Branch {branch}", api_name=API_NAME)
            return list(self._statuses.get(branch, []))

    def add_status(self, collection: str, slug: str, status: StatusRecord) -> None:
        """Attach a commit status to a draft branch, as a CI system would."""
        branch = branch_from_collection_slug(collection, slug)
        with self._lock:
            if branch not in self._branches:
                raise NotFoundError(f"Branch {branch}", api_name=API_NAME)
            self._statuses.setdefault(branch, []).append(status)
        logger.debug(f"Added status {status.context}={status.state} to {collection}/{slug}")


def memory_api_factory(api: InMemoryAPI) -> Callable[[ApiConfig, str], InMemoryAPI]:
    """Return an AzureBackend api_factory that hands out api.

    Raises (from the factory):
        InvalidCredentialsError: If the token is empty
    """

    def factory(config: ApiConfig, token: str) -> InMemoryAPI:
        if not token:
            raise InvalidCredentialsError(endpoint=config.api_root)
        api.configure(config)
        return api

    return factory
