"""Azure DevOps backend for a git-based content editor.

AzureBackend lets an editing application treat an Azure DevOps git
repository as its content store. Entries and media are files on the main
branch; drafts ("unpublished entries") live on one branch each and move
through an editorial workflow until they are published (merged) or deleted.

The remote REST client is injected (see VersionControlAPI). This module adds
what the client does not provide:

1. Mapping drafts (collection + slug) to branches and back
2. Serializing workflow transitions behind one lock
3. Bounded-concurrency media downloads with local object URLs
"""

import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from cms_backend_azure.config.errors import ConfigError
from cms_backend_azure.config.models import AzureRepo, BackendConfig
from cms_backend_azure.entries.listing import (
    entries_by_files,
    entries_by_folder,
    filter_by_extension,
    unpublished_entries,
)
from cms_backend_azure.entries.models import (
    Entry,
    ImplementationEntry,
    ImplementationFile,
    PersistOptions,
)
from cms_backend_azure.media.blobs import basename, get_blob_sha, get_media_as_blob
from cms_backend_azure.media.fetcher import BoundedFetcher
from cms_backend_azure.media.models import (
    AssetProxy,
    DisplayURL,
    MediaAsset,
    UnpublishedEntryMediaFile,
)
from cms_backend_azure.media.object_urls import ObjectURLRegistry
from cms_backend_azure.models import AuthenticatedUser, BackendStatus
from cms_backend_azure.vcs_client.auth import Credentials
from cms_backend_azure.vcs_client.errors import NotAuthenticatedError
from cms_backend_azure.vcs_client.models import CommitAuthor, RemoteFile
from cms_backend_azure.vcs_client.protocol import ApiConfig, VersionControlAPI
from cms_backend_azure.workflow.content_key import (
    branch_from_collection_slug,
    content_key_from_branch,
    generate_content_key,
)
from cms_backend_azure.workflow.errors import (
    InvalidContentKeyError,
    MissingEntryIdentifierError,
)
from cms_backend_azure.workflow.locking import WorkflowLock, run_with_lock
from cms_backend_azure.workflow.models import DeployStatus, UnpublishedEntry
from cms_backend_azure.workflow.preview import get_preview_status

logger = logging.getLogger(__name__)

API_NAME = 'Azure DevOps'

ApiFactory = Callable[[ApiConfig, str], VersionControlAPI]


class AzureBackend:
    """Content backend on top of an Azure DevOps git repository.

    The backend owns, for its whole lifetime, the API client, one
    WorkflowLock guarding draft transitions, one BoundedFetcher capping
    concurrent downloads and the registry of object URLs it hands out.
    Several backends in one process share none of these.

    Example:
        >>> config = ConfigLoader.load("config.yml")
        >>> backend = AzureBackend(config, api_factory=MyAzureClient)
        >>> backend.authenticate(Authenticator().get_credentials())
        >>> for key in backend.unpublished_entries():
        ...     print(key)
    """

    def __init__(
        self,
        config: BackendConfig,
        api: Optional[VersionControlAPI] = None,
        api_factory: Optional[ApiFactory] = None,
        proxied: bool = False,
        initial_workflow_status: str = "",
    ):
        """Initialize the backend.

        Args:
            config: Backend settings
            api: An already-authenticated client (skips the factory)
            api_factory: Builds a client from ApiConfig and a token on
                authenticate()
            proxied: True when requests go through a local proxy, in which
                case no repository needs to be configured
            initial_workflow_status: Status given to newly created drafts

        Raises:
            ConfigError: If no repository is configured for a direct backend
        """
        if not proxied and not config.repo:
            raise ConfigError(
                'The Azure backend needs a "repo" in the backend configuration.',
                config_field='backend.repo',
            )

        self.config = config
        self.proxied = proxied
        self.initial_workflow_status = initial_workflow_status
        self.api = api
        self.api_factory = api_factory

        self.repo = AzureRepo.parse(config.repo) if config.repo else AzureRepo('', '', '')
        self.branch = config.branch
        self.api_root = config.api_root
        self.identity_url = config.identity_url
        self.squash_merges = config.squash_merges
        self.media_folder = config.media_folder.strip('/')
        self.preview_context = config.preview_context
        self.token: Optional[str] = None

        self.lock = WorkflowLock(timeout=config.lock_timeout)
        self.fetcher = BoundedFetcher(max_concurrent=config.max_concurrent_downloads)
        self.object_urls = ObjectURLRegistry()

    def _require_api(self, operation: str) -> VersionControlAPI:
        if self.api is None:
            raise NotAuthenticatedError(operation)
        return self.api

    def is_git_backend(self) -> bool:
        return True

    def status(self) -> BackendStatus:
        """Probe whether the current token still identifies a user.

        A failing probe is logged and reported as unauthenticated.
        """
        auth = False
        if self.api is not None:
            try:
                auth = bool(self.api.user())
            except Exception as e:
                logger.warning(f"Failed getting {API_NAME} user: {e}")
                auth = False

        return BackendStatus(auth_status=auth, api_status=True, status_page="")

    def authenticate(self, credentials: Credentials) -> AuthenticatedUser:
        """Create the API client for a token and load the current user.

        The user's name and email become the author of every commit made
        through this backend.

        Raises:
            ConfigError: If no api_factory was provided
            Exception: Errors from the client while loading the user
        """
        if self.api_factory is None:
            raise ConfigError(
                "An api_factory is required to authenticate the Azure backend",
                config_field='api_factory',
            )

        self.token = credentials.token
        api_config = ApiConfig(
            api_root=self.api_root,
            repo=self.repo,
            branch=self.branch,
            path='/',
            squash_merges=self.squash_merges,
            initial_workflow_status=self.initial_workflow_status,
        )
        self.api = self.api_factory(api_config, self.token)

        user = self.api.user()
        self.api.commit_author = CommitAuthor(name=user.display_name, email=user.email_address)
        logger.info(f"Authenticated to {API_NAME} as {user.display_name}")

        return AuthenticatedUser(
            id=user.id,
            name=user.display_name,
            email=user.email_address,
            token=credentials.token,
        )

    def restore_user(self, user: AuthenticatedUser) -> AuthenticatedUser:
        return self.authenticate(Credentials(token=user.token))

    def logout(self) -> None:
        """Forget the access token."""
        # TODO: end the identity-provider session as well, not just drop the token
        self.token = None

    def get_token(self) -> Optional[str]:
        return self.token

    def entries_by_folder(self, folder: str, extension: str) -> List[ImplementationEntry]:
        """Load every entry file under folder with the given extension."""
        api = self._require_api("list entries")

        def list_files() -> List[ImplementationFile]:
            files = api.list_files(folder)
            return [
                ImplementationFile(path=f.relative_path, id=f.object_id)
                for f in files
                if filter_by_extension(f.relative_path, extension)
            ]

        return entries_by_folder(
            list_files, api.read_file, api.read_file_metadata, API_NAME, self.fetcher
        )

    def entries_by_files(self, files: List[ImplementationFile]) -> List[ImplementationEntry]:
        api = self._require_api("load entries")
        return entries_by_files(
            files, api.read_file, api.read_file_metadata, API_NAME, self.fetcher
        )

    def get_entry(self, path: str) -> ImplementationEntry:
        """Read a single entry file from the main branch. Not cached."""
        api = self._require_api("get entry")
        data = api.read_file(path)
        return ImplementationEntry(file=ImplementationFile(path=path), data=data)

    def get_media(self) -> List[MediaAsset]:
        """List the media folder with a display URL for every file.

        Files are downloaded through the bounded fetcher. A file whose
        download fails keeps its remote URL as display URL.
        """
        api = self._require_api("list media")
        files = api.list_files(self.media_folder)
        if not files:
            return []

        def resolve(file: RemoteFile) -> MediaAsset:
            try:
                display_url = self._read_display_url(
                    api, DisplayURL(id=file.object_id, path=file.relative_path)
                )
            except Exception as e:
                logger.warning(
                    f"Failed to load media {file.relative_path}, using remote URL: {e}"
                )
                display_url = None

            return MediaAsset(
                id=file.object_id,
                name=file.relative_path.split('/')[-1],
                size=file.size,
                display_url=display_url or file.url,
                path=file.relative_path,
            )

        media = self.fetcher.map(resolve, files)
        logger.debug(f"Listed {len(media)} media files in {self.media_folder}")
        return media

    def _read_display_url(self, api: VersionControlAPI, display_url: DisplayURL) -> str:
        file_obj = get_media_as_blob(display_url.path, display_url.id, api.read_file)
        return self.object_urls.create_object_url(file_obj)

    def get_media_display_url(self, display_url: DisplayURL) -> str:
        """Download one media file and return an object URL for it.

        Holds one of the fetcher's download slots while downloading. Errors
        propagate.
        """
        api = self._require_api("get media display URL")
        return self.fetcher.call(self._read_display_url, api, display_url)

    def get_media_file(self, path: str) -> MediaAsset:
        """Download a media file; its id is the SHA-256 of its bytes."""
        api = self._require_api("get media file")
        file_obj = get_media_as_blob(path, None, api.read_file)
        url = self.object_urls.create_object_url(file_obj)

        return MediaAsset(
            id=get_blob_sha(file_obj.data),
            display_url=url,
            path=path,
            name=basename(path),
            size=file_obj.size,
            file=file_obj,
            url=url,
        )

    def revoke_display_url(self, url: str) -> bool:
        """Release an object URL handed out by this backend."""
        return self.object_urls.revoke_object_url(url)

    def persist_entry(self, entry: Entry, options: PersistOptions) -> None:
        """Commit an entry's data files and assets as one changeset."""
        api = self._require_api("persist entry")
        api.persist_files(entry.data_files, entry.assets, options)

    def persist_media(self, media_file: AssetProxy, options: PersistOptions) -> MediaAsset:
        """Commit one media file and return it as a displayable asset.

        The content hash is computed while the commit is in flight.
        """
        api = self._require_api("persist media")
        file_obj = media_file.file_obj

        with ThreadPoolExecutor(max_workers=1) as executor:
            sha_future = executor.submit(get_blob_sha, file_obj.data)
            api.persist_files([], [media_file], options)
            asset_id = sha_future.result()

        url = self.object_urls.create_object_url(file_obj)
        return MediaAsset(
            id=asset_id,
            display_url=url,
            path=media_file.path.lstrip('/'),
            name=file_obj.name,
            size=file_obj.size,
            file=file_obj,
            url=url,
        )

    def delete_files(self, paths: List[str], commit_message: str) -> None:
        api = self._require_api("delete files")
        api.delete_files(paths, commit_message)

    def load_media_file(self, branch: str, file: UnpublishedEntryMediaFile) -> MediaAsset:
        """Download a media file from a draft branch. Errors propagate."""
        api = self._require_api("load media file")
        read_file = functools.partial(api.read_file, branch=branch)
        file_obj = get_media_as_blob(file.path, None, read_file)

        return MediaAsset(
            id=file.path,
            display_url=self.object_urls.create_object_url(file_obj),
            path=file.path,
            name=basename(file.path),
            size=file_obj.size,
            file=file_obj,
        )

    def load_entry_media_files(
        self, branch: str, files: List[UnpublishedEntryMediaFile]
    ) -> List[MediaAsset]:
        """Download a draft's media files, sharing the download ceiling."""
        return self.fetcher.map(lambda file: self.load_media_file(branch, file), files)

    def unpublished_entries(self) -> List[str]:
        """Return the content keys of all drafts.

        Listed branches without the draft prefix are logged and skipped.
        """
        api = self._require_api("list unpublished entries")

        def list_entries_keys() -> List[str]:
            keys = []
            for branch in api.list_unpublished_branches():
                try:
                    keys.append(content_key_from_branch(branch))
                except InvalidContentKeyError:
                    logger.warning(f"Skipping branch {branch}: not a draft branch")
            return keys

        return unpublished_entries(list_entries_keys)

    def unpublished_entry(
        self,
        id: Optional[str] = None,
        collection: Optional[str] = None,
        slug: Optional[str] = None,
    ) -> UnpublishedEntry:
        """Load a draft by content key, or by collection and slug.

        Raises:
            MissingEntryIdentifierError: If neither id nor both collection
                and slug are given (no remote call is made)
        """
        if id:
            content_key = id
        elif collection and slug:
            content_key = generate_content_key(collection, slug)
        else:
            raise MissingEntryIdentifierError()

        api = self._require_api("get unpublished entry")
        return api.retrieve_unpublished_entry_data(content_key)

    def get_branch(self, collection: str, slug: str) -> str:
        return branch_from_collection_slug(collection, slug)

    def unpublished_entry_media_file(
        self, collection: str, slug: str, path: str, id: Optional[str] = None
    ) -> MediaAsset:
        branch = self.get_branch(collection, slug)
        return self.load_media_file(branch, UnpublishedEntryMediaFile(path=path, id=id))

    def unpublished_entry_data_file(
        self, collection: str, slug: str, path: str, id: Optional[str] = None
    ) -> str:
        branch = self.get_branch(collection, slug)
        api = self._require_api("read unpublished entry file")
        return api.read_file(path, id, branch=branch)

    def update_unpublished_entry_status(
        self, collection: str, slug: str, new_status: str
    ) -> None:
        api = self._require_api("update entry status")
        return run_with_lock(
            self.lock,
            lambda: api.update_unpublished_entry_status(collection, slug, new_status),
            "update entry status",
        )

    def delete_unpublished_entry(self, collection: str, slug: str) -> None:
        api = self._require_api("delete entry")
        return run_with_lock(
            self.lock,
            lambda: api.delete_unpublished_entry(collection, slug),
            "delete entry",
        )

    def publish_unpublished_entry(self, collection: str, slug: str) -> None:
        api = self._require_api("publish entry")
        return run_with_lock(
            self.lock,
            lambda: api.publish_unpublished_entry(collection, slug),
            "publish entry",
        )

    def get_deploy_preview(self, collection: str, slug: str) -> Optional[DeployStatus]:
        """Find the deploy preview of a draft from its branch statuses.

        Returns None when there is no preview, and also when the lookup
        fails for any reason.
        """
        try:
            api = self._require_api("get deploy preview")
            statuses = api.get_statuses(collection, slug)
            deploy_status = get_preview_status(statuses, self.preview_context)
        except Exception as e:
            logger.debug(f"Deploy preview lookup failed for {collection}/{slug}: {e}")
            return None

        if deploy_status is None:
            return None
        return DeployStatus(url=deploy_status.target_url, state=deploy_status.state)
