"""Configuration models for the Azure DevOps backend."""

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

DEFAULT_BRANCH = 'master'
DEFAULT_API_ROOT = 'https://dev.azure.com'


@dataclass(frozen=True)
class AzureRepo:
    """Location of an Azure DevOps repository.

    Attributes:
        org: Organisation name
        project: Project name
        name: Repository name (defaults to the project name)
    """

    org: str
    project: str
    name: str

    @classmethod
    def parse(cls, location: Optional[str]) -> "AzureRepo":
        """Parse 'organisation/project/repo' (or 'organisation/project').

        Raises:
            ConfigError: If location is empty or lacks a project
        """
        components = [c for c in (location or '').strip('/').split('/', 2) if c]
        if len(components) < 2:
            raise ConfigError(
                "An Azure repository must be specified in the format "
                f"'organisation/project/repo', got {location!r}",
                config_field='repo',
            )
        org, project = components[0], components[1]
        name = components[2] if len(components) > 2 else project
        return cls(org=org, project=project, name=name)

    def __str__(self) -> str:
        return f"{self.org}/{self.project}/{self.name}"


@dataclass
class BackendConfig:
    """Settings of an AzureBackend.

    Attributes:
        repo: Repository location ('organisation/project/repo'); may be None
            only for proxied backends
        branch: Main branch that published content lives on
        api_root: Base URL of the Azure DevOps REST API
        identity_url: Identity service URL used by the auth UI
        squash_merges: Squash draft branches when publishing
        preview_context: Exact status context naming the deploy preview
        media_folder: Repository folder holding media files
        max_concurrent_downloads: Ceiling on simultaneous remote reads
        lock_timeout: Seconds to wait for the workflow lock
    """

    repo: Optional[str] = None
    branch: str = DEFAULT_BRANCH
    api_root: str = DEFAULT_API_ROOT
    identity_url: str = ""
    squash_merges: bool = False
    preview_context: str = ""
    media_folder: str = ""
    max_concurrent_downloads: int = 10
    lock_timeout: float = 15.0

    def __post_init__(self) -> None:
        self.media_folder = (self.media_folder or '').strip('/')
