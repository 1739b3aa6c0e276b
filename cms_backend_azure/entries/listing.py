"""Generic entry listing helpers.

These functions turn file listings into loaded entries. They know nothing
about a particular remote: the backend passes in callables that list, read
and describe files.
"""

import logging
from typing import Callable, List, Optional, Union

from cms_backend_azure.media.fetcher import BoundedFetcher
from cms_backend_azure.vcs_client.errors import NotFoundError
from cms_backend_azure.vcs_client.models import FileMetadata

from .models import ImplementationEntry, ImplementationFile

logger = logging.getLogger(__name__)

ReadFile = Callable[..., Union[str, bytes]]
ReadFileMetadata = Callable[[str, Optional[str]], FileMetadata]


def filter_by_extension(path: str, extension: str) -> bool:
    """Return True if path ends with extension (leading dot optional)."""
    if not extension.startswith('.'):
        extension = f".{extension}"
    return (path or '').endswith(extension)


def fetch_files(
    files: List[ImplementationFile],
    read_file: ReadFile,
    read_file_metadata: ReadFileMetadata,
    api_name: str,
    fetcher: BoundedFetcher,
) -> List[ImplementationEntry]:
    """Load content and metadata of every file, in listing order.

    A file that fails to load is logged and left out of the result; the
    other files are still returned.
    """

    def load(file: ImplementationFile) -> Optional[ImplementationEntry]:
        try:
            data = read_file(file.path, file.id, parse_text=True)
            metadata = read_file_metadata(file.path, file.id)
        except Exception as e:
            logger.error(f"Failed to load file from {api_name}: {file.path} ({e})")
            return None

        loaded = ImplementationFile(
            path=file.path,
            id=file.id,
            label=file.label,
            author=metadata.author,
            updated_on=metadata.updated_on,
        )
        return ImplementationEntry(file=loaded, data=data)

    results = fetcher.map(load, files)
    entries = [entry for entry in results if entry is not None]

    if len(entries) < len(files):
        logger.warning(
            f"Loaded {len(entries)}/{len(files)} files from {api_name}, "
            f"{len(files) - len(entries)} failed"
        )
    return entries


def entries_by_folder(
    list_files: Callable[[], List[ImplementationFile]],
    read_file: ReadFile,
    read_file_metadata: ReadFileMetadata,
    api_name: str,
    fetcher: BoundedFetcher,
) -> List[ImplementationEntry]:
    files = list_files()
    return fetch_files(files, read_file, read_file_metadata, api_name, fetcher)


def entries_by_files(
    files: List[ImplementationFile],
    read_file: ReadFile,
    read_file_metadata: ReadFileMetadata,
    api_name: str,
    fetcher: BoundedFetcher,
) -> List[ImplementationEntry]:
    return fetch_files(files, read_file, read_file_metadata, api_name, fetcher)


def unpublished_entries(list_entries_keys: Callable[[], List[str]]) -> List[str]:
    """List draft content keys, treating a missing workflow store as empty."""
    try:
        return list_entries_keys()
    except NotFoundError:
        logger.info("No unpublished entries found on the remote")
        return []
