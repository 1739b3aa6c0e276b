"""Entry models and folder/file listing helpers."""

from .listing import (
    entries_by_files,
    entries_by_folder,
    fetch_files,
    filter_by_extension,
    unpublished_entries,
)
from .models import DataFile, Entry, ImplementationEntry, ImplementationFile, PersistOptions

__all__ = [
    "DataFile",
    "Entry",
    "ImplementationEntry",
    "ImplementationFile",
    "PersistOptions",
    "entries_by_files",
    "entries_by_folder",
    "fetch_files",
    "filter_by_extension",
    "unpublished_entries",
]
