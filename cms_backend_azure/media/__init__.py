"""Media download, hashing and local object URLs."""

from .blobs import get_blob_sha, get_media_as_blob
from .fetcher import MAX_CONCURRENT_DOWNLOADS, BoundedFetcher
from .models import AssetProxy, DisplayURL, FileObject, MediaAsset, UnpublishedEntryMediaFile
from .object_urls import ObjectURLRegistry

__all__ = [
    "AssetProxy",
    "BoundedFetcher",
    "DisplayURL",
    "FileObject",
    "MAX_CONCURRENT_DOWNLOADS",
    "MediaAsset",
    "ObjectURLRegistry",
    "UnpublishedEntryMediaFile",
    "get_blob_sha",
    "get_media_as_blob",
]
