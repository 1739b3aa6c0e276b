"""Mapping between draft entries and their git branches.

A draft is identified by a content key derived from its collection and slug.
Each key maps to exactly one branch name and back. Branch names are stored in
the remote repository, so the mapping must never change between releases.

    ("posts", "hello-world")  ->  "posts/hello-world"  ->  "cms/posts/hello-world"
"""

from .errors import InvalidContentKeyError

CMS_BRANCH_PREFIX = 'cms'
KEY_SEPARATOR = '/'

_BRANCH_PREFIX = f"{CMS_BRANCH_PREFIX}/"


def generate_content_key(collection: str, slug: str) -> str:
    """Build the content key of a draft.

    Args:
        collection: Collection name (nested collections contain '/')
        slug: Entry slug (may contain '/' for nested entries)

    Raises:
        InvalidContentKeyError: If collection or slug is empty
    """
    if not collection:
        raise InvalidContentKeyError(collection, "collection cannot be empty")
    if not slug:
        raise InvalidContentKeyError(slug, "slug cannot be empty")
    return f"{collection}{KEY_SEPARATOR}{slug}"


def branch_from_content_key(content_key: str) -> str:
    """Return the branch name backing a content key."""
    if not content_key:
        raise InvalidContentKeyError(content_key, "content key cannot be empty")
    return f"{_BRANCH_PREFIX}{content_key}"


def content_key_from_branch(branch: str) -> str:
    """Return the content key of a draft branch.

    Raises:
        InvalidContentKeyError: If the branch is not a draft branch
    """
    if not branch.startswith(_BRANCH_PREFIX) or len(branch) == len(_BRANCH_PREFIX):
        raise InvalidContentKeyError(
            branch, f"not a draft branch (expected prefix '{_BRANCH_PREFIX}')"
        )
    return branch[len(_BRANCH_PREFIX):]


def branch_from_collection_slug(collection: str, slug: str) -> str:
    return branch_from_content_key(generate_content_key(collection, slug))
