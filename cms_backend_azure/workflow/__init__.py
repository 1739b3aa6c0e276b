"""Editorial workflow for draft entries.

Drafts are identified by content keys and stored on one git branch each.
This package maps keys to branches, serializes workflow transitions and
detects deploy previews.
"""

from cms_backend_azure.workflow.content_key import (
    CMS_BRANCH_PREFIX,
    branch_from_collection_slug,
    branch_from_content_key,
    content_key_from_branch,
    generate_content_key,
)
from cms_backend_azure.workflow.errors import (
    InvalidContentKeyError,
    LockAcquisitionError,
    MissingEntryIdentifierError,
    WorkflowError,
)
from cms_backend_azure.workflow.locking import WorkflowLock, run_with_lock
from cms_backend_azure.workflow.models import (
    DeployStatus,
    UnpublishedEntry,
    UnpublishedEntryDiff,
    WorkflowStatus,
)
from cms_backend_azure.workflow.preview import get_preview_status, is_preview_context

__all__ = [
    # Errors
    'InvalidContentKeyError',
    'LockAcquisitionError',
    'MissingEntryIdentifierError',
    'WorkflowError',
    # Content keys
    'CMS_BRANCH_PREFIX',
    'branch_from_collection_slug',
    'branch_from_content_key',
    'content_key_from_branch',
    'generate_content_key',
    # Locking
    'WorkflowLock',
    'run_with_lock',
    # Preview
    'get_preview_status',
    'is_preview_context',
    # Models
    'DeployStatus',
    'UnpublishedEntry',
    'UnpublishedEntryDiff',
    'WorkflowStatus',
]
