"""Deploy preview detection from commit status records.

CI systems report a status on the draft branch when they build a preview
deployment. A status is taken to be the deploy preview when its context
equals the configured preview context, or, when none is configured, when its
context contains one of PREVIEW_CONTEXT_KEYWORDS.
"""

from typing import Iterable, List, Optional

from cms_backend_azure.vcs_client.models import StatusRecord

PREVIEW_CONTEXT_KEYWORDS: List[str] = ['deploy']


def is_preview_context(context: str, preview_context: str = "") -> bool:
    if preview_context:
        return context == preview_context
    return any(keyword in context for keyword in PREVIEW_CONTEXT_KEYWORDS)


def get_preview_status(
    statuses: Iterable[StatusRecord],
    preview_context: str = "",
) -> Optional[StatusRecord]:
    """Return the first status that describes a deploy preview, if any."""
    for status in statuses:
        if is_preview_context(status.context, preview_context):
            return status
    return None
