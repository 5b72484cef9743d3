"""Build and resolve the content locators handed to external viewers."""

from __future__ import annotations

import logging
from typing import Hashable

from .platform import PlatformContext

logger = logging.getLogger(__name__)


def attachment_uri(authority: str, account_id: Hashable, attachment_id: Hashable) -> str:
    """Return the raw-content URI for an attachment within an account."""
    return f"content://{authority}/{account_id}/{attachment_id}/RAW"


def resolve_content_locator(
    platform: PlatformContext, authority: str, account_id: Hashable, attachment_id: Hashable
) -> str:
    """Resolve an attachment to its content locator, falling back to the raw URI."""
    uri = attachment_uri(authority, account_id, attachment_id)
    try:
        resolved = platform.resolve_attachment_uri(uri)
    except Exception:
        logger.warning("Content resolution failed for %s; using attachment URI", uri, exc_info=True)
        return uri
    if not resolved:
        logger.debug("No content locator registered for %s", uri)
        return uri
    return resolved
