"""Document id extraction from shareable URLs."""

import re

from docfill.interfaces.acquisition import LocatorInvalidError

# Tried in order; the first match wins.
_DOCUMENT_ID_PATTERNS = (
    re.compile(r"/document/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"/document/d/([^/?#]+)"),
    re.compile(r"[?&]id=([a-zA-Z0-9_-]+)"),
)


def extract_document_id(locator: str) -> str:
    """Derive the document id from a shareable document URL.

    Args:
        locator: A URL such as ``https://docs.google.com/document/d/<id>/edit``.

    Returns:
        The document id segment.

    Raises:
        LocatorInvalidError: If the locator has no recognizable id.
    """
    if not isinstance(locator, str) or not locator.strip():
        raise LocatorInvalidError("Could not extract document ID from URL: empty locator")

    for pattern in _DOCUMENT_ID_PATTERNS:
        match = pattern.search(locator)
        if match:
            return match.group(1)

    raise LocatorInvalidError(f"Could not extract document ID from URL: {locator}")
