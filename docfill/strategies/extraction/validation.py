"""Placeholder normalization and validation.

Every raw match, whatever matcher produced it, goes through
``clean_placeholder`` and ``is_valid_placeholder`` before it is kept.
"""

import html
import re

MIN_PLACEHOLDER_LENGTH = 2
MAX_PLACEHOLDER_LENGTH = 50

# Markup and document-infrastructure terms. A candidate containing any of
# these as a word is markup noise, e.g. "kix.abc123" or "google_internal".
MARKUP_DENYLIST = frozenset(
    {
        "google",
        "docs",
        "kix",
        "span",
        "div",
        "body",
        "html",
        "head",
        "meta",
        "script",
        "style",
        "class",
        "font",
        "margin",
        "padding",
    }
)

# Generic words rejected only when they are the whole candidate.
GENERIC_DENYLIST = frozenset(
    {
        "document",
        "edit",
        "sharing",
        "export",
        "format",
        "size",
        "color",
        "title",
        "function",
        "var",
        "let",
        "const",
        "return",
        "if",
        "else",
        "for",
    }
)

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_WRAPPING_QUOTES_RE = re.compile(r"^[\"'“”‘’]+|[\"'“”‘’]+$")
_NUMERIC_RE = re.compile(r"^\d+$")
_PUNCTUATION_RE = re.compile(r"^[\W_]+$")
_WORD_SPLIT_RE = re.compile(r"[^a-z0-9]+")


def clean_placeholder(raw: str | None) -> str | None:
    """Normalize a raw match into a candidate placeholder.

    Decodes HTML entities, strips tags, collapses whitespace, trims and
    removes wrapping quotes. Case is preserved.

    Returns:
        The cleaned string, or None if nothing usable remains.
    """
    if not raw or not isinstance(raw, str):
        return None

    cleaned = html.unescape(raw)
    cleaned = _TAG_RE.sub("", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    cleaned = _WRAPPING_QUOTES_RE.sub("", cleaned).strip()

    return cleaned or None


def is_valid_placeholder(candidate: str | None) -> bool:
    """Check a cleaned candidate against the placeholder rules.

    A placeholder is 2 to 50 characters, contains a letter, is not purely
    digits or punctuation and is not markup or infrastructure noise.
    """
    if not candidate or not isinstance(candidate, str):
        return False

    value = candidate.strip()
    if not MIN_PLACEHOLDER_LENGTH <= len(value) <= MAX_PLACEHOLDER_LENGTH:
        return False
    if _NUMERIC_RE.match(value) or _PUNCTUATION_RE.match(value):
        return False
    if not any(ch.isalpha() for ch in value):
        return False
    if "<" in value or ">" in value or "{" in value or "}" in value:
        return False

    lowered = value.lower()
    if lowered in GENERIC_DENYLIST:
        return False
    words = {w for w in _WORD_SPLIT_RE.split(lowered) if w}
    return words.isdisjoint(MARKUP_DENYLIST)


def normalize_and_validate(raw: str | None) -> str | None:
    """Clean a raw match and return it only if it is a valid placeholder."""
    cleaned = clean_placeholder(raw)
    if cleaned is not None and is_valid_placeholder(cleaned):
        return cleaned
    return None
