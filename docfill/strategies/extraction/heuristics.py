"""Heuristic placeholder extractors.

These do not rely on the bracket convention surviving transport. They look
for labels next to braces, explicit field hints, markup attributes and keys
of embedded JSON objects. They are noisier than the bracket matchers; the
validation gate bounds that noise.
"""

import json
import re
from itertools import islice

from docfill.strategies.extraction.matchers import DEFAULT_MAX_MATCHES

# Attribute values containing one of these are document infrastructure.
VENDOR_NAMES = ("google", "gstatic", "docs-", "kix")

_LABEL_PATTERNS = (
    re.compile(r"(\w+):\s*\{\{"),
    re.compile(r"\{\{\s*(\w+)\s*\}\}"),
)

_HINT_PATTERNS = (
    re.compile(r"placeholder[\"'\s]*[:=][\"'\s]*(\w+)", re.IGNORECASE),
    re.compile(r"(?<![\w-])field[\"'\s]*[:=][\"'\s]*(\w+)", re.IGNORECASE),
)

_ATTRIBUTE_PATTERNS = (
    re.compile(r"data-field[\"'\s]*=[\"'\s]*([^\"'\s>]+)", re.IGNORECASE),
    re.compile(r"\bname[\"'\s]*=[\"'\s]*([^\"'\s>]+)", re.IGNORECASE),
    re.compile(r"\bid[\"'\s]*=[\"'\s]*([^\"'\s>]+)", re.IGNORECASE),
)

# Innermost objects with at least one quoted string; balanced by construction.
_JSON_OBJECT_RE = re.compile(r"\{[^{}]*\"[^\"]*\"[^{}]*\}")


def _captures(patterns: tuple[re.Pattern[str], ...], content: str, limit: int) -> list[str]:
    found: list[str] = []
    for pattern in patterns:
        found.extend(m.group(1) for m in islice(pattern.finditer(content), limit))
    return found


def find_labels(content: str, limit: int = DEFAULT_MAX_MATCHES) -> list[str]:
    """Words used as labels in front of a placeholder (``Total: {{``)."""
    return _captures(_LABEL_PATTERNS, content, limit)


def find_field_hints(content: str, limit: int = DEFAULT_MAX_MATCHES) -> list[str]:
    """Values of explicit ``placeholder=`` and ``field=`` hints."""
    return _captures(_HINT_PATTERNS, content, limit)


def find_attribute_values(content: str, limit: int = DEFAULT_MAX_MATCHES) -> list[str]:
    """Values of data-field, name and id attributes, minus vendor markup."""
    return [
        value
        for value in _captures(_ATTRIBUTE_PATTERNS, content, limit)
        if not any(vendor in value.lower() for vendor in VENDOR_NAMES)
    ]


def find_json_keys(content: str, limit: int = DEFAULT_MAX_MATCHES) -> list[str]:
    """Keys of JSON objects embedded in the content.

    Substrings that fail to parse, or parse to something other than an
    object, are skipped.
    """
    keys: list[str] = []
    for match in islice(_JSON_OBJECT_RE.finditer(content), limit):
        try:
            parsed = json.loads(match.group(0))
        except ValueError:
            continue
        if isinstance(parsed, dict):
            keys.extend(str(key) for key in parsed)
    return keys


HEURISTICS = (
    ("labels", find_labels),
    ("field_hints", find_field_hints),
    ("attributes", find_attribute_values),
    ("json_keys", find_json_keys),
)


def run_heuristics(content: str, limit: int = DEFAULT_MAX_MATCHES) -> dict[str, list[str]]:
    """Apply every heuristic extractor to the whole content."""
    return {name: extractor(content, limit) for name, extractor in HEURISTICS}
