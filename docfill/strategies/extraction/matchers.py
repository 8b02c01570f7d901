"""Bracket-convention placeholder matchers.

Each matcher is a compiled pattern whose first group captures the raw
placeholder text. Matchers are run independently over the whole content;
none of them carries state between calls.
"""

import re
from dataclasses import dataclass
from itertools import islice

DEFAULT_MAX_MATCHES = 100

# Any run of markup tags and whitespace. Each character has one way to match.
_TAGS = r"(?:<[^>]+>|\s)*"


@dataclass(frozen=True)
class PlaceholderMatcher:
    """A named pattern that captures raw placeholder text in group 1."""

    name: str
    pattern: re.Pattern[str]

    def find(self, content: str, limit: int = DEFAULT_MAX_MATCHES) -> tuple[str, ...]:
        """Return up to ``limit`` raw captures from ``content``."""
        return tuple(
            m.group(1) for m in islice(self.pattern.finditer(content), limit) if m.group(1)
        )


BRACKET_MATCHERS: tuple[PlaceholderMatcher, ...] = (
    PlaceholderMatcher("curly_spaced", re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")),
    PlaceholderMatcher("curly_tight", re.compile(r"\{\{([^{}]*)\}\}")),
    PlaceholderMatcher("square_spaced", re.compile(r"\[\[\s*([^\[\]]+?)\s*\]\]")),
    PlaceholderMatcher("square_tight", re.compile(r"\[\[([^\[\]]*)\]\]")),
    PlaceholderMatcher(
        "entity_decimal",
        re.compile(r"&#0*123;&#0*123;\s*([^&]+?)\s*&#0*125;&#0*125;"),
    ),
    PlaceholderMatcher(
        "entity_hex",
        re.compile(r"&#x0*7b;&#x0*7b;\s*([^&]+?)\s*&#x0*7d;&#x0*7d;", re.IGNORECASE),
    ),
    PlaceholderMatcher(
        "entity_named",
        re.compile(r"&lcub;&lcub;\s*([^&]+?)\s*&rcub;&rcub;"),
    ),
    # Each brace (or each pair) wrapped in its own tag, e.g.
    # <span>{{</span>name<span>}}</span> or <span>{</span><span>{</span>...
    PlaceholderMatcher(
        "tag_split",
        re.compile(
            r"\{" + _TAGS + r"\{\s*((?:[^{}<]|<[^>]+>)+?)\s*\}" + _TAGS + r"\}"
        ),
    ),
)


def run_matchers(
    content: str,
    matchers: tuple[PlaceholderMatcher, ...] = BRACKET_MATCHERS,
    limit: int = DEFAULT_MAX_MATCHES,
) -> dict[str, tuple[str, ...]]:
    """Apply every matcher to the whole content.

    Returns:
        Raw captures keyed by matcher name, in matcher order.
    """
    return {matcher.name: matcher.find(content, limit) for matcher in matchers}


# Census of raw markers, reported in diagnostics only.
_MARKER_PATTERNS = {
    "double_braces": re.compile(r"\{\{[^}]*\}\}"),
    "single_braces": re.compile(r"\{[^}]*\}"),
    "double_brackets": re.compile(r"\[\[[^\]]*\]\]"),
    "numeric_entities": re.compile(r"&#\d+;"),
    "spans_with_braces": re.compile(r"<span[^>]*>[^<]*\{[^<]*</span>"),
}

_QUICK_MARKERS = re.compile(r"\{\{|\}\}|\[\[|&#123;|&#125;|&#x7[bd];|&lcub;|&rcub;", re.IGNORECASE)


def has_placeholder_markers(content: str) -> bool:
    """Quick check for anything that looks like placeholder markup."""
    return bool(content) and _QUICK_MARKERS.search(content) is not None


def count_markers(content: str) -> dict[str, int]:
    """Count raw placeholder-like markers by kind."""
    return {name: len(pattern.findall(content)) for name, pattern in _MARKER_PATTERNS.items()}
