"""String similarity utilities for field matching.

Confidence tiers and the semantic cluster table are empirical constants
kept for compatibility with existing mappings; they are tunable, not derived.
"""

import re

EXACT_MATCH_CONFIDENCE = 1.0
CONTAINMENT_CONFIDENCE = 0.8
SEMANTIC_CONFIDENCE = 0.6

SEMANTIC_CLUSTERS: tuple[frozenset[str], ...] = (
    frozenset({"name", "title", "label"}),
    frozenset({"date", "time", "created", "modified"}),
    frozenset({"amount", "price", "cost", "total"}),
    frozenset({"email", "mail"}),
    frozenset({"phone", "tel", "number"}),
    frozenset({"address", "location"}),
    frozenset({"description", "notes", "details"}),
    frozenset({"quantity", "qty"}),
    frozenset({"item", "product", "service"}),
    frozenset({"customer", "client", "user"}),
)

_BRACKETS_RE = re.compile(r"[{}\[\]]")


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute).

    Runs in O(len(a) * len(b)) time. Only two rows of the table are kept, so
    space is O(min(len(a), len(b))).
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def edit_similarity(a: str, b: str) -> float:
    """Normalized edit similarity: (max_len - distance) / max_len, in [0, 1]."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest


def comparison_key(value: str) -> str:
    """Strip bracket syntax and surrounding space, then lower-case."""
    return _BRACKETS_RE.sub("", value).strip().lower()


def share_semantic_cluster(a: str, b: str) -> bool:
    """True if some cluster has a term in ``a`` and a term in ``b``."""
    return any(
        any(term in a for term in cluster) and any(term in b for term in cluster)
        for cluster in SEMANTIC_CLUSTERS
    )


def match_confidence(template_key: str, field_key: str) -> float:
    """Confidence that two comparison keys name the same thing.

    Tiers, first match wins: exact (1.0), containment (0.8), shared
    semantic cluster (0.6), otherwise normalized edit similarity.
    """
    if template_key == field_key:
        return EXACT_MATCH_CONFIDENCE
    if template_key and field_key and (template_key in field_key or field_key in template_key):
        return CONTAINMENT_CONFIDENCE
    if share_semantic_cluster(template_key, field_key):
        return SEMANTIC_CONFIDENCE
    return edit_similarity(template_key, field_key)
