"""Text normalization and edit-distance similarity.

Levenshtein distance is the only distance primitive used by the matchers;
similarity is that distance expressed as a percentage of the longer string.
"""

from __future__ import annotations

import re

_STRIP_PATTERN = re.compile(r"[^\w\s-]")
_SPACE_PATTERN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Canonicalize a raw string for comparison.

    Lowercases, drops everything except word characters, whitespace and
    hyphens, collapses runs of whitespace and trims the ends. Idempotent.

    Args:
        text: Raw text, possibly empty

    Returns:
        Normalized text
    """
    text = _STRIP_PATTERN.sub("", text.lower())
    return _SPACE_PATTERN.sub(" ", text).strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Calculate Levenshtein (edit) distance between two strings.

    Unit cost for insertion, deletion and substitution. Row ``j`` of the
    matrix walks ``b`` and column ``i`` walks ``a``.

    Args:
        a: First string
        b: Second string

    Returns:
        Number of edits needed
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            indicator = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j][i - 1] + 1,
                matrix[j - 1][i] + 1,
                matrix[j - 1][i - 1] + indicator,
            )

    return matrix[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """Calculate case-insensitive percentage similarity.

    Args:
        a: First string
        b: Second string

    Returns:
        Similarity from 0.0 (nothing in common) to 100.0 (identical).
        Two empty strings are identical.
    """
    a = a.lower()
    b = b.lower()

    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0

    distance = levenshtein_distance(a, b)
    return max(0.0, (max_len - distance) / max_len * 100)
