"""Fuzzy matching for typo-tolerant scoring.

The scorer compares each query term against the whole text of a field, so a
fuzzy hit means the field is (almost) exactly the term: a tag such as
``"notes"`` matches the query ``"notess"``.

Length-based tolerance:
- No fuzzy matching for terms of 1-2 chars
- Max edit distance of 1 for terms of 3-5 chars
- Max edit distance of 2 for terms of 6+ chars
"""

from __future__ import annotations


MIN_FUZZY_TERM_LENGTH = 3


def levenshtein_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Keeps two rows of the dynamic programming table and stops early once
    every cell of a row exceeds ``max_distance``.

    Args:
        s1: First string.
        s2: Second string.
        max_distance: If provided, return max_distance+1 as soon as the
            distance is guaranteed to exceed it.

    Returns:
        Minimum number of single-character insertions, deletions or
        substitutions turning s1 into s2 (capped at max_distance+1).

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("notess", "notes")
        1
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    if len(s1) > len(s2):
        s1, s2 = s2, s1

    short_len, long_len = len(s1), len(s2)

    if max_distance is not None and long_len - short_len > max_distance:
        return max_distance + 1

    previous = list(range(short_len + 1))
    current = [0] * (short_len + 1)

    for j in range(1, long_len + 1):
        current[0] = j
        row_min = j
        for i in range(1, short_len + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            current[i] = min(
                previous[i] + 1,  # deletion
                current[i - 1] + 1,  # insertion
                previous[i - 1] + cost,  # substitution
            )
            row_min = min(row_min, current[i])

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        previous, current = current, previous

    return previous[short_len]


def get_max_edit_distance(term_length: int) -> int:
    """Maximum allowed edit distance for a term of the given length."""
    if term_length < MIN_FUZZY_TERM_LENGTH:
        return 0
    if term_length <= 5:
        return 1
    return 2


def is_fuzzy_match(text: str, term: str) -> bool:
    """True when ``text`` is within the term's edit-distance budget."""
    max_distance = get_max_edit_distance(len(term))
    if max_distance == 0:
        return False
    return levenshtein_distance(text, term, max_distance) <= max_distance
