"""Levenshtein edit distance."""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Compute the Levenshtein distance between two strings.

    The distance is the minimum number of single-character insertions,
    deletions and substitutions turning ``a`` into ``b``. Comparison is
    case-sensitive; callers lowercase both sides when they want otherwise.

    Args:
        a: Source string
        b: Target string

    Returns:
        Non-negative edit distance
    """
    return Levenshtein.distance(a, b)


__all__ = ["edit_distance"]
