"""
Title similarity for cannibalization detection.

Uses a normalized Levenshtein distance over case-folded, stripped titles.
"""

import logging
from typing import Iterable

from .models import SimilarityResult

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.85


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic edit distance with unit cost insert, delete and substitute.

    Keeps only two rows of the DP table, sized by the shorter string.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,           # deletion
                current[j - 1] + 1,        # insertion
                previous[j - 1] + (char_a != char_b),  # substitution
            ))
        previous = current
    return previous[-1]


def _normalize(text: str) -> str:
    return text.strip().casefold()


def similarity(a: str, b: str) -> float:
    """
    Similarity score between two strings in [0, 1].

    Both inputs are stripped and case-folded. Equal strings (including two
    empty ones) score 1.0.

    Args:
        a: First string.
        b: Second string.

    Returns:
        1 - distance / max(len(a), len(b)).
    """
    a = _normalize(a)
    b = _normalize(b)
    if a == b:
        return 1.0

    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0

    return 1.0 - (levenshtein_distance(a, b) / max_len)


def check_similarity(
    candidate: str,
    existing: Iterable[str],
    threshold: float = DEFAULT_THRESHOLD,
) -> SimilarityResult:
    """
    Compare a candidate title against existing titles.

    Args:
        candidate: Title to check.
        existing: Titles already in use, in any order.
        threshold: Score at or above which a title counts as similar.

    Returns:
        SimilarityResult with the best score and every existing title at or
        above the threshold, in input order.
    """
    max_score = 0.0
    compared = 0
    similar_titles: list[str] = []

    for title in existing:
        compared += 1
        score = similarity(candidate, title)
        if score > max_score:
            max_score = score
        if score >= threshold:
            similar_titles.append(title)

    is_similar = compared > 0 and max_score >= threshold

    logger.debug(
        f"Title similarity check: max_similarity={max_score:.3f} "
        f"is_similar={is_similar} similar_count={len(similar_titles)}"
    )

    return SimilarityResult(
        is_similar=is_similar,
        similarity_score=max_score,
        similar_titles=similar_titles,
    )
