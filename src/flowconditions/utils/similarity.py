"""Fuzzy string similarity based on Levenshtein edit distance."""

from typing import Iterable, Tuple


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ch_a in enumerate(a, start=1):
        current = [i]
        for j, ch_b in enumerate(b, start=1):
            cost = 0 if ch_a == ch_b else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Edit distance scaled to [0, 1]; 1.0 means identical.

    Two empty strings have no characters to compare and score 0.0.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    return (longest - levenshtein(a, b)) / longest


def best_similarity(text: str, candidates: Iterable[str]) -> Tuple[float, str]:
    """Highest similarity of `text` against any candidate, with that candidate."""
    best, best_candidate = 0.0, ""
    for candidate in candidates:
        score = similarity(text, candidate)
        if score > best:
            best, best_candidate = score, candidate
    return best, best_candidate
