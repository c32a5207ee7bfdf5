"""Similarity scoring between two normalized strings.

Three independent algorithms each produce a 0-100 score:

- edit: Levenshtein distance scaled by the longer string
- jaccard: overlap of the distinct character sets
- word: greedy pairing of whitespace-separated words

The combined score is a weighted average over the enabled algorithms, with the
weights renormalized so they sum to one, rounded to two decimals. Edit and
Jaccard are symmetric; word similarity pairs greedily, each word of the first
string consuming the first acceptable unused word of the second.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Final

from timeledger.domain.errors import InvariantViolationError

if TYPE_CHECKING:
    from timeledger.config import AlgorithmSelection

log = logging.getLogger(__name__)

ALGORITHM_WEIGHTS: Final[dict[str, float]] = {"edit": 0.4, "jaccard": 0.3, "word": 0.3}
_WORD_EDIT_THRESHOLD: Final[float] = 80.0


def levenshtein_distance(a: str, b: str) -> int:
    """Classic insert/delete/substitute distance with unit costs."""

    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def edit_similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 100.0
    return 100.0 * (longest - levenshtein_distance(a, b)) / longest


def jaccard_similarity(a: str, b: str) -> float:
    chars_a, chars_b = set(a), set(b)
    union = chars_a | chars_b
    if not union:
        return 0.0
    return 100.0 * len(chars_a & chars_b) / len(union)


def _words_match(left: str, right: str) -> bool:
    return (
        left == right
        or left in right
        or right in left
        or edit_similarity(left, right) > _WORD_EDIT_THRESHOLD
    )


def word_similarity(a: str, b: str) -> float:
    words_a = a.split()
    words_b = b.split()
    if not words_a and not words_b:
        return 100.0
    if not words_a or not words_b:
        return 0.0

    used: set[int] = set()
    matches = 0
    for word in words_a:
        for index, candidate in enumerate(words_b):
            if index in used:
                continue
            if _words_match(word, candidate):
                used.add(index)
                matches += 1
                break
    return 100.0 * matches / max(len(words_a), len(words_b))


_ALGORITHMS: Final[dict[str, Callable[[str, str], float]]] = {
    "edit": edit_similarity,
    "jaccard": jaccard_similarity,
    "word": word_similarity,
}


def similarity(a: str, b: str, *, algorithms: AlgorithmSelection) -> float:
    """Combined 0-100 similarity of two normalized strings."""

    enabled = algorithms.enabled
    if not enabled:
        raise InvariantViolationError("Similarity requested with no algorithm enabled")
    if a == b:
        return 100.0

    total_weight = sum(ALGORITHM_WEIGHTS[name] for name in enabled)
    combined = 0.0
    for name in enabled:
        combined += _ALGORITHMS[name](a, b) * ALGORITHM_WEIGHTS[name]
    score = round(combined / total_weight, 2)
    log.debug("Similarity %r vs %r: %.2f (%s)", a, b, score, ",".join(enabled))
    return score
