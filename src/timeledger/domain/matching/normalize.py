"""Text canonicalization for fuzzy identity matching."""

from __future__ import annotations

import re
from typing import Final

_PUNCTUATION = re.compile(r"[^\w\s]|_")
_DIGIT = re.compile(r"\d")
_HEADER_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"week",
        r"company",
        r"region",
        r"supervisor",
        r"contractor",
        r"employee\s*name",
        r"to\s*temporary",
        r"signed\s*by\s*supervisor",
    )
)
_MIN_NAME_LENGTH = 3


def normalize_text(value: str) -> str:
    """Lowercase, drop punctuation and collapse whitespace.

    The function is total and idempotent: ``normalize_text(normalize_text(s))``
    equals ``normalize_text(s)`` for every string.
    """

    text = _PUNCTUATION.sub("", value.lower())
    return " ".join(text.split())


def is_header_like(value: str) -> bool:
    """Return whether ``value`` looks like a sheet header rather than a name.

    Spreadsheet exports put column titles, week-ending stamps and signature
    lines in the same column as employee names.
    """

    raw = value.strip()
    if len(raw) < _MIN_NAME_LENGTH:
        return True
    if ":" in raw or _DIGIT.search(raw):
        return True
    return any(pattern.search(raw) for pattern in _HEADER_PATTERNS)
