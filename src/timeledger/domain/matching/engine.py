"""Rank registry candidates for one free-text input."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from timeledger.domain.model import Suggestion

from .normalize import normalize_text
from .similarity import similarity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from timeledger.config import ResolutionConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    """Ranked suggestions for one input; ``best_score`` is 0 when none cleared the cutoff."""

    suggestions: tuple[Suggestion, ...] = ()

    @property
    def best(self) -> Suggestion | None:
        return self.suggestions[0] if self.suggestions else None

    @property
    def best_score(self) -> float:
        best = self.best
        return best.score if best is not None else 0.0


def rank_candidates(
    text: str,
    candidates: Sequence[str],
    *,
    config: ResolutionConfig,
) -> MatchOutcome:
    """Score ``text`` against every candidate and keep the strongest few.

    Candidates scoring at least ``config.cutoff`` are kept, sorted by score
    descending. Ties keep registry order. At most ``config.max_suggestions``
    survive.
    """

    normalized_input = normalize_text(text)
    if not normalized_input:
        return MatchOutcome()

    scored: list[Suggestion] = []
    for candidate in candidates:
        score = similarity(
            normalized_input,
            normalize_text(candidate),
            algorithms=config.algorithms,
        )
        if score >= config.cutoff:
            scored.append(Suggestion(name=candidate, score=score))

    scored.sort(key=lambda suggestion: suggestion.score, reverse=True)
    outcome = MatchOutcome(suggestions=tuple(scored[: config.max_suggestions]))
    if outcome.best is None:
        log.debug(
            "No candidate for %r cleared cutoff %.2f (%d candidates)",
            text,
            config.cutoff,
            len(candidates),
        )
    else:
        log.debug(
            "Best candidate for %r: %r (%.2f, %d above cutoff)",
            text,
            outcome.best.name,
            outcome.best.score,
            len(scored),
        )
    return outcome
