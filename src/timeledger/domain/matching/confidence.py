"""Map a best-ranked suggestion onto a confidence tier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from timeledger.domain.model import ConfidenceTier

if TYPE_CHECKING:
    from timeledger.config import ResolutionConfig
    from timeledger.domain.model import Suggestion


@dataclass(frozen=True, slots=True)
class Classification:
    tier: ConfidenceTier
    matched: str | None
    needs_confirmation: bool
    score: float = 0.0


def classify(best: Suggestion | None, *, config: ResolutionConfig) -> Classification:
    """Classify ``best`` using the thresholds carried by ``config``.

    ``needs_confirmation`` is true for NO_MATCH as well: there is nothing to
    confirm, but the flag marks every unresolved outcome the same way.
    """

    if best is None:
        return Classification(ConfidenceTier.NO_MATCH, None, needs_confirmation=True)

    score = best.score
    thresholds = config.thresholds
    if score >= config.auto_accept_score:
        return Classification(ConfidenceTier.HIGH, best.name, needs_confirmation=False, score=score)
    if score >= thresholds.high:
        return Classification(ConfidenceTier.HIGH, best.name, needs_confirmation=True, score=score)
    if score >= thresholds.medium:
        needs_confirmation = (
            config.medium_requires_confirmation and score >= config.strong_suggestion_floor
        )
        return Classification(
            ConfidenceTier.MEDIUM, best.name, needs_confirmation=needs_confirmation, score=score
        )
    if score >= thresholds.low:
        return Classification(
            ConfidenceTier.LOW,
            best.name,
            needs_confirmation=config.confirm_low_confidence,
            score=score,
        )
    return Classification(ConfidenceTier.NO_MATCH, None, needs_confirmation=True, score=score)
