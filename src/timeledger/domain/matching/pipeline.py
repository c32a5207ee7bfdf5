"""Resolution pipeline: normalize, rank, classify, confirm.

One call resolves one batch of observations. The registry, the config and any
confirmation mapping are parameters of the call; the pending ledger is created
per call. Concurrent batches therefore never observe each other.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from timeledger.config import ResolutionConfig
from timeledger.domain.model import (
    BatchWarning,
    ConfidenceTier,
    MatchResult,
    RegistryKind,
    ResolutionStatus,
    WarningCode,
)

from .confidence import classify
from .confirmation import (
    ConfirmationLedger,
    accepts_by_default,
    parse_confirmations,
    qualifies_for_confirmation,
)
from .contracts import NeedsConfirmation, Resolved
from .engine import rank_candidates
from .normalize import is_header_like

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from timeledger.domain.model import RawObservation, RegistryEntry

    from .confirmation import ConfirmationPayload, Confirmations
    from .contracts import ResolveResult

log = logging.getLogger(__name__)


def registry_names(registry: Iterable[RegistryEntry]) -> dict[RegistryKind, tuple[str, ...]]:
    """Group canonical names per kind, preserving registry order."""

    grouped: dict[RegistryKind, list[str]] = {kind: [] for kind in RegistryKind}
    for entry in registry:
        grouped[entry.kind].append(entry.name)
    return {kind: tuple(names) for kind, names in grouped.items()}


def resolve(
    observations: Sequence[RawObservation],
    registry: Iterable[RegistryEntry],
    config: ResolutionConfig | None = None,
    confirmations: ConfirmationPayload | None = None,
) -> ResolveResult:
    """Resolve a batch of observations against ``registry``.

    ``confirmations=None`` marks an initial pass: ambiguous observations are
    collected and returned as ``NeedsConfirmation``. Any mapping (even an empty
    one) marks a follow-up pass: mapped inputs take the caller's decision and
    unmapped ambiguous inputs fall back to the default policy.

    Raises ``MalformedConfirmationPayloadError`` before any observation is
    scored when ``confirmations`` does not validate.
    """

    active_config = config or ResolutionConfig()
    decisions = parse_confirmations(confirmations)
    candidates_by_kind = registry_names(registry)
    warnings = _empty_registry_warnings(observations, candidates_by_kind)

    ledger = ConfirmationLedger()
    results: list[MatchResult] = []
    for observation in observations:
        result, pending = _resolve_observation(
            observation,
            candidates=candidates_by_kind[observation.kind],
            config=active_config,
            confirmations=decisions,
        )
        if pending:
            ledger.record(observation, result)
        results.append(result)

    if ledger:
        log.info(
            "Resolution halted: %d observation(s) need confirmation (%d observed)",
            len(ledger),
            len(observations),
        )
        return NeedsConfirmation(pending=ledger.entries(), warnings=warnings)

    log.info(
        "Resolved %d observation(s): %d adopted",
        len(results),
        sum(1 for result in results if result.identity is not None),
    )
    return Resolved(results=tuple(results), warnings=warnings)


def _empty_registry_warnings(
    observations: Sequence[RawObservation],
    candidates_by_kind: dict[RegistryKind, tuple[str, ...]],
) -> tuple[BatchWarning, ...]:
    observed_kinds = dict.fromkeys(observation.kind for observation in observations)
    warnings: list[BatchWarning] = []
    for kind in observed_kinds:
        if candidates_by_kind[kind]:
            continue
        log.warning("Registry for kind=%s is empty; every %s observation is unmatched", kind, kind)
        warnings.append(
            BatchWarning(
                code=WarningCode.EMPTY_REGISTRY,
                message=f"No {kind} names available for matching",
                kind=kind,
            )
        )
    return tuple(warnings)


def _resolve_observation(
    observation: RawObservation,
    *,
    candidates: tuple[str, ...],
    config: ResolutionConfig,
    confirmations: Confirmations | None,
) -> tuple[MatchResult, bool]:
    text = observation.text.strip()

    if confirmations is not None and text in confirmations:
        return _confirmed_result(observation, confirmations.decision_for(text)), False

    if not text:
        return _unmatched_result(observation, ResolutionStatus.UNMATCHED), False

    if (
        config.skip_header_like
        and observation.kind is RegistryKind.EMPLOYEE
        and is_header_like(text)
    ):
        log.debug("Ignoring header-like text %r (%s)", text, observation.source_tag)
        return _unmatched_result(observation, ResolutionStatus.IGNORED), False

    outcome = rank_candidates(text, candidates, config=config)
    classification = classify(outcome.best, config=config)
    scored = MatchResult(
        input=text,
        matched=classification.matched,
        confidence_score=outcome.best_score,
        confidence_tier=classification.tier,
        suggestions=outcome.suggestions,
        needs_confirmation=classification.needs_confirmation,
        status=ResolutionStatus.UNMATCHED,
        source_tag=observation.source_tag,
        line_number=observation.line_number,
        kind=observation.kind,
    )

    if _adopts_automatically(scored, config=config):
        return _with_status(scored, ResolutionStatus.AUTO_MATCHED), False

    if qualifies_for_confirmation(scored, config=config):
        if confirmations is None:
            return scored, True
        if accepts_by_default(scored):
            return _with_status(scored, ResolutionStatus.DEFAULTED), False
        return _with_status(scored, ResolutionStatus.SKIPPED), False

    return scored, False


def _adopts_automatically(result: MatchResult, *, config: ResolutionConfig) -> bool:
    if result.needs_confirmation or result.matched is None:
        return False
    if result.confidence_tier is ConfidenceTier.HIGH:
        return True
    if result.confidence_tier is ConfidenceTier.MEDIUM:
        return not config.medium_requires_confirmation
    return False


def _with_status(result: MatchResult, status: ResolutionStatus) -> MatchResult:
    return replace(result, status=status)


def _confirmed_result(observation: RawObservation, decision: str | None) -> MatchResult:
    if decision is None:
        return MatchResult(
            input=observation.text.strip(),
            matched=None,
            confidence_score=0.0,
            confidence_tier=ConfidenceTier.NO_MATCH,
            needs_confirmation=False,
            status=ResolutionStatus.SKIPPED,
            source_tag=observation.source_tag,
            line_number=observation.line_number,
            kind=observation.kind,
        )
    return MatchResult(
        input=observation.text.strip(),
        matched=decision,
        confidence_score=100.0,
        confidence_tier=ConfidenceTier.HIGH,
        needs_confirmation=False,
        status=ResolutionStatus.CONFIRMED,
        source_tag=observation.source_tag,
        line_number=observation.line_number,
        kind=observation.kind,
    )


def _unmatched_result(observation: RawObservation, status: ResolutionStatus) -> MatchResult:
    return MatchResult(
        input=observation.text.strip(),
        matched=None,
        confidence_score=0.0,
        confidence_tier=ConfidenceTier.NO_MATCH,
        needs_confirmation=True,
        status=status,
        source_tag=observation.source_tag,
        line_number=observation.line_number,
        kind=observation.kind,
    )
