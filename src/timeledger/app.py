"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING, Literal, TypeAlias

from timeledger.config import ConfigurationError, get_consolidation_config, get_resolution_config
from timeledger.domain.consolidation import consolidate
from timeledger.domain.errors import InvariantViolationError, MalformedConfirmationPayloadError
from timeledger.domain.matching import NeedsConfirmation, build_validation_report, resolve
from timeledger.domain.model import RawObservation, RegistryKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from timeledger.config import ConsolidationConfig, ResolutionConfig
    from timeledger.domain.consolidation import ResolvedEntry
    from timeledger.domain.matching import ValidationReport
    from timeledger.domain.matching.confirmation import ConfirmationPayload
    from timeledger.domain.model import (
        BatchWarning,
        ConsolidatedLedger,
        MatchResult,
        RegistryEntry,
        TimeEntryInput,
    )


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimesheetRow:
    """An employee name as read from a source, with the time rows beside it."""

    observation: RawObservation
    entries: tuple[TimeEntryInput, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ProcessedBatch:
    ledger: ConsolidatedLedger
    results: tuple[MatchResult, ...]
    warnings: tuple[BatchWarning, ...] = ()
    report: ValidationReport
    status: Literal["processed"] = "processed"


@dataclass(frozen=True, slots=True, kw_only=True)
class BatchFailure:
    error_type: str
    message: str
    details: tuple[str, ...] = ()
    status: Literal["failed"] = "failed"


BatchOutcome: TypeAlias = "NeedsConfirmation | ProcessedBatch | BatchFailure"


def region_observations(rows: Iterable[TimesheetRow]) -> tuple[RawObservation, ...]:
    """One REGION observation per distinct region text, in first-seen order."""

    seen: dict[str, RawObservation] = {}
    for row in rows:
        for entry in row.entries:
            text = entry.region.strip()
            if text in seen:
                continue
            seen[text] = RawObservation(
                text=text,
                source_tag=row.observation.source_tag,
                line_number=row.observation.line_number,
                kind=RegistryKind.REGION,
            )
    return tuple(seen.values())


def process_batch(
    rows: Sequence[TimesheetRow],
    registry: Iterable[RegistryEntry],
    *,
    config: ResolutionConfig | None = None,
    consolidation: ConsolidationConfig | None = None,
    confirmations: ConfirmationPayload | None = None,
    overtime_rates: Mapping[str, float | None] | None = None,
) -> BatchOutcome:
    """Resolve every name in ``rows`` and consolidate the resolved time rows.

    Rows whose employee or region does not resolve are left out of the ledger
    and reported in the validation report. Core exceptions are returned as a
    ``BatchFailure`` rather than raised.
    """

    try:
        resolution_config = config or get_resolution_config()
        consolidation_config = consolidation or get_consolidation_config()
        employees = tuple(row.observation for row in rows)
        regions = region_observations(rows)
        log.info(
            "Processing batch: %d row(s), %d distinct region(s)", len(employees), len(regions)
        )

        resolution = resolve(
            (*employees, *regions),
            tuple(registry),
            config=resolution_config,
            confirmations=confirmations,
        )
        if isinstance(resolution, NeedsConfirmation):
            return resolution

        region_identity = {
            result.input: result.identity
            for result in resolution.results
            if result.kind is RegistryKind.REGION
        }
        resolved_entries: list[ResolvedEntry] = []
        matched_from: dict[str, list[str]] = {}
        excluded = 0
        for row in rows:
            identity = resolution.identity_for(row.observation)
            if identity is None:
                excluded += len(row.entries)
                continue
            matched_from.setdefault(identity, []).append(row.observation.text.strip())
            for entry in row.entries:
                region = region_identity.get(entry.region.strip())
                if region is None:
                    excluded += 1
                    continue
                resolved_entries.append((identity, _with_region(entry, region)))
        if excluded:
            log.info("Excluded %d time row(s) with unresolved employee or region", excluded)

        ledger = consolidate(
            resolved_entries,
            config=consolidation_config,
            overtime_rates=overtime_rates,
            matched_from=matched_from,
        )
    except MalformedConfirmationPayloadError as exc:
        log.warning("Rejected confirmation payload: %s", exc)
        return BatchFailure(error_type=type(exc).__name__, message=str(exc), details=exc.details)
    except (InvariantViolationError, ConfigurationError) as exc:
        log.exception("Batch failed")
        return BatchFailure(error_type=type(exc).__name__, message=str(exc))

    report = build_validation_report(resolution.results, warnings=resolution.warnings)
    log.info(
        "Batch processed: status=%s, errors=%d, warnings=%d, identities=%d",
        report.status,
        len(report.errors),
        len(report.warnings),
        len(ledger.identities),
    )
    return ProcessedBatch(
        ledger=ledger,
        results=resolution.results,
        warnings=resolution.warnings,
        report=report,
    )


def _with_region(entry: TimeEntryInput, region: str) -> TimeEntryInput:
    if entry.region == region:
        return entry
    return replace(entry, region=region)
