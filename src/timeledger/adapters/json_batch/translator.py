"""Translate batch files into domain inputs and outcomes into JSON responses."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from timeledger.app import BatchFailure, TimesheetRow
from timeledger.config import AlgorithmSelection, Thresholds
from timeledger.domain.matching import NeedsConfirmation
from timeledger.domain.model import (
    RawObservation,
    RegistryEntry,
    RegistryKind,
    TimeEntryInput,
)

from .schema import (
    BatchFile,
    EntryModel,
    FailureResponse,
    IdentityLedgerModel,
    IssueModel,
    MatchResultModel,
    NeedsConfirmationResponse,
    PendingModel,
    ProcessedResponse,
    RegionSummaryModel,
    ReportModel,
    SuggestionModel,
    WarningModel,
)

if TYPE_CHECKING:
    from timeledger.app import BatchOutcome, ProcessedBatch
    from timeledger.config import ConsolidationConfig, ResolutionConfig
    from timeledger.domain.matching import ValidationIssue, ValidationReport
    from timeledger.domain.model import (
        BatchWarning,
        IdentityLedger,
        RegionSummary,
        Suggestion,
        TimeEntry,
    )

    from .schema import BatchResponse, EntryPayload, RowPayload, SettingsPayload


log = getLogger(__name__)


def parse_batch_file(document: str | bytes) -> BatchFile:
    """Validate a JSON batch document; raises ``pydantic.ValidationError``."""

    return BatchFile.model_validate_json(document)


def to_registry(batch: BatchFile) -> tuple[RegistryEntry, ...]:
    employees = (RegistryEntry(name, RegistryKind.EMPLOYEE) for name in batch.registry.employees)
    regions = (RegistryEntry(name, RegistryKind.REGION) for name in batch.registry.regions)
    return (*employees, *regions)


def to_rows(batch: BatchFile) -> tuple[TimesheetRow, ...]:
    rows = tuple(_to_row(row) for row in batch.rows)
    log.debug("Read %d row(s) from batch file", len(rows))
    return rows


def _to_row(row: RowPayload) -> TimesheetRow:
    return TimesheetRow(
        observation=RawObservation(text=row.name, source_tag=row.source, line_number=row.line),
        entries=tuple(_to_entry(entry) for entry in row.entries),
    )


def _to_entry(entry: EntryPayload) -> TimeEntryInput:
    return TimeEntryInput(
        date=entry.date,
        region=entry.region,
        category=entry.category,
        hours=entry.hours,
        overtime_rate=entry.overtime_rate,
    )


def to_resolution_config(settings: SettingsPayload, *, base: ResolutionConfig) -> ResolutionConfig:
    """Apply the batch's settings section on top of ``base``.

    Raises ``ConfigurationError`` when the merged values are inconsistent.
    """

    thresholds = base.thresholds
    if settings.thresholds is not None:
        thresholds = Thresholds(
            **{
                **_as_kwargs(thresholds, ("high", "medium", "low")),
                **settings.thresholds.model_dump(exclude_none=True),
            }
        )
    algorithms = base.algorithms
    if settings.algorithms is not None:
        algorithms = AlgorithmSelection(
            **{
                **_as_kwargs(algorithms, ("edit", "jaccard", "word")),
                **settings.algorithms.model_dump(exclude_none=True),
            }
        )
    overrides = settings.model_dump(
        exclude_none=True,
        include={
            "auto_accept_score",
            "strong_suggestion_floor",
            "max_suggestions",
            "cutoff",
            "medium_requires_confirmation",
            "confirm_low_confidence",
            "skip_header_like",
        },
    )
    return replace(base, thresholds=thresholds, algorithms=algorithms, **overrides)


def to_consolidation_config(
    settings: SettingsPayload, *, base: ConsolidationConfig
) -> ConsolidationConfig:
    overrides = settings.model_dump(
        exclude_none=True,
        include={"weekly_regular_limit", "holiday_hours", "travel_counts_toward_overtime"},
    )
    return replace(base, **overrides)


def _as_kwargs(instance: object, names: tuple[str, ...]) -> dict[str, object]:
    return {name: getattr(instance, name) for name in names}


def to_response(outcome: BatchOutcome) -> BatchResponse:
    if isinstance(outcome, NeedsConfirmation):
        return NeedsConfirmationResponse(
            pending=[
                PendingModel(
                    input=entry.input,
                    source_tag=entry.source_tag,
                    line_number=entry.line_number,
                    kind=entry.kind,
                    confidence_tier=entry.confidence_tier,
                    suggestions=_suggestions(entry.suggestions),
                )
                for entry in outcome.pending
            ],
            warnings=_warnings(outcome.warnings),
        )
    if isinstance(outcome, BatchFailure):
        return FailureResponse(
            error_type=outcome.error_type,
            message=outcome.message,
            details=list(outcome.details),
        )
    return _processed_response(outcome)


def render_outcome(outcome: BatchOutcome, *, indent: int | None = 2) -> str:
    return to_response(outcome).model_dump_json(indent=indent)


def _processed_response(outcome: ProcessedBatch) -> ProcessedResponse:
    ledger = outcome.ledger
    return ProcessedResponse(
        total_hours=_hours(ledger.total_hours),
        employees=[_identity_ledger(identity) for identity in ledger.identities],
        regions=[_region_summary(summary) for summary in ledger.regions],
        results=[
            MatchResultModel(
                input=result.input,
                matched=result.matched,
                confidence_score=result.confidence_score,
                confidence_tier=result.confidence_tier,
                status=result.status,
                kind=result.kind,
                source_tag=result.source_tag,
                line_number=result.line_number,
                suggestions=_suggestions(result.suggestions),
            )
            for result in outcome.results
        ],
        warnings=_warnings(outcome.warnings),
        report=_report(outcome.report),
    )


def _identity_ledger(ledger: IdentityLedger) -> IdentityLedgerModel:
    return IdentityLedgerModel(
        identity=ledger.identity,
        regular_hours=_hours(ledger.regular_hours),
        overtime_hours=_hours(ledger.overtime_hours),
        travel_hours=_hours(ledger.travel_hours),
        holiday_hours=_hours(ledger.holiday_hours),
        total_hours=_hours(ledger.total_hours),
        overtime_rate=ledger.overtime_rate_label,
        regions=list(ledger.regions),
        matched_from=list(ledger.matched_from),
        notes=list(ledger.notes),
        entries=[_entry(entry) for entry in ledger.entries],
    )


def _region_summary(summary: RegionSummary) -> RegionSummaryModel:
    return RegionSummaryModel(
        region=summary.region,
        regular_hours=_hours(summary.regular_hours),
        overtime_hours=_hours(summary.overtime_hours),
        travel_hours=_hours(summary.travel_hours),
        holiday_hours=_hours(summary.holiday_hours),
        total_hours=_hours(summary.total_hours),
        identities=list(summary.identities),
    )


def _entry(entry: TimeEntry) -> EntryModel:
    return EntryModel(
        date=entry.date,
        region=entry.region,
        category=entry.category,
        hours=_hours(entry.hours),
        overtime_rate=entry.overtime_rate,
    )


def _report(report: ValidationReport) -> ReportModel:
    return ReportModel(
        status=str(report.status),
        validated_items=report.validated_items,
        errors=[_issue(issue) for issue in report.errors],
        warnings=[_issue(issue) for issue in report.warnings],
        metadata=dict(report.metadata),
    )


def _issue(issue: ValidationIssue) -> IssueModel:
    return IssueModel(
        issue_type=issue.issue_type,
        message=issue.message,
        field_name=issue.field_name,
        suggested_fix=issue.suggested_fix,
        line_number=issue.line_number,
        source_tag=issue.source_tag,
    )


def _suggestions(suggestions: tuple[Suggestion, ...]) -> list[SuggestionModel]:
    return [SuggestionModel(name=item.name, score=item.score) for item in suggestions]


def _warnings(warnings: tuple[BatchWarning, ...]) -> list[WarningModel]:
    return [
        WarningModel(code=str(warning.code), message=warning.message, kind=warning.kind)
        for warning in warnings
    ]


def _hours(value: float) -> float:
    return round(value, 2)
