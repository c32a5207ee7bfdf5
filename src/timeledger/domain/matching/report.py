"""Human-readable validation report for a resolution run.

Recoverable conditions (unmatched names, low-confidence matches, empty
registries) live in result values; this module turns them into a flat list of
errors and warnings with suggested fixes, suitable for showing to whoever
prepared the timesheets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from timeledger.domain.model import ConfidenceTier, RegistryKind, ResolutionStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from timeledger.domain.model import BatchWarning, MatchResult

_MAX_HINTS = 3


class ValidationStatus(StrEnum):
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    FAILED = "FAILED"


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationIssue:
    issue_type: str
    message: str
    field_name: str | None = None
    suggested_fix: str | None = None
    line_number: int | None = None
    source_tag: str | None = None

    def describe(self) -> str:
        line = f"  - {self.message}"
        if self.field_name:
            line += f" ({self.field_name})"
        if self.line_number is not None:
            line += f" [line {self.line_number}]"
        if self.source_tag:
            line += f" [{self.source_tag}]"
        if self.suggested_fix:
            line += f"\n    suggestion: {self.suggested_fix}"
        return line


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationReport:
    status: ValidationStatus
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()
    validated_items: int = 0
    metadata: dict[str, object] = field(default_factory=dict["str", "object"])

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.SUCCESS

    def summary(self) -> str:
        lines: list[str] = []
        if self.errors:
            lines.append("Validation errors:")
            lines.extend(issue.describe() for issue in self.errors)
        if self.warnings:
            lines.append("Validation warnings:")
            lines.extend(issue.describe() for issue in self.warnings)
        if not lines:
            lines.append("Validation passed")
        return "\n".join(lines)


@dataclass(slots=True)
class ValidationReportBuilder:
    """Accumulate issues; the first error fails the report, the first warning downgrades it."""

    _errors: list[ValidationIssue] = field(default_factory=list["ValidationIssue"])
    _warnings: list[ValidationIssue] = field(default_factory=list["ValidationIssue"])
    _metadata: dict[str, object] = field(default_factory=dict["str", "object"])
    _validated_items: int = 0

    def add_error(
        self,
        issue_type: str,
        message: str,
        *,
        field_name: str | None = None,
        suggested_fix: str | None = None,
        line_number: int | None = None,
        source_tag: str | None = None,
    ) -> ValidationReportBuilder:
        self._errors.append(
            ValidationIssue(
                issue_type=issue_type,
                message=message,
                field_name=field_name,
                suggested_fix=suggested_fix,
                line_number=line_number,
                source_tag=source_tag,
            )
        )
        return self

    def add_warning(
        self,
        issue_type: str,
        message: str,
        *,
        field_name: str | None = None,
        suggested_fix: str | None = None,
        line_number: int | None = None,
        source_tag: str | None = None,
    ) -> ValidationReportBuilder:
        self._warnings.append(
            ValidationIssue(
                issue_type=issue_type,
                message=message,
                field_name=field_name,
                suggested_fix=suggested_fix,
                line_number=line_number,
                source_tag=source_tag,
            )
        )
        return self

    def set_validated_items(self, count: int) -> ValidationReportBuilder:
        self._validated_items = count
        return self

    def add_metadata(self, key: str, value: object) -> ValidationReportBuilder:
        self._metadata[key] = value
        return self

    @property
    def status(self) -> ValidationStatus:
        if self._errors:
            return ValidationStatus.FAILED
        if self._warnings:
            return ValidationStatus.WARNING
        return ValidationStatus.SUCCESS

    def build(self) -> ValidationReport:
        return ValidationReport(
            status=self.status,
            errors=tuple(self._errors),
            warnings=tuple(self._warnings),
            validated_items=self._validated_items,
            metadata=dict(self._metadata),
        )


def did_you_mean(result: MatchResult) -> str | None:
    if not result.suggestions:
        return None
    hints = ", ".join(
        f"{suggestion.name} ({round(suggestion.score)}%)"
        for suggestion in result.suggestions[:_MAX_HINTS]
    )
    return f"Did you mean: {hints}?"


def build_validation_report(
    results: Iterable[MatchResult],
    *,
    warnings: Iterable[BatchWarning] = (),
) -> ValidationReport:
    """Translate resolution results and batch warnings into a report."""

    builder = ValidationReportBuilder()
    unmatched: dict[RegistryKind, list[str]] = {kind: [] for kind in RegistryKind}
    low_confidence: list[str] = []
    ignored = 0
    count = 0

    for warning in warnings:
        builder.add_warning(
            str(warning.code),
            warning.message,
            field_name=f"{warning.kind}_registry" if warning.kind else None,
            suggested_fix="Supply registry entries for this kind before processing",
        )

    for result in results:
        count += 1
        if result.status is ResolutionStatus.IGNORED:
            ignored += 1
        elif result.status is ResolutionStatus.SKIPPED:
            builder.add_warning(
                "SKIPPED_OBSERVATION",
                f"'{result.input}' was skipped by confirmation",
                line_number=result.line_number,
                source_tag=result.source_tag or None,
            )
        elif result.status is ResolutionStatus.DEFAULTED:
            builder.add_warning(
                "DEFAULTED_MATCH",
                f"'{result.input}' matched to '{result.matched}' "
                f"({round(result.confidence_score)}%) without explicit confirmation",
                suggested_fix="Confirm this match is correct",
                line_number=result.line_number,
                source_tag=result.source_tag or None,
            )
        elif result.status is ResolutionStatus.UNMATCHED:
            _add_unmatched(builder, result)
            if result.input and result.confidence_tier is ConfidenceTier.LOW:
                low_confidence.append(result.input)
            elif result.input:
                unmatched[result.kind].append(result.input)

    builder.set_validated_items(count)
    builder.add_metadata("unmatched_employees", unmatched[RegistryKind.EMPLOYEE])
    builder.add_metadata("unmatched_regions", unmatched[RegistryKind.REGION])
    builder.add_metadata("low_confidence_matches", low_confidence)
    builder.add_metadata("ignored_observations", ignored)
    return builder.build()


def _add_unmatched(
    builder: ValidationReportBuilder,
    result: MatchResult,
) -> None:
    if not result.input:
        builder.add_warning(
            "EMPTY_INPUT",
            "Observation text is blank",
            line_number=result.line_number,
            source_tag=result.source_tag or None,
        )
        return

    if result.confidence_tier is ConfidenceTier.LOW:
        builder.add_warning(
            "LOW_CONFIDENCE_MATCH",
            f"Low confidence match for '{result.input}' -> '{result.matched}' "
            f"({round(result.confidence_score)}%), not adopted",
            field_name=f"{result.kind}_name",
            suggested_fix="Please verify this match and confirm it explicitly",
            line_number=result.line_number,
            source_tag=result.source_tag or None,
        )
        return

    hint = did_you_mean(result)
    if result.kind is RegistryKind.REGION:
        fix = f"Add '{result.input}' to the region registry"
        builder.add_error(
            "INVALID_REGION",
            f"Region '{result.input}' not found in known regions",
            field_name="region_name",
            suggested_fix=f"{fix}. {hint}" if hint else fix,
            line_number=result.line_number,
            source_tag=result.source_tag or None,
        )
        return

    builder.add_error(
        "UNMATCHED_EMPLOYEE",
        f"Employee '{result.input}' not found in known employees",
        field_name="employee_name",
        suggested_fix=hint or "Add this employee to the registry or check spelling",
        line_number=result.line_number,
        source_tag=result.source_tag or None,
    )
