from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from tests.helpers.timesheets import employee, region
from timeledger.config import ResolutionConfig
from timeledger.domain.matching import (
    Resolved,
    ValidationReport,
    ValidationReportBuilder,
    ValidationStatus,
    build_validation_report,
    resolve,
)
from timeledger.domain.model import RegistryEntry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from timeledger.domain.model import RawObservation


def _report_for(
    observations: Sequence[RawObservation],
    registry: tuple[RegistryEntry, ...],
    config: ResolutionConfig | None = None,
    confirmations: dict[str, str | None] | None = None,
) -> ValidationReport:
    result = resolve(observations, registry, config, confirmations)
    assert isinstance(result, Resolved)
    return build_validation_report(result.results, warnings=result.warnings)


def test_report_passes_when_everything_matches(registry: tuple[RegistryEntry, ...]) -> None:
    report = _report_for([employee("Jack Allan"), region("North")], registry)

    assert report.status is ValidationStatus.SUCCESS
    assert report.is_valid
    assert report.validated_items == 2
    assert report.summary() == "Validation passed"


def test_report_flags_unmatched_employee(registry: tuple[RegistryEntry, ...]) -> None:
    report = _report_for([employee("Zyx Qwv", line_number=12)], registry)

    assert report.status is ValidationStatus.FAILED
    (issue,) = report.errors
    assert issue.issue_type == "UNMATCHED_EMPLOYEE"
    assert issue.line_number == 12
    assert issue.source_tag == "sheet1"
    assert report.metadata["unmatched_employees"] == ["Zyx Qwv"]


def test_report_suggests_regions(
    registry: tuple[RegistryEntry, ...],
    resolution_config: ResolutionConfig,
) -> None:
    config = replace(resolution_config, cutoff=30.0)

    report = _report_for([region("Norway")], registry, config)

    (issue,) = report.errors
    assert issue.issue_type == "INVALID_REGION"
    assert issue.suggested_fix is not None
    assert "Did you mean: North (31%)?" in issue.suggested_fix
    assert report.metadata["unmatched_regions"] == ["Norway"]


def test_report_warns_about_low_confidence(registry: tuple[RegistryEntry, ...]) -> None:
    report = _report_for([employee("Jon Allan")], registry)

    assert report.status is ValidationStatus.WARNING
    (issue,) = report.warnings
    assert issue.issue_type == "LOW_CONFIDENCE_MATCH"
    assert "Jack Allan" in issue.message
    assert report.metadata["low_confidence_matches"] == ["Jon Allan"]


def test_report_warns_about_blank_input(registry: tuple[RegistryEntry, ...]) -> None:
    report = _report_for([employee("  ")], registry)

    assert [issue.issue_type for issue in report.warnings] == ["EMPTY_INPUT"]
    assert not report.errors


def test_report_includes_registry_warnings() -> None:
    report = _report_for([region("North")], (RegistryEntry("Jack Allan"),))

    assert [issue.issue_type for issue in report.warnings] == ["EMPTY_REGISTRY"]
    assert [issue.issue_type for issue in report.errors] == ["INVALID_REGION"]


def test_report_warns_about_skipped_and_defaulted(
    registry: tuple[RegistryEntry, ...],
    edit_only_config: ResolutionConfig,
) -> None:
    report = _report_for(
        [employee("Jack Allen"), employee("Jon Allan")],
        registry,
        edit_only_config,
        confirmations={"Jon Allan": None},
    )

    assert [issue.issue_type for issue in report.warnings] == [
        "DEFAULTED_MATCH",
        "SKIPPED_OBSERVATION",
    ]


def test_report_counts_ignored_observations(registry: tuple[RegistryEntry, ...]) -> None:
    report = _report_for([employee("Employee Name"), employee("Jack Allan")], registry)

    assert report.metadata["ignored_observations"] == 1
    assert report.is_valid


def test_report_builder_status_and_summary() -> None:
    builder = ValidationReportBuilder()
    assert builder.status is ValidationStatus.SUCCESS

    builder.add_warning("LOW_CONFIDENCE_MATCH", "Check Jon", suggested_fix="Confirm it")
    assert builder.status is ValidationStatus.WARNING

    builder.add_error("INVALID_REGION", "Region 'X' not found", field_name="region_name")
    report = builder.set_validated_items(3).build()

    assert report.status is ValidationStatus.FAILED
    assert report.validated_items == 3
    summary = report.summary()
    assert "Validation errors:" in summary
    assert "Region 'X' not found (region_name)" in summary
    assert "suggestion: Confirm it" in summary
