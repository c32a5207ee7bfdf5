"""Pydantic models describing batch files and the JSON written back."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date  # noqa: TC003
from typing import Any, Literal, TypeAlias, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from timeledger.domain.model import (  # noqa: TC001
    ConfidenceTier,
    HourCategory,
    RegistryKind,
    ResolutionStatus,
)

HOLIDAY_MARKER = "HOL"


class BatchBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# Input


class EntryPayload(BatchBaseModel):
    date: date
    region: str
    category: HourCategory = HourCategory.REGULAR
    hours: float | None = None
    overtime_rate: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _holiday_marker(cls, value: object) -> object:
        if isinstance(value, Mapping):
            data: dict[str, object] = dict(cast(Mapping[str, object], value))
            hours = data.get("hours")
            if isinstance(hours, str) and hours.strip().upper() == HOLIDAY_MARKER:
                data["hours"] = None
                data["category"] = HourCategory.HOLIDAY
            return data
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _upper_category(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class RowPayload(BatchBaseModel):
    name: str
    source: str = Field(default="", alias="source_tag")
    line: int | None = Field(default=None, alias="line_number")
    entries: list[EntryPayload] = Field(default_factory=list["EntryPayload"])


class RegistryPayload(BatchBaseModel):
    employees: list[str] = Field(default_factory=list)
    regions: list[str] = Field(default_factory=list)


class ThresholdsPayload(BatchBaseModel):
    high: float | None = None
    medium: float | None = None
    low: float | None = None


class AlgorithmsPayload(BatchBaseModel):
    edit: bool | None = None
    jaccard: bool | None = None
    word: bool | None = None


class SettingsPayload(BatchBaseModel):
    """Per-run overrides; anything left out keeps the environment/default value."""

    thresholds: ThresholdsPayload | None = None
    algorithms: AlgorithmsPayload | None = None
    auto_accept_score: float | None = None
    strong_suggestion_floor: float | None = None
    max_suggestions: int | None = None
    cutoff: float | None = None
    medium_requires_confirmation: bool | None = None
    confirm_low_confidence: bool | None = None
    skip_header_like: bool | None = None
    weekly_regular_limit: float | None = None
    holiday_hours: float | None = None
    travel_counts_toward_overtime: bool | None = None


class BatchFile(BatchBaseModel):
    registry: RegistryPayload = Field(default_factory=RegistryPayload)
    rows: list[RowPayload] = Field(default_factory=list["RowPayload"])
    settings: SettingsPayload = Field(default_factory=SettingsPayload)
    confirmations: dict[str, str | None] | None = None
    overtime_rates: dict[str, float | None] | None = None


# Output


class SuggestionModel(BatchBaseModel):
    name: str
    score: float


class WarningModel(BatchBaseModel):
    code: str
    message: str
    kind: RegistryKind | None = None


class PendingModel(BatchBaseModel):
    input: str
    source_tag: str
    line_number: int | None = None
    kind: RegistryKind
    confidence_tier: ConfidenceTier
    suggestions: list[SuggestionModel]


class MatchResultModel(BatchBaseModel):
    input: str
    matched: str | None
    confidence_score: float
    confidence_tier: ConfidenceTier
    status: ResolutionStatus
    kind: RegistryKind
    source_tag: str
    line_number: int | None = None
    suggestions: list[SuggestionModel]


class EntryModel(BatchBaseModel):
    date: date
    region: str
    category: HourCategory
    hours: float
    overtime_rate: float | None = None


class IdentityLedgerModel(BatchBaseModel):
    identity: str
    regular_hours: float
    overtime_hours: float
    travel_hours: float
    holiday_hours: float
    total_hours: float
    overtime_rate: str
    regions: list[str]
    matched_from: list[str]
    notes: list[str]
    entries: list[EntryModel]


class RegionSummaryModel(BatchBaseModel):
    region: str
    regular_hours: float
    overtime_hours: float
    travel_hours: float
    holiday_hours: float
    total_hours: float
    identities: list[str]


class IssueModel(BatchBaseModel):
    issue_type: str
    message: str
    field_name: str | None = None
    suggested_fix: str | None = None
    line_number: int | None = None
    source_tag: str | None = None


class ReportModel(BatchBaseModel):
    status: str
    validated_items: int
    errors: list[IssueModel]
    warnings: list[IssueModel]
    metadata: dict[str, Any]


class NeedsConfirmationResponse(BatchBaseModel):
    status: Literal["needs_confirmation"] = "needs_confirmation"
    pending: list[PendingModel]
    warnings: list[WarningModel]


class ProcessedResponse(BatchBaseModel):
    status: Literal["processed"] = "processed"
    total_hours: float
    employees: list[IdentityLedgerModel]
    regions: list[RegionSummaryModel]
    results: list[MatchResultModel]
    warnings: list[WarningModel]
    report: ReportModel


class FailureResponse(BatchBaseModel):
    status: Literal["failed"] = "failed"
    error_type: str
    message: str
    details: list[str] = Field(default_factory=list)


BatchResponse: TypeAlias = "NeedsConfirmationResponse | ProcessedResponse | FailureResponse"
