"""Canonical domain model used across timeledger."""

from __future__ import annotations

from .enums import ConfidenceTier, HourCategory, RegistryKind, ResolutionStatus, WarningCode
from .identity import (
    BatchWarning,
    ConfirmationEntry,
    MatchResult,
    RawObservation,
    RegistryEntry,
    Suggestion,
)
from .timesheet import (
    ConsolidatedLedger,
    IdentityLedger,
    RegionSummary,
    TimeEntry,
    TimeEntryInput,
    WeeklyBucket,
)

__all__ = [
    "BatchWarning",
    "ConfidenceTier",
    "ConfirmationEntry",
    "ConsolidatedLedger",
    "HourCategory",
    "IdentityLedger",
    "MatchResult",
    "RawObservation",
    "RegionSummary",
    "RegistryEntry",
    "RegistryKind",
    "ResolutionStatus",
    "Suggestion",
    "TimeEntry",
    "TimeEntryInput",
    "WarningCode",
    "WeeklyBucket",
]
