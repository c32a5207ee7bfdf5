"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RegistryKind(StrEnum):
    """Which registry a canonical name (or an observation) belongs to."""

    EMPLOYEE = "employee"
    REGION = "region"


class ConfidenceTier(StrEnum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    NO_MATCH = "NO_MATCH"


class ResolutionStatus(StrEnum):
    """What the resolution pipeline did with one observation."""

    AUTO_MATCHED = "auto_matched"
    CONFIRMED = "confirmed"
    DEFAULTED = "defaulted"
    SKIPPED = "skipped"
    UNMATCHED = "unmatched"
    IGNORED = "ignored"


class HourCategory(StrEnum):
    REGULAR = "REGULAR"
    OVERTIME = "OVERTIME"
    TRAVEL = "TRAVEL"
    HOLIDAY = "HOLIDAY"


class WarningCode(StrEnum):
    EMPTY_REGISTRY = "EMPTY_REGISTRY"
