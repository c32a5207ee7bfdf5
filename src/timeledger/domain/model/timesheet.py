"""Time entry and ledger records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import HourCategory

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True, kw_only=True)
class TimeEntryInput:
    """Raw time row attached to an observation, before aggregation.

    ``hours`` may be omitted for HOLIDAY markers; aggregation then books the
    configured holiday allowance.
    """

    date: date
    region: str
    category: HourCategory = HourCategory.REGULAR
    hours: float | None = None
    overtime_rate: float | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TimeEntry:
    identity: str
    date: date
    region: str
    category: HourCategory
    hours: float
    overtime_rate: float | None = None

    @property
    def key(self) -> tuple[str, date, str, HourCategory]:
        return self.identity, self.date, self.region, self.category


@dataclass(frozen=True, slots=True, kw_only=True)
class WeeklyBucket:
    """REGULAR entries of one identity within one Monday-anchored week."""

    identity: str
    week_start: date
    entries: tuple[TimeEntry, ...]

    @property
    def total_hours(self) -> float:
        return sum(entry.hours for entry in self.entries)


def _hours(entries: tuple[TimeEntry, ...], category: HourCategory) -> float:
    return sum(entry.hours for entry in entries if entry.category is category)


def _regions(entries: tuple[TimeEntry, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(entry.region for entry in entries))


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityLedger:
    """Allocated entries for one identity plus derived totals."""

    identity: str
    entries: tuple[TimeEntry, ...]
    overtime_rate: float | None = None
    matched_from: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()

    @property
    def regular_hours(self) -> float:
        return _hours(self.entries, HourCategory.REGULAR)

    @property
    def overtime_hours(self) -> float:
        return _hours(self.entries, HourCategory.OVERTIME)

    @property
    def travel_hours(self) -> float:
        return _hours(self.entries, HourCategory.TRAVEL)

    @property
    def holiday_hours(self) -> float:
        return _hours(self.entries, HourCategory.HOLIDAY)

    @property
    def total_hours(self) -> float:
        return sum(entry.hours for entry in self.entries)

    @property
    def regions(self) -> tuple[str, ...]:
        """Regions worked, in first-seen order."""

        return _regions(self.entries)

    @property
    def overtime_rate_label(self) -> str:
        if self.overtime_rate is None:
            return "Standard"
        return f"${self.overtime_rate:.2f}"


@dataclass(frozen=True, slots=True, kw_only=True)
class RegionSummary:
    region: str
    entries: tuple[TimeEntry, ...]

    @property
    def regular_hours(self) -> float:
        return _hours(self.entries, HourCategory.REGULAR)

    @property
    def overtime_hours(self) -> float:
        return _hours(self.entries, HourCategory.OVERTIME)

    @property
    def travel_hours(self) -> float:
        return _hours(self.entries, HourCategory.TRAVEL)

    @property
    def holiday_hours(self) -> float:
        return _hours(self.entries, HourCategory.HOLIDAY)

    @property
    def total_hours(self) -> float:
        return sum(entry.hours for entry in self.entries)

    @property
    def identities(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(entry.identity for entry in self.entries))


@dataclass(frozen=True, slots=True, kw_only=True)
class ConsolidatedLedger:
    identities: tuple[IdentityLedger, ...] = ()
    regions: tuple[RegionSummary, ...] = ()

    @property
    def total_hours(self) -> float:
        return sum(ledger.total_hours for ledger in self.identities)

    def for_identity(self, identity: str) -> IdentityLedger | None:
        for ledger in self.identities:
            if ledger.identity == identity:
                return ledger
        return None

    def for_region(self, region: str) -> RegionSummary | None:
        for summary in self.regions:
            if summary.region == region:
                return summary
        return None
