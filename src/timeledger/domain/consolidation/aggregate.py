"""Merge raw time rows into one entry per identity/date/region/category."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from timeledger.domain.model import HourCategory, TimeEntry

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from timeledger.config import ConsolidationConfig
    from timeledger.domain.model import TimeEntryInput

log = logging.getLogger(__name__)

EntryKey: TypeAlias = "tuple[str, date, str, HourCategory]"
ResolvedEntry: TypeAlias = "tuple[str, TimeEntryInput]"


@dataclass(slots=True)
class _Accumulator:
    identity: str
    date: date
    region: str
    category: HourCategory
    hours: float
    overtime_rate: float | None

    def freeze(self) -> TimeEntry:
        return TimeEntry(
            identity=self.identity,
            date=self.date,
            region=self.region,
            category=self.category,
            hours=self.hours,
            overtime_rate=self.overtime_rate,
        )


def _booked_category(row: TimeEntryInput, config: ConsolidationConfig) -> HourCategory:
    if row.category is HourCategory.TRAVEL and config.travel_counts_toward_overtime:
        return HourCategory.REGULAR
    return row.category


def _booked_hours(
    row: TimeEntryInput,
    category: HourCategory,
    config: ConsolidationConfig,
) -> float | None:
    if row.hours is None:
        return config.holiday_hours if category is HourCategory.HOLIDAY else None
    if math.isnan(row.hours):
        return None
    return row.hours


def aggregate_entries(
    resolved: Iterable[ResolvedEntry],
    *,
    config: ConsolidationConfig,
) -> tuple[TimeEntry, ...]:
    """Sum hours per ``(identity, date, region, category)``.

    A HOLIDAY entry for an ``(identity, date, region)`` is booked once; repeated
    holiday markers are ignored rather than summed. Entries whose resulting
    hours are not positive are dropped.
    """

    merged: dict[EntryKey, _Accumulator] = {}
    for identity, row in resolved:
        category = _booked_category(row, config)
        hours = _booked_hours(row, category, config)
        if hours is None:
            log.debug("Skipping row without hours for %s on %s (%s)", identity, row.date, category)
            continue

        key: EntryKey = (identity, row.date, row.region, category)
        existing = merged.get(key)
        if existing is None:
            merged[key] = _Accumulator(
                identity=identity,
                date=row.date,
                region=row.region,
                category=category,
                hours=hours,
                overtime_rate=row.overtime_rate,
            )
            continue
        if category is HourCategory.HOLIDAY:
            log.debug(
                "Ignoring repeated holiday for %s on %s in %s", identity, row.date, row.region
            )
            continue
        existing.hours += hours
        if existing.overtime_rate is None:
            existing.overtime_rate = row.overtime_rate

    entries = tuple(accumulator.freeze() for accumulator in merged.values())
    kept = tuple(entry for entry in entries if entry.hours > 0)
    if len(kept) != len(entries):
        log.debug("Dropped %d entries with non-positive hours", len(entries) - len(kept))
    return kept
