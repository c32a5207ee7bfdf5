"""Monday-anchored week bucketing for REGULAR hours."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from timeledger.domain.model import HourCategory, WeeklyBucket

if TYPE_CHECKING:
    from collections.abc import Iterable

    from timeledger.domain.model import TimeEntry


def week_start(day: date) -> date:
    """Return the Monday of the ISO week containing ``day`` (Sunday maps back six days)."""

    return day - timedelta(days=day.isoweekday() - 1)


def weekly_buckets(entries: Iterable[TimeEntry]) -> tuple[WeeklyBucket, ...]:
    """Group REGULAR entries per identity and week.

    Identities keep first-seen order; weeks are ascending within an identity;
    entries keep their input order inside a bucket.
    """

    grouped: dict[str, dict[date, list[TimeEntry]]] = {}
    for entry in entries:
        if entry.category is not HourCategory.REGULAR:
            continue
        weeks = grouped.setdefault(entry.identity, {})
        weeks.setdefault(week_start(entry.date), []).append(entry)

    return tuple(
        WeeklyBucket(identity=identity, week_start=start, entries=tuple(weeks[start]))
        for identity, weeks in grouped.items()
        for start in sorted(weeks)
    )
