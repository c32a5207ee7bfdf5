"""Weekly overtime allocation.

REGULAR hours above the weekly limit are moved into OVERTIME entries. Within an
over-limit week the most recent work is treated as the overtime-qualifying
work: entries are drained latest date first, and among entries sharing a date
the one aggregated last is drained first. TRAVEL and HOLIDAY entries are never
touched.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import TYPE_CHECKING

from timeledger.domain.errors import InvariantViolationError
from timeledger.domain.model import HourCategory, TimeEntry

from .weeks import weekly_buckets

if TYPE_CHECKING:
    from collections.abc import Sequence

    from timeledger.config import ConsolidationConfig

    from .aggregate import EntryKey

log = logging.getLogger(__name__)

_TOLERANCE = 1e-9


def allocate_overtime(
    entries: Sequence[TimeEntry],
    *,
    config: ConsolidationConfig,
) -> tuple[TimeEntry, ...]:
    """Return ``entries`` with weekly REGULAR excess converted into OVERTIME.

    Raises ``InvariantViolationError`` when an entry arrives with non-positive
    hours, when the weekly excess cannot be absorbed, or when hours are not
    conserved within a week.
    """

    for entry in entries:
        if entry.hours <= 0:
            raise InvariantViolationError(
                f"Allocation input has non-positive hours: {entry.identity} {entry.date} "
                f"{entry.region} {entry.category} ({entry.hours})"
            )

    working = list(entries)
    position_by_key = {entry.key: position for position, entry in enumerate(working)}
    if len(position_by_key) != len(working):
        raise InvariantViolationError(
            "Allocation input holds more than one entry per identity/date/region/category"
        )
    created: list[TimeEntry] = []
    created_by_key: dict[EntryKey, int] = {}

    for bucket in weekly_buckets(working):
        identity, start = bucket.identity, bucket.week_start
        positions = [position_by_key[entry.key] for entry in bucket.entries]
        total = bucket.total_hours
        if total <= config.weekly_regular_limit:
            continue

        excess = total - config.weekly_regular_limit
        remaining = excess
        moved = 0.0
        for position in sorted(positions, key=lambda p: (working[p].date, p), reverse=True):
            if remaining <= _TOLERANCE:
                break
            entry = working[position]
            delta = min(entry.hours, remaining)
            left = entry.hours - delta
            if left <= _TOLERANCE:
                # float residue of a fully drained entry
                delta, left = entry.hours, 0.0
            working[position] = replace(entry, hours=left)
            overtime = TimeEntry(
                identity=entry.identity,
                date=entry.date,
                region=entry.region,
                category=HourCategory.OVERTIME,
                hours=delta,
                overtime_rate=entry.overtime_rate,
            )
            _book_overtime(overtime, working, position_by_key, created, created_by_key)
            remaining -= delta
            moved += delta

        if remaining > _TOLERANCE:
            raise InvariantViolationError(
                f"Unabsorbed overtime for {identity} week of {start}: "
                f"{remaining} of {excess} hours"
            )
        regular_after = sum(working[position].hours for position in positions)
        if not math.isclose(regular_after + moved, total, abs_tol=_TOLERANCE):
            raise InvariantViolationError(
                f"Hours not conserved for {identity} week of {start}: "
                f"{regular_after} regular + {moved} overtime != {total}"
            )
        log.debug(
            "Week of %s for %s: %.2fh total, %.2fh moved to overtime", start, identity, total, moved
        )

    kept = [
        entry
        for entry in working
        if not (entry.category is HourCategory.REGULAR and entry.hours <= _TOLERANCE)
    ]
    return (*kept, *created)


def _book_overtime(
    overtime: TimeEntry,
    working: list[TimeEntry],
    position_by_key: dict[EntryKey, int],
    created: list[TimeEntry],
    created_by_key: dict[EntryKey, int],
) -> None:
    """Add ``overtime`` while keeping one entry per key."""

    existing_position = position_by_key.get(overtime.key)
    if existing_position is not None:
        existing = working[existing_position]
        working[existing_position] = replace(existing, hours=existing.hours + overtime.hours)
        return
    created_position = created_by_key.get(overtime.key)
    if created_position is not None:
        existing = created[created_position]
        created[created_position] = replace(existing, hours=existing.hours + overtime.hours)
        return
    created_by_key[overtime.key] = len(created)
    created.append(overtime)
