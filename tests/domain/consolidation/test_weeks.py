from __future__ import annotations

from datetime import date

import pytest

from tests.helpers.timesheets import MONDAY, regular_week
from timeledger.domain.consolidation import week_start, weekly_buckets
from timeledger.domain.model import HourCategory, TimeEntry


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        (date(2025, 6, 2), date(2025, 6, 2)),
        (date(2025, 6, 4), date(2025, 6, 2)),
        (date(2025, 6, 8), date(2025, 6, 2)),
        (date(2025, 6, 9), date(2025, 6, 9)),
        (date(2025, 1, 1), date(2024, 12, 30)),
    ],
)
def test_week_start_is_monday(day: date, expected: date) -> None:
    assert week_start(day) == expected


def test_weekly_buckets_group_regular_entries_per_identity_and_week() -> None:
    entries = [
        *regular_week("Maria Lopez", start=date(2025, 6, 9), days=2),
        *regular_week("Jack Allan", days=3),
        *regular_week("Maria Lopez", days=1),
        TimeEntry(
            identity="Jack Allan",
            date=MONDAY,
            region="North",
            category=HourCategory.TRAVEL,
            hours=2.0,
        ),
    ]

    buckets = weekly_buckets(entries)

    assert [(bucket.identity, bucket.week_start) for bucket in buckets] == [
        ("Maria Lopez", date(2025, 6, 2)),
        ("Maria Lopez", date(2025, 6, 9)),
        ("Jack Allan", date(2025, 6, 2)),
    ]
    assert buckets[2].total_hours == 27.0
    assert all(entry.category is HourCategory.REGULAR for b in buckets for entry in b.entries)
