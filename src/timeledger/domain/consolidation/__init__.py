"""Time consolidation: merge rows, allocate weekly overtime, summarize."""

from __future__ import annotations

from .aggregate import ResolvedEntry, aggregate_entries
from .engine import consolidate
from .ledger import TRAVEL_NOTE, build_ledger, rate_note
from .overtime import allocate_overtime
from .weeks import week_start, weekly_buckets

__all__ = [
    "TRAVEL_NOTE",
    "ResolvedEntry",
    "aggregate_entries",
    "allocate_overtime",
    "build_ledger",
    "consolidate",
    "rate_note",
    "week_start",
    "weekly_buckets",
]
