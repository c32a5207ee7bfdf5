"""Per-identity and per-region ledger summaries."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from timeledger.domain.model import (
    ConsolidatedLedger,
    HourCategory,
    IdentityLedger,
    RegionSummary,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from timeledger.config import ConsolidationConfig
    from timeledger.domain.model import TimeEntry

TRAVEL_NOTE = "Travel time kept separate and not included in overtime."


def rate_note(rate: float | None) -> str:
    if rate is None:
        return "Overtime rate applied: Standard."
    return f"Overtime rate applied: ${rate:.2f}."


def build_ledger(
    entries: Iterable[TimeEntry],
    *,
    config: ConsolidationConfig,
    overtime_rates: Mapping[str, float | None] | None = None,
    matched_from: Mapping[str, Iterable[str]] | None = None,
) -> ConsolidatedLedger:
    """Group allocated entries per identity and per region.

    Identities named in ``overtime_rates`` get that rate stamped on every entry
    (``None`` meaning the standard rate); the stamping happens after overtime
    allocation and never changes hours.
    """

    by_identity: dict[str, list[TimeEntry]] = {}
    for entry in entries:
        by_identity.setdefault(entry.identity, []).append(entry)

    identities: list[IdentityLedger] = []
    for identity, identity_entries in by_identity.items():
        notes: list[str] = []
        if overtime_rates is not None and identity in overtime_rates:
            rate = overtime_rates[identity]
            identity_entries = [replace(entry, overtime_rate=rate) for entry in identity_entries]
            notes.append(rate_note(rate))
        else:
            rates = (entry.overtime_rate for entry in identity_entries)
            rate = next((value for value in rates if value is not None), None)
        if not config.travel_counts_toward_overtime and any(
            entry.category is HourCategory.TRAVEL for entry in identity_entries
        ):
            notes.append(TRAVEL_NOTE)
        sources = tuple(dict.fromkeys((matched_from or {}).get(identity, ())))
        identities.append(
            IdentityLedger(
                identity=identity,
                entries=tuple(identity_entries),
                overtime_rate=rate,
                matched_from=sources,
                notes=tuple(notes),
            )
        )

    by_region: dict[str, list[TimeEntry]] = {}
    for ledger in identities:
        for entry in ledger.entries:
            by_region.setdefault(entry.region, []).append(entry)

    return ConsolidatedLedger(
        identities=tuple(identities),
        regions=tuple(
            RegionSummary(region=region, entries=tuple(region_entries))
            for region, region_entries in by_region.items()
        ),
    )
