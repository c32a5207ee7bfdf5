"""Consolidation entry point: aggregate, allocate overtime, summarize."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from timeledger.config import ConsolidationConfig

from .aggregate import aggregate_entries
from .ledger import build_ledger
from .overtime import allocate_overtime

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from timeledger.domain.model import ConsolidatedLedger

    from .aggregate import ResolvedEntry

log = logging.getLogger(__name__)


def consolidate(
    resolved_entries: Iterable[ResolvedEntry],
    *,
    config: ConsolidationConfig | None = None,
    overtime_rates: Mapping[str, float | None] | None = None,
    matched_from: Mapping[str, Iterable[str]] | None = None,
) -> ConsolidatedLedger:
    """Build the overtime-allocated ledger for ``(identity, row)`` pairs.

    Raises ``InvariantViolationError`` if allocation breaks hour conservation.
    """

    active_config = config or ConsolidationConfig()
    aggregated = aggregate_entries(resolved_entries, config=active_config)
    allocated = allocate_overtime(aggregated, config=active_config)
    ledger = build_ledger(
        allocated,
        config=active_config,
        overtime_rates=overtime_rates,
        matched_from=matched_from,
    )
    log.info(
        "Consolidated %d entries for %d identities across %d regions (%.2fh)",
        len(allocated),
        len(ledger.identities),
        len(ledger.regions),
        ledger.total_hours,
    )
    return ledger
