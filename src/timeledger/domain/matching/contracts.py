"""Result types produced by a resolution run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from timeledger.domain.model import (
        BatchWarning,
        ConfirmationEntry,
        MatchResult,
        RawObservation,
        RegistryKind,
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class NeedsConfirmation:
    """The batch halted: ``pending`` must be answered before consolidation."""

    pending: tuple[ConfirmationEntry, ...]
    warnings: tuple[BatchWarning, ...] = ()
    status: Literal["needs_confirmation"] = "needs_confirmation"

    def __post_init__(self) -> None:
        if not self.pending:
            raise ValueError("NeedsConfirmation must carry at least one pending entry")


@dataclass(frozen=True, slots=True, kw_only=True)
class Resolved:
    """Every observation settled; ``results`` follows observation order."""

    results: tuple[MatchResult, ...]
    warnings: tuple[BatchWarning, ...] = ()
    status: Literal["resolved"] = "resolved"
    _identities: dict[tuple[str, str, RegistryKind], str | None] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        identities: dict[tuple[str, str, RegistryKind], str | None] = {}
        for result in self.results:
            identities.setdefault((result.input, result.source_tag, result.kind), result.identity)
        object.__setattr__(self, "_identities", identities)

    def identity_for(self, observation: RawObservation) -> str | None:
        """Adopted canonical name for ``observation`` (first matching result)."""

        text, source_tag = observation.key
        return self._identities.get((text, source_tag, observation.kind))


ResolveResult: TypeAlias = "NeedsConfirmation | Resolved"
