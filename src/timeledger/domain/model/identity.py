"""Identity resolution records."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import ConfidenceTier, RegistryKind, ResolutionStatus, WarningCode

_ADOPTED_STATUSES = frozenset(
    {ResolutionStatus.AUTO_MATCHED, ResolutionStatus.CONFIRMED, ResolutionStatus.DEFAULTED}
)


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    """Canonical, registry-approved name for an employee or region."""

    name: str
    kind: RegistryKind = RegistryKind.EMPLOYEE


@dataclass(frozen=True, slots=True, kw_only=True)
class RawObservation:
    """Free text read from a source, before any resolution."""

    text: str
    source_tag: str
    line_number: int | None = None
    kind: RegistryKind = RegistryKind.EMPLOYEE

    @property
    def key(self) -> tuple[str, str]:
        return self.text.strip(), self.source_tag


@dataclass(frozen=True, slots=True)
class Suggestion:
    name: str
    score: float


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchResult:
    """Outcome of resolving one observation against a registry."""

    input: str
    matched: str | None
    confidence_score: float
    confidence_tier: ConfidenceTier
    suggestions: tuple[Suggestion, ...] = ()
    needs_confirmation: bool
    status: ResolutionStatus
    source_tag: str = ""
    line_number: int | None = None
    kind: RegistryKind = RegistryKind.EMPLOYEE

    def __post_init__(self) -> None:
        if self.matched is not None and self.confidence_tier is ConfidenceTier.NO_MATCH:
            raise ValueError("NO_MATCH results cannot carry a matched name")

    @property
    def identity(self) -> str | None:
        """Canonical name adopted for this observation, if any."""

        if self.status in _ADOPTED_STATUSES:
            return self.matched
        return None

    @property
    def top_suggestion(self) -> Suggestion | None:
        return self.suggestions[0] if self.suggestions else None


@dataclass(frozen=True, slots=True, kw_only=True)
class ConfirmationEntry:
    """Ambiguous match awaiting an explicit decision from the caller."""

    input: str
    source_tag: str
    line_number: int | None = None
    suggestions: tuple[Suggestion, ...] = ()
    confidence_tier: ConfidenceTier = ConfidenceTier.NO_MATCH
    kind: RegistryKind = RegistryKind.EMPLOYEE

    @property
    def key(self) -> tuple[str, str]:
        return self.input, self.source_tag


@dataclass(frozen=True, slots=True, kw_only=True)
class BatchWarning:
    """Recoverable, batch-level condition reported once per batch."""

    code: WarningCode
    message: str
    kind: RegistryKind | None = None
