"""Confirmation workflow for ambiguous matches.

Per ``(input, source_tag)`` pair the workflow moves Unseen -> Pending ->
Resolved. The initial pass records pending entries in a ``ConfirmationLedger``
owned by that pass; the caller answers with a mapping ``input -> name | None``
that the follow-up pass consumes. Nothing here is persisted or shared between
runs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from pydantic import TypeAdapter, ValidationError

from timeledger.domain.errors import MalformedConfirmationPayloadError
from timeledger.domain.model import ConfidenceTier, ConfirmationEntry

if TYPE_CHECKING:
    from timeledger.config import ResolutionConfig
    from timeledger.domain.model import MatchResult, RawObservation

log = logging.getLogger(__name__)

_CONFIRMATIONS_ADAPTER: TypeAdapter[dict[str, str | None]] = TypeAdapter(dict[str, str | None])

ConfirmationPayload: TypeAlias = "Mapping[str, str | None] | str | bytes"


@dataclass(frozen=True, slots=True)
class Confirmations:
    """Validated caller decisions keyed by the exact (trimmed) input text."""

    decisions: Mapping[str, str | None] = field(default_factory=dict["str", "str | None"])

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and text.strip() in self.decisions

    def decision_for(self, text: str) -> str | None:
        return self.decisions[text.strip()]


def parse_confirmations(payload: ConfirmationPayload | None) -> Confirmations | None:
    """Validate a confirmation mapping supplied by the caller.

    Accepts a mapping or a JSON document. ``None`` means "no confirmations
    supplied" (an initial pass) and is returned unchanged.
    """

    if payload is None:
        return None
    try:
        if isinstance(payload, str | bytes):
            decisions = _CONFIRMATIONS_ADAPTER.validate_json(payload)
        else:
            decisions = _CONFIRMATIONS_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        details = tuple(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        )
        raise MalformedConfirmationPayloadError(
            f"Invalid confirmations payload ({len(details)} error(s))", details=details
        ) from exc
    except (TypeError, ValueError) as exc:
        raise MalformedConfirmationPayloadError(f"Invalid confirmations payload: {exc}") from exc

    cleaned: dict[str, str | None] = {}
    for text, name in decisions.items():
        key = text.strip()
        if not key:
            raise MalformedConfirmationPayloadError("Confirmation keys must not be blank")
        if name is not None and not name.strip():
            raise MalformedConfirmationPayloadError(
                f"Confirmation for {text!r} must be a name or null, got a blank string"
            )
        cleaned[key] = name.strip() if name is not None else None
    return Confirmations(decisions=cleaned)


def qualifies_for_confirmation(result: MatchResult, *, config: ResolutionConfig) -> bool:
    """Return whether ``result`` is worth asking a human about."""

    if not result.needs_confirmation:
        return False
    top = result.top_suggestion
    if top is None:
        return False
    if result.confidence_tier is ConfidenceTier.LOW:
        return config.confirm_low_confidence
    if result.confidence_tier is ConfidenceTier.NO_MATCH:
        return False
    return top.score >= config.strong_suggestion_floor


def accepts_by_default(result: MatchResult) -> bool:
    """Unanswered pending entries are accepted only when the top suggestion is HIGH."""

    return result.confidence_tier is ConfidenceTier.HIGH and result.matched is not None


@dataclass(slots=True)
class ConfirmationLedger:
    """Pending confirmations recorded during one resolution pass."""

    _entries: dict[tuple[str, str], ConfirmationEntry] = field(
        default_factory=dict[tuple[str, str], ConfirmationEntry]
    )

    def record(self, observation: RawObservation, result: MatchResult) -> bool:
        """Insert a pending entry once per ``(input, source_tag)``.

        Returns ``True`` when the pair was newly recorded.
        """

        key = observation.key
        if key in self._entries:
            return False
        self._entries[key] = ConfirmationEntry(
            input=key[0],
            source_tag=observation.source_tag,
            line_number=observation.line_number,
            suggestions=result.suggestions,
            confidence_tier=result.confidence_tier,
            kind=observation.kind,
        )
        log.debug("Pending confirmation recorded for %r (%s)", key[0], observation.source_tag)
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def entries(self) -> tuple[ConfirmationEntry, ...]:
        return tuple(self._entries.values())
