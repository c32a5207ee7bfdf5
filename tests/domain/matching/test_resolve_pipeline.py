from __future__ import annotations

from dataclasses import replace

import pytest

from tests.helpers.timesheets import employee, region
from timeledger.config import ResolutionConfig
from timeledger.domain.errors import MalformedConfirmationPayloadError
from timeledger.domain.matching import NeedsConfirmation, Resolved, resolve
from timeledger.domain.matching import pipeline as pipeline_module
from timeledger.domain.model import (
    ConfidenceTier,
    MatchResult,
    RegistryEntry,
    RegistryKind,
    ResolutionStatus,
    Suggestion,
    WarningCode,
)

JACK = (RegistryEntry("Jack Allan"),)


def _resolved(result: NeedsConfirmation | Resolved) -> Resolved:
    assert isinstance(result, Resolved)
    return result


def _pending(result: NeedsConfirmation | Resolved) -> NeedsConfirmation:
    assert isinstance(result, NeedsConfirmation)
    return result


@pytest.mark.parametrize("text", ["Jack Allan", "  JACK allan ", "jack, allan."])
def test_resolve_auto_matches_case_and_punctuation_variants(text: str) -> None:
    result = _resolved(resolve([employee(text)], JACK))

    (match,) = result.results
    assert result.status == "resolved"
    assert match.status is ResolutionStatus.AUTO_MATCHED
    assert match.confidence_tier is ConfidenceTier.HIGH
    assert match.confidence_score == 100.0
    assert match.needs_confirmation is False
    assert match.identity == "Jack Allan"


def test_resolve_pends_ambiguous_edit_match(edit_only_config: ResolutionConfig) -> None:
    result = _pending(resolve([employee("Jon Allan", line_number=7)], JACK, edit_only_config))

    (entry,) = result.pending
    assert result.status == "needs_confirmation"
    assert entry.input == "Jon Allan"
    assert entry.source_tag == "sheet1"
    assert entry.line_number == 7
    assert entry.confidence_tier is ConfidenceTier.MEDIUM
    assert entry.suggestions[0] == Suggestion("Jack Allan", 70.0)
    assert 70.0 <= entry.suggestions[0].score < 95.0


def test_resolve_low_score_with_default_weights_is_not_pended() -> None:
    result = _resolved(resolve([employee("Jon Allan")], JACK))

    (match,) = result.results
    assert match.confidence_score == 61.75
    assert match.confidence_tier is ConfidenceTier.LOW
    assert match.matched == "Jack Allan"
    assert match.status is ResolutionStatus.UNMATCHED
    assert match.identity is None


def test_resolve_pends_medium_match_with_default_weights() -> None:
    result = _pending(resolve([employee("Jack Allen")], JACK))

    assert result.pending[0].suggestions[0] == Suggestion("Jack Allan", 77.25)


def test_resolve_records_repeated_input_once(edit_only_config: ResolutionConfig) -> None:
    observations = [employee("Jon Allan"), employee("Jon Allan "), employee("Jack Allan")]

    result = _pending(resolve(observations, JACK, edit_only_config))

    assert [entry.input for entry in result.pending] == ["Jon Allan"]


def test_resolve_confirmation_round_trip(edit_only_config: ResolutionConfig) -> None:
    observations = [employee("Jon Allan"), employee("Jack Allan")]
    first = _pending(resolve(observations, JACK, edit_only_config))
    answers = {entry.input: entry.suggestions[0].name for entry in first.pending}

    second = _resolved(resolve(observations, JACK, edit_only_config, confirmations=answers))

    confirmed, auto = second.results
    assert confirmed.status is ResolutionStatus.CONFIRMED
    assert confirmed.identity == "Jack Allan"
    assert confirmed.confidence_score == 100.0
    assert confirmed.confidence_tier is ConfidenceTier.HIGH
    assert auto.status is ResolutionStatus.AUTO_MATCHED
    assert second.identity_for(observations[0]) == "Jack Allan"


def test_resolve_confirmation_accepts_json_payload(edit_only_config: ResolutionConfig) -> None:
    result = _resolved(
        resolve(
            [employee("Jon Allan")],
            JACK,
            edit_only_config,
            confirmations='{"Jon Allan": "Jack Allan"}',
        )
    )

    assert result.results[0].identity == "Jack Allan"


def test_resolve_null_confirmation_skips_observation(edit_only_config: ResolutionConfig) -> None:
    result = _resolved(
        resolve([employee("Jon Allan")], JACK, edit_only_config, confirmations={"Jon Allan": None})
    )

    (match,) = result.results
    assert match.status is ResolutionStatus.SKIPPED
    assert match.matched is None
    assert match.confidence_tier is ConfidenceTier.NO_MATCH
    assert match.identity is None


def test_resolve_unanswered_medium_match_is_skipped(edit_only_config: ResolutionConfig) -> None:
    result = _resolved(resolve([employee("Jon Allan")], JACK, edit_only_config, confirmations={}))

    (match,) = result.results
    assert match.status is ResolutionStatus.SKIPPED
    assert match.confidence_tier is ConfidenceTier.MEDIUM
    assert match.identity is None


def test_resolve_unanswered_high_match_is_defaulted(edit_only_config: ResolutionConfig) -> None:
    initial = _pending(resolve([employee("Jack Allen")], JACK, edit_only_config))
    assert initial.pending[0].confidence_tier is ConfidenceTier.HIGH

    result = _resolved(resolve([employee("Jack Allen")], JACK, edit_only_config, confirmations={}))

    (match,) = result.results
    assert match.status is ResolutionStatus.DEFAULTED
    assert match.confidence_score == 90.0
    assert match.identity == "Jack Allan"


def test_resolve_medium_match_auto_adopted_when_confirmation_not_required(
    edit_only_config: ResolutionConfig,
) -> None:
    config = replace(edit_only_config, medium_requires_confirmation=False)

    result = _resolved(resolve([employee("Jon Allan")], JACK, config))

    assert result.results[0].status is ResolutionStatus.AUTO_MATCHED
    assert result.results[0].identity == "Jack Allan"


def test_resolve_low_match_pended_when_configured(resolution_config: ResolutionConfig) -> None:
    config = replace(resolution_config, confirm_low_confidence=True)

    result = _pending(resolve([employee("Jon Allan")], JACK, config))

    assert result.pending[0].confidence_tier is ConfidenceTier.LOW


def test_resolve_blank_input_is_unmatched() -> None:
    result = _resolved(resolve([employee("   ")], JACK))

    (match,) = result.results
    assert match.input == ""
    assert match.confidence_tier is ConfidenceTier.NO_MATCH
    assert match.suggestions == ()
    assert match.status is ResolutionStatus.UNMATCHED


def test_resolve_ignores_header_like_employee_text() -> None:
    result = _resolved(resolve([employee("Week Ending: 06/07/2025"), employee("Jack Allan")], JACK))

    header, name = result.results
    assert header.status is ResolutionStatus.IGNORED
    assert header.identity is None
    assert name.identity == "Jack Allan"


def test_resolve_header_like_skip_can_be_disabled(resolution_config: ResolutionConfig) -> None:
    config = replace(resolution_config, skip_header_like=False)

    result = _resolved(resolve([employee("Employee Name")], JACK, config))

    assert result.results[0].status is ResolutionStatus.UNMATCHED


def test_resolve_empty_region_registry_warns_once() -> None:
    observations = [employee("Jack Allan"), region("North"), region("South")]

    result = _resolved(resolve(observations, JACK))

    assert len(result.warnings) == 1
    (warning,) = result.warnings
    assert warning.code is WarningCode.EMPTY_REGISTRY
    assert warning.kind is RegistryKind.REGION
    regions = [match for match in result.results if match.kind is RegistryKind.REGION]
    assert [match.confidence_tier for match in regions] == [ConfidenceTier.NO_MATCH] * 2
    assert result.results[0].identity == "Jack Allan"


def test_resolve_matches_each_kind_against_its_own_registry(
    registry: tuple[RegistryEntry, ...],
) -> None:
    result = _resolved(resolve([employee("north"), region("north")], registry))

    employee_result, region_result = result.results
    assert employee_result.identity is None
    assert region_result.identity == "North"


def test_resolve_rejects_malformed_confirmations_before_scoring(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fail_rank(*_: object, **__: object) -> None:
        raise AssertionError("scoring must not start")

    monkeypatch.setattr(pipeline_module, "rank_candidates", fail_rank)

    with pytest.raises(MalformedConfirmationPayloadError):
        resolve([employee("Jon Allan")], JACK, confirmations="{broken")


def test_resolve_does_not_mutate_registry(edit_only_config: ResolutionConfig) -> None:
    registry = [RegistryEntry("Jack Allan")]

    resolve([employee("Jon Allan")], registry, edit_only_config, confirmations={"Jon Allan": "Jon"})

    assert registry == [RegistryEntry("Jack Allan")]


def _match(text: str, matched: str | None, **overrides: object) -> MatchResult:
    result = MatchResult(
        input=text,
        matched=matched,
        confidence_score=100.0 if matched else 0.0,
        confidence_tier=ConfidenceTier.HIGH if matched else ConfidenceTier.NO_MATCH,
        needs_confirmation=False,
        status=ResolutionStatus.AUTO_MATCHED if matched else ResolutionStatus.UNMATCHED,
        source_tag="sheet1",
    )
    return replace(result, **overrides)


def test_resolved_identity_for_keys_on_text_source_and_kind() -> None:
    result = Resolved(
        results=(
            _match("Jack Allan", "Jack Allan"),
            _match("North", "North", kind=RegistryKind.REGION),
            _match("Jack Allan", None, source_tag="sheet2"),
            _match("Jack Allan", "Jack Allan", source_tag="sheet2"),
        )
    )

    assert result.identity_for(employee("  Jack Allan ")) == "Jack Allan"
    assert result.identity_for(region("North")) == "North"
    assert result.identity_for(employee("North")) is None
    assert result.identity_for(employee("Jack Allan", source_tag="sheet2")) is None
    assert result.identity_for(employee("Jack Allan", source_tag="sheet3")) is None
    assert result == Resolved(results=result.results)
