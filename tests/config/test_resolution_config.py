from __future__ import annotations

import pytest

from timeledger.config import (
    AlgorithmSelection,
    ConfigurationError,
    ResolutionConfig,
    Thresholds,
    get_resolution_config,
)


def test_resolution_config_defaults() -> None:
    config = ResolutionConfig()

    assert config.thresholds == Thresholds(high=90.0, medium=70.0, low=50.0)
    assert config.auto_accept_score == 95.0
    assert config.strong_suggestion_floor == 70.0
    assert config.max_suggestions == 5
    assert config.cutoff == 50.0
    assert config.algorithms.enabled == ("edit", "jaccard", "word")


def test_thresholds_must_be_ordered() -> None:
    with pytest.raises(ConfigurationError, match="low <= medium <= high"):
        Thresholds(high=60.0, medium=70.0, low=50.0)


def test_thresholds_must_stay_in_range() -> None:
    with pytest.raises(ConfigurationError, match="thresholds.high"):
        Thresholds(high=120.0)


def test_resolution_config_requires_an_algorithm() -> None:
    with pytest.raises(ConfigurationError, match="At least one similarity algorithm"):
        ResolutionConfig(algorithms=AlgorithmSelection(edit=False, jaccard=False, word=False))


def test_auto_accept_score_cannot_undercut_high_threshold() -> None:
    with pytest.raises(ConfigurationError, match="auto_accept_score"):
        ResolutionConfig(auto_accept_score=85.0)


def test_max_suggestions_must_be_positive() -> None:
    with pytest.raises(ConfigurationError, match="max_suggestions"):
        ResolutionConfig(max_suggestions=0)


def test_algorithm_selection_from_names_rejects_unknown() -> None:
    with pytest.raises(ConfigurationError, match="soundex"):
        AlgorithmSelection.from_names(["edit", "soundex"])


def test_get_resolution_config_without_env_returns_defaults() -> None:
    assert get_resolution_config() == ResolutionConfig()


def test_get_resolution_config_applies_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMELEDGER_THRESHOLD_HIGH", "92")
    monkeypatch.setenv("TIMELEDGER_THRESHOLD_LOW", "40")
    monkeypatch.setenv("TIMELEDGER_ALGORITHMS", "Edit, word")
    monkeypatch.setenv("TIMELEDGER_MAX_SUGGESTIONS", "3")
    monkeypatch.setenv("TIMELEDGER_SKIP_HEADER_LIKE", "no")

    config = get_resolution_config()

    assert config.thresholds == Thresholds(high=92.0, medium=70.0, low=40.0)
    assert config.algorithms == AlgorithmSelection(edit=True, jaccard=False, word=True)
    assert config.max_suggestions == 3
    assert config.skip_header_like is False
    assert config.cutoff == 50.0


def test_get_resolution_config_keeps_base_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMELEDGER_CUTOFF", "60")
    base = ResolutionConfig(confirm_low_confidence=True, max_suggestions=2)

    config = get_resolution_config(base=base)

    assert config.cutoff == 60.0
    assert config.confirm_low_confidence is True
    assert config.max_suggestions == 2


def test_get_resolution_config_ignores_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMELEDGER_AUTO_ACCEPT_SCORE", "   ")

    assert get_resolution_config().auto_accept_score == 95.0


def test_get_resolution_config_rejects_malformed_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMELEDGER_THRESHOLD_MEDIUM", "seventy")

    with pytest.raises(ConfigurationError) as exc:
        get_resolution_config()

    assert "TIMELEDGER_THRESHOLD_MEDIUM" in str(exc.value)


def test_get_resolution_config_rejects_empty_algorithm_list(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TIMELEDGER_ALGORITHMS", ",")

    with pytest.raises(ConfigurationError, match="At least one similarity algorithm"):
        get_resolution_config()
