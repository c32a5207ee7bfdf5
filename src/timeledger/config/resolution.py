"""Identity resolution configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Final

from .env import env_bool, env_float, env_int, env_list
from .errors import ConfigurationError

DEFAULT_AUTO_ACCEPT_SCORE: Final[float] = 95.0
DEFAULT_STRONG_SUGGESTION_FLOOR: Final[float] = 70.0
DEFAULT_MAX_SUGGESTIONS: Final[int] = 5
DEFAULT_CUTOFF: Final[float] = 50.0

ALGORITHM_NAMES: Final[tuple[str, ...]] = ("edit", "jaccard", "word")


def _check_score(name: str, value: float) -> None:
    if not 0 <= value <= 100:
        raise ConfigurationError(f"{name} must be between 0 and 100, got {value}")


@dataclass(frozen=True, slots=True)
class Thresholds:
    """Score boundaries for the HIGH/MEDIUM/LOW confidence tiers."""

    high: float = 90.0
    medium: float = 70.0
    low: float = 50.0

    def __post_init__(self) -> None:
        for name in ("high", "medium", "low"):
            _check_score(f"thresholds.{name}", getattr(self, name))
        if not self.low <= self.medium <= self.high:
            raise ConfigurationError(
                "Thresholds must satisfy low <= medium <= high, "
                f"got low={self.low} medium={self.medium} high={self.high}"
            )


@dataclass(frozen=True, slots=True)
class AlgorithmSelection:
    """Which similarity algorithms contribute to the combined score."""

    edit: bool = True
    jaccard: bool = True
    word: bool = True

    @property
    def enabled(self) -> tuple[str, ...]:
        return tuple(name for name in ALGORITHM_NAMES if getattr(self, name))

    @classmethod
    def from_names(cls, names: tuple[str, ...] | list[str]) -> AlgorithmSelection:
        unknown = sorted(set(names) - set(ALGORITHM_NAMES))
        if unknown:
            raise ConfigurationError(f"Unknown similarity algorithm(s): {', '.join(unknown)}")
        return cls(**{name: name in names for name in ALGORITHM_NAMES})


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolutionConfig:
    """Runtime options for one resolution run.

    The config is passed to every call that needs it; nothing in the resolution
    engine reads process-wide settings.
    """

    thresholds: Thresholds = field(default_factory=Thresholds)
    auto_accept_score: float = DEFAULT_AUTO_ACCEPT_SCORE
    strong_suggestion_floor: float = DEFAULT_STRONG_SUGGESTION_FLOOR
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    cutoff: float = DEFAULT_CUTOFF
    algorithms: AlgorithmSelection = field(default_factory=AlgorithmSelection)
    medium_requires_confirmation: bool = True
    confirm_low_confidence: bool = False
    skip_header_like: bool = True

    def __post_init__(self) -> None:
        _check_score("auto_accept_score", self.auto_accept_score)
        _check_score("strong_suggestion_floor", self.strong_suggestion_floor)
        _check_score("cutoff", self.cutoff)
        if self.auto_accept_score < self.thresholds.high:
            raise ConfigurationError(
                f"auto_accept_score ({self.auto_accept_score}) must not be below "
                f"thresholds.high ({self.thresholds.high})"
            )
        if self.max_suggestions < 1:
            raise ConfigurationError(
                f"max_suggestions must be at least 1, got {self.max_suggestions}"
            )
        if not self.algorithms.enabled:
            raise ConfigurationError("At least one similarity algorithm must be enabled")


def get_resolution_config(*, base: ResolutionConfig | None = None) -> ResolutionConfig:
    """Return ``base`` (or the defaults) with ``TIMELEDGER_*`` environment overrides."""

    config = base or ResolutionConfig()

    thresholds = config.thresholds
    high = env_float("TIMELEDGER_THRESHOLD_HIGH")
    medium = env_float("TIMELEDGER_THRESHOLD_MEDIUM")
    low = env_float("TIMELEDGER_THRESHOLD_LOW")
    if any(value is not None for value in (high, medium, low)):
        thresholds = Thresholds(
            high=thresholds.high if high is None else high,
            medium=thresholds.medium if medium is None else medium,
            low=thresholds.low if low is None else low,
        )

    algorithms = config.algorithms
    names = env_list("TIMELEDGER_ALGORITHMS")
    if names is not None:
        algorithms = AlgorithmSelection.from_names(names)

    auto_accept = env_float("TIMELEDGER_AUTO_ACCEPT_SCORE")
    floor = env_float("TIMELEDGER_STRONG_SUGGESTION_FLOOR")
    max_suggestions = env_int("TIMELEDGER_MAX_SUGGESTIONS")
    cutoff = env_float("TIMELEDGER_CUTOFF")
    skip_header_like = env_bool("TIMELEDGER_SKIP_HEADER_LIKE")

    return replace(
        config,
        thresholds=thresholds,
        algorithms=algorithms,
        auto_accept_score=config.auto_accept_score if auto_accept is None else auto_accept,
        strong_suggestion_floor=config.strong_suggestion_floor if floor is None else floor,
        max_suggestions=config.max_suggestions if max_suggestions is None else max_suggestions,
        cutoff=config.cutoff if cutoff is None else cutoff,
        skip_header_like=(
            config.skip_header_like if skip_header_like is None else skip_header_like
        ),
    )
