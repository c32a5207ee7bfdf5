"""Time consolidation configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

from .env import env_bool, env_float
from .errors import ConfigurationError

DEFAULT_WEEKLY_REGULAR_LIMIT: Final[float] = 40.0
DEFAULT_HOLIDAY_HOURS: Final[float] = 8.0


@dataclass(frozen=True, slots=True, kw_only=True)
class ConsolidationConfig:
    """Policy knobs for entry aggregation and overtime allocation.

    ``travel_counts_toward_overtime`` is a payroll policy decision: by default
    TRAVEL hours stay in their own category and never count toward the weekly
    REGULAR threshold.
    """

    weekly_regular_limit: float = DEFAULT_WEEKLY_REGULAR_LIMIT
    holiday_hours: float = DEFAULT_HOLIDAY_HOURS
    travel_counts_toward_overtime: bool = False

    def __post_init__(self) -> None:
        if self.weekly_regular_limit <= 0:
            raise ConfigurationError(
                f"weekly_regular_limit must be positive, got {self.weekly_regular_limit}"
            )
        if self.holiday_hours <= 0:
            raise ConfigurationError(f"holiday_hours must be positive, got {self.holiday_hours}")


def get_consolidation_config(*, base: ConsolidationConfig | None = None) -> ConsolidationConfig:
    config = base or ConsolidationConfig()
    limit = env_float("TIMELEDGER_WEEKLY_REGULAR_LIMIT")
    holiday_hours = env_float("TIMELEDGER_HOLIDAY_HOURS")
    travel = env_bool("TIMELEDGER_TRAVEL_COUNTS_TOWARD_OVERTIME")
    return replace(
        config,
        weekly_regular_limit=config.weekly_regular_limit if limit is None else limit,
        holiday_hours=config.holiday_hours if holiday_hours is None else holiday_hours,
        travel_counts_toward_overtime=(
            config.travel_counts_toward_overtime if travel is None else travel
        ),
    )
