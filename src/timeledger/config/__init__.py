"""Application configuration helpers."""

from __future__ import annotations

from .consolidation import ConsolidationConfig, get_consolidation_config
from .errors import ConfigurationError
from .resolution import (
    ALGORITHM_NAMES,
    AlgorithmSelection,
    ResolutionConfig,
    Thresholds,
    get_resolution_config,
)

__all__ = [
    "ALGORITHM_NAMES",
    "AlgorithmSelection",
    "ConfigurationError",
    "ConsolidationConfig",
    "ResolutionConfig",
    "Thresholds",
    "get_consolidation_config",
    "get_resolution_config",
]
