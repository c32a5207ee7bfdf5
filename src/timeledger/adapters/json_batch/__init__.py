"""Public interface for the JSON batch file adapter."""

from __future__ import annotations

from .schema import BatchFile, BatchResponse, SettingsPayload
from .translator import (
    parse_batch_file,
    render_outcome,
    to_consolidation_config,
    to_registry,
    to_resolution_config,
    to_response,
    to_rows,
)

__all__ = [
    "BatchFile",
    "BatchResponse",
    "SettingsPayload",
    "parse_batch_file",
    "render_outcome",
    "to_consolidation_config",
    "to_registry",
    "to_resolution_config",
    "to_response",
    "to_rows",
]
