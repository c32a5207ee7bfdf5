"""Identity resolution: normalize, score, rank, classify and confirm."""

from __future__ import annotations

from .confidence import Classification, classify
from .confirmation import ConfirmationLedger, Confirmations, parse_confirmations
from .contracts import NeedsConfirmation, Resolved, ResolveResult
from .engine import MatchOutcome, rank_candidates
from .normalize import is_header_like, normalize_text
from .pipeline import registry_names, resolve
from .report import (
    ValidationIssue,
    ValidationReport,
    ValidationReportBuilder,
    ValidationStatus,
    build_validation_report,
)
from .similarity import (
    edit_similarity,
    jaccard_similarity,
    levenshtein_distance,
    similarity,
    word_similarity,
)

__all__ = [
    "Classification",
    "ConfirmationLedger",
    "Confirmations",
    "MatchOutcome",
    "NeedsConfirmation",
    "ResolveResult",
    "Resolved",
    "ValidationIssue",
    "ValidationReport",
    "ValidationReportBuilder",
    "ValidationStatus",
    "build_validation_report",
    "classify",
    "edit_similarity",
    "is_header_like",
    "jaccard_similarity",
    "levenshtein_distance",
    "normalize_text",
    "parse_confirmations",
    "rank_candidates",
    "registry_names",
    "resolve",
    "similarity",
    "word_similarity",
]
