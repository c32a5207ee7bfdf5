# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from timeledger.adapters.json_batch import (
    parse_batch_file,
    render_outcome,
    to_consolidation_config,
    to_registry,
    to_resolution_config,
    to_rows,
)
from timeledger.app import BatchFailure, ProcessedBatch, process_batch
from timeledger.common import configure_logging, parse_log_level
from timeledger.config import ConfigurationError, get_consolidation_config, get_resolution_config
from timeledger.domain.matching import NeedsConfirmation

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from timeledger.app import BatchOutcome

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_NEEDS_CONFIRMATION = 3


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="timeledger",
        description="Resolve employee and region names and consolidate a timesheet batch",
    )
    parser.add_argument(
        "batch_file",
        type=Path,
        help="JSON batch file holding registry, rows and optional settings",
    )
    parser.add_argument(
        "--confirmations",
        type=Path,
        help="JSON object mapping ambiguous inputs to a canonical name (or null to skip)",
    )
    parser.add_argument(
        "--log-level",
        type=parse_log_level,
        default=logging.INFO,
        help="Logging level for stderr output (default: INFO)",
    )
    return parser.parse_args(list(argv))


def _exit_code(outcome: BatchOutcome) -> int:
    if isinstance(outcome, ProcessedBatch):
        return EXIT_OK
    if isinstance(outcome, NeedsConfirmation):
        return EXIT_NEEDS_CONFIRMATION
    return EXIT_FAILED


def run(argv: Sequence[str]) -> int:
    """Process one batch file, print the JSON outcome and return the exit code."""

    parsed_args = _parse_args(argv)
    configure_logging(level=parsed_args.log_level)

    try:
        batch = parse_batch_file(parsed_args.batch_file.read_bytes())
        confirmations = (
            parsed_args.confirmations.read_text(encoding="utf-8")
            if parsed_args.confirmations is not None
            else batch.confirmations
        )
    except OSError:
        log.exception("Could not read input file")
        return EXIT_USAGE
    except ValidationError:
        log.exception("Invalid batch file %s", parsed_args.batch_file)
        return EXIT_USAGE

    outcome: BatchOutcome
    try:
        config = to_resolution_config(batch.settings, base=get_resolution_config())
        consolidation = to_consolidation_config(batch.settings, base=get_consolidation_config())
    except ConfigurationError as exc:
        log.exception("Invalid configuration")
        outcome = BatchFailure(error_type=type(exc).__name__, message=str(exc))
    else:
        outcome = process_batch(
            to_rows(batch),
            to_registry(batch),
            config=config,
            consolidation=consolidation,
            confirmations=confirmations,
            overtime_rates=batch.overtime_rates,
        )

    print(render_outcome(outcome))
    return _exit_code(outcome)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    sys.exit(run(argv if argv is not None else sys.argv[1:]))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)
