#!/usr/bin/env python3

from __future__ import annotations

from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from timeledger.ui import cli

if TYPE_CHECKING:
    from collections.abc import Sequence


def main(argv: Sequence[str] | None = None) -> None:
    """Console entry point: load ``.env`` overrides, then run the CLI."""
    load_dotenv()
    signal(SIGINT, cli.sigint_handler)
    cli.main(argv)


if __name__ == "__main__":
    main()
