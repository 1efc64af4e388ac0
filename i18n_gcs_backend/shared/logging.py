"""Logging configuration for command-line use of the backend."""

import logging
import sys
from typing import TextIO


def setup_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Configure process-wide logging.

    Level is DEBUG when debug is True, otherwise INFO.
    Output goes to stdout unless another stream is given. Library code never
    calls this; only scripts do.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
    )

