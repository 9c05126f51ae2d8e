"""Verbosity-aware logging for sossdocs.

Two levels sit between the standard ones so ``-v`` can be raised one step at a
time: PROGRESS reports which examples, sections and files are handled, CHECKS
reports rule parsing and class matching.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

LOGGER_NAME = "sossdocs"

PROGRESS_LEVEL = 25  # between INFO and WARNING
CHECKS_LEVEL = 15  # between DEBUG and INFO

logging.addLevelName(PROGRESS_LEVEL, "PROGRESS")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

# -v count to logger threshold; warnings are always shown
VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: PROGRESS_LEVEL,
    2: CHECKS_LEVEL,
    3: logging.DEBUG,
}


class SossLogger(logging.Logger):
    """Logger with one method per sossdocs verbosity step."""

    def progress(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an example, section or output file being handled (``-v 1``)."""
        if self.isEnabledFor(PROGRESS_LEVEL):
            self._log(PROGRESS_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a rule parsed or a class matched (``-v 2``)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> SossLogger:
    """Get the shared sossdocs logger."""
    logging.setLoggerClass(SossLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, SossLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Point the logger at one stream with a bare message format.

    Safe to call again; earlier handlers are replaced.

    Args:
        verbosity: 0=warnings, 1=progress, 2=checks, 3=debug; other values
            fall back to warnings
        stream: Output stream, stderr when omitted
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(VERBOSITY_LEVELS.get(verbosity, logging.WARNING))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and let records propagate again, as before setup_logger()."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
