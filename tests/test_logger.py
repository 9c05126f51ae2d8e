"""Tests for verbosity-aware logging."""

import io

import pytest

from sossdocs.logger import get_logger, setup_logger


@pytest.mark.parametrize(
    ("verbosity", "expected"),
    [
        (0, ["warn"]),
        (1, ["warn", "progress"]),
        (2, ["warn", "progress", "checks"]),
        (3, ["warn", "progress", "checks", "debug"]),
        (7, ["warn"]),
    ],
)
def test_verbosity_levels(verbosity: int, expected: list[str]):
    """Test which messages each -v level lets through."""
    stream = io.StringIO()
    setup_logger(verbosity, stream)
    logger = get_logger()

    logger.warning("warn")
    logger.progress("progress")
    logger.checks("checks")
    logger.debug("debug")

    assert stream.getvalue().splitlines() == expected


def test_setup_replaces_handlers():
    """Test that reconfiguring does not duplicate output."""
    stream = io.StringIO()
    setup_logger(1, stream)
    setup_logger(1, stream)

    get_logger().progress("once")

    assert stream.getvalue() == "once\n"
