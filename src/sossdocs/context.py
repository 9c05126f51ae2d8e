"""Options given to the soss-docs callback, read by the commands it runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class CliOptions:
    """Global options shared across one CLI invocation."""

    config_path: Path | None = None


_options = CliOptions()


def get_config_path() -> Path | None:
    """Config file named with ``--config``, if any."""
    return _options.config_path


def set_config_path(path: Path | None) -> None:
    _options.config_path = path


def reset() -> None:
    """Forget all global options."""
    global _options
    _options = CliOptions()
