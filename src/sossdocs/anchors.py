"""Anchor generation compatible with GitHub-rendered markdown."""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9]")
_HYPHEN_RUNS = re.compile(r"-+")


def anchor(label: str) -> str:
    """Create a markdown anchor from a display label.

    Lowercase the label, replace every character outside ``[a-z0-9]`` with a
    hyphen, collapse runs of hyphens and strip hyphens from both ends. The
    result is stable across runs, so links and their targets can be computed
    independently.

    Args:
        label: Human-readable label, e.g. ``"Class: Book"``

    Returns:
        Anchor string, e.g. ``"class-book"``
    """
    result = _DISALLOWED.sub("-", str(label).lower())
    result = _HYPHEN_RUNS.sub("-", result)
    return result.strip("-")
