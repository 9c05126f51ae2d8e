"""Placeholder substitution for documentation templates."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

from .exceptions import FragmentError

PLACEHOLDER = re.compile(r"\$\{rules\.([^}]+)\}")

# Keys assembled from many per-entity fragments; later writers append
AGGREGATE_KEYS = frozenset({"all", "allDefinedTermSets", "allItemLists"})


class FragmentMap(Mapping[str, str]):
    """Named markdown fragments for one generation run.

    Plain keys are write-once. Aggregate keys (``all``,
    ``allDefinedTermSets``, ``allItemLists``) collect their content through
    append() in processing order.
    """

    def __init__(self) -> None:
        self._fragments: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        """Register a fragment.

        Raises:
            FragmentError: If the key already holds a fragment
        """
        if key in self._fragments:
            raise FragmentError(f"Fragment '{key}' has already been written")
        self._fragments[key] = value

    def append(self, key: str, value: str) -> None:
        """Append to an aggregate fragment.

        Raises:
            FragmentError: If the key is not an aggregate key
        """
        if key not in AGGREGATE_KEYS:
            raise FragmentError(f"Fragment '{key}' is not an aggregate and cannot be appended")
        self._fragments[key] = self._fragments.get(key, "") + value

    def __getitem__(self, key: str) -> str:
        return self._fragments[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)


def render(template: str, fragments: Mapping[str, str]) -> str:
    """Substitute ``${rules.KEY}`` placeholders with fragments.

    Unknown keys render as the empty string, so a template may reference
    optional sections the profile does not define.
    """
    return PLACEHOLDER.sub(lambda match: fragments.get(match.group(1), ""), template)
