"""Data models for crate entities."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any

ID = "@id"
TYPE = "@type"
VALUE = "@value"

LABEL_FIELDS = ("name", "rdfs:label")
DESCRIPTION_FIELDS = ("description", "rdfs:comment")

_WHITESPACE = re.compile(r"\s+")


def _default_properties() -> dict[str, list[Any]]:
    return {}


def is_reference(value: Any) -> bool:
    """Check whether a property value is an ``{"@id": ...}`` reference."""
    return isinstance(value, dict) and isinstance(value.get(ID), str)


def value_id(value: Any) -> str | None:
    """Get the identifier a value points at.

    References yield their ``@id``; plain strings are treated as identifiers
    too, since profiles often write ``"rangeIncludes": "Text"``.
    """
    if is_reference(value):
        return value[ID]
    if isinstance(value, str):
        return value
    return None


def scalar(value: Any) -> Any:
    """Unwrap ``{"@value": ...}`` value objects."""
    if isinstance(value, dict) and VALUE in value:
        return value[VALUE]
    return value


def clean(text: Any) -> str:
    """Normalize all whitespace runs to single spaces.

    Line breaks inside profile text would break markdown tables and headings.
    """
    if text is None:
        return ""
    return _WHITESPACE.sub(" ", str(text))


def local_name(type_id: str) -> str:
    """Get the local part of a type identifier.

    ``http://schema.org/Dataset``, ``schema:Dataset`` and ``Dataset`` all
    yield ``Dataset``.
    """
    for sep in ("#", "/", ":"):
        if sep in type_id:
            type_id = type_id.rsplit(sep, 1)[1]
    return type_id


@dataclass(frozen=True, eq=False)
class Entity:
    """A single node of a crate graph.

    All property values are stored as lists. Nested entities have been
    replaced by references at load time, so values are scalars, value
    objects or ``{"@id": ...}`` references.
    """

    id: str
    types: tuple[str, ...] = ()
    properties: dict[str, list[Any]] = field(default_factory=_default_properties)

    def get(self, name: str) -> list[Any]:
        """Get all values of a property (empty list when absent)."""
        return list(self.properties.get(name, []))

    def first(self, *names: str) -> Any | None:
        """Get the first value of the first present property among names."""
        for name in names:
            values = self.properties.get(name)
            if values:
                return scalar(values[0])
        return None

    def ref_ids(self, name: str) -> list[str]:
        """Get identifiers referenced by a property, in order."""
        ids: list[str] = []
        for value in self.properties.get(name, []):
            ref = value_id(value)
            if ref is not None:
                ids.append(ref)
        return ids

    def has_type(self, type_label: str) -> bool:
        """Check if the entity carries a type label."""
        return type_label in self.types

    @property
    def description(self) -> str:
        """Description text, falling back to rdfs:comment."""
        value = self.first(*DESCRIPTION_FIELDS)
        return "" if value is None else str(value)

    def to_jsonld(self) -> dict[str, Any]:
        """Render the entity back to a flat JSON-LD object."""
        data: dict[str, Any] = {ID: self.id}
        if self.types:
            data[TYPE] = list(self.types)
        for name, values in self.properties.items():
            data[name] = list(values)
        return data


def display_label(entity: Entity) -> str:
    """Get the label used to show, sort and anchor an entity.

    Fallback order: ``name``, then ``rdfs:label``, then the identifier.
    """
    value = entity.first(*LABEL_FIELDS)
    if value is None or str(value) == "":
        return entity.id
    return str(value)


def label_sort_key(label: str) -> tuple[str, str, str]:
    """Sort key for labels in dictionary order.

    Letters compare by base letter first, so accents and case only break ties:
    ``apple`` < ``Éclair`` < ``eclairs`` < ``zebra``.
    """
    decomposed = unicodedata.normalize("NFKD", label)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), label.casefold(), label)
