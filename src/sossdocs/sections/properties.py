"""Property index documentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sossdocs.anchors import anchor
from sossdocs.models import clean, label_sort_key
from sossdocs.sections.base import PROPERTY_PREFIX, class_links, info_link, is_http

if TYPE_CHECKING:
    from sossdocs.rules import PropertyRule
    from sossdocs.sections.base import GenerationSession

PROPERTIES_HEADER = "## All Properties\n\n"


def render_property(session: GenerationSession, prop: PropertyRule) -> str:
    """Render one property: description, ranges and the classes using it."""
    name = clean(PROPERTY_PREFIX + prop.label)
    base = next((s for s in prop.specializes if is_http(s)), None)
    link = info_link(base) if base else ""
    ranges = class_links(session, prop.ranges, default="Text")
    domains = class_links(session, prop.domains)
    lines = [
        f'### <a id="{anchor(name)}"></a> {name}{link}',
        "",
        f"ID: {clean(prop.id)}",
        "",
        "| Description | Range | Occurs in Domain(s) |",
        "| ----------- | ----------- | ----------- |",
        f"| {clean(prop.description)} | {ranges} | {domains} |",
        "",
    ]
    return "\n".join(lines) + "\n"


def build_property_index(session: GenerationSession) -> None:
    """Append the alphabetical property index to the ``all`` aggregate."""
    props = sorted(session.rules.properties.values(), key=lambda p: label_sort_key(p.label))
    session.fragments.append("all", PROPERTIES_HEADER)
    for prop in props:
        session.fragments.append("all", render_property(session, prop))
