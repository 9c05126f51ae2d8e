"""Class documentation with cardinality and property tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sossdocs.anchors import anchor
from sossdocs.models import ID, clean, is_reference, label_sort_key, scalar
from sossdocs.sections.base import (
    CLASS_PREFIX,
    PROPERTY_PREFIX,
    class_links,
    info_link,
    is_http,
)

if TYPE_CHECKING:
    from sossdocs.rules import ClassRule, PropertyRule
    from sossdocs.sections.base import GenerationSession

CLASSES_HEADER = "## Types of entities (specializations of Classes) and expected Properties\n\n"
NO_PROPERTIES = "*No properties defined for this class*"


def cardinality_text(min_count: int | None, max_count: int | None) -> list[str]:
    """Describe how many instances of a class a crate should contain."""
    lines: list[str] = []
    if min_count is None:
        lines.append("Instances of this type MAY be present in the crate.")
    elif min_count <= 0:
        lines.append("Instances of this type SHOULD be present in the crate.")
    else:
        lines.append(f"At least {min_count} instances of this type MUST be present in the crate.")
    if max_count is not None and max_count > 0:
        lines.append(
            f"A maximum of {max_count} instances of this type MAY be present in the crate."
        )
    return lines


def order_properties(props: list[PropertyRule]) -> list[PropertyRule]:
    """Order property rows: required first, then alphabetical by label."""
    return sorted(props, key=lambda prop: (not prop.required, label_sort_key(prop.label)))


def _property_row(session: GenerationSession, prop: PropertyRule) -> str:
    label = clean(prop.label)
    link = f'<a href="#{anchor(PROPERTY_PREFIX + label)}">{label}</a>'
    base = next((s for s in prop.specializes if is_http(s)), None)
    if base:
        link += info_link(base)
    required = "Yes" if prop.required else "No"
    ranges = class_links(session, prop.ranges, default="Text")
    fixed = "" if prop.value is None else clean(_value_text(prop.value))
    return f"| {link} | {required} | {clean(prop.description)} | {ranges} | {fixed} |"


def _value_text(value: object) -> str:
    if is_reference(value):
        return value[ID]  # type: ignore[index]
    return str(scalar(value))


def render_class(session: GenerationSession, class_rule: ClassRule) -> str:
    """Render one class section."""
    name = clean(CLASS_PREFIX + class_rule.label)
    lines = [
        "",
        f'### <a id="{anchor(name)}"></a> {name}',
        "",
        clean(class_rule.description),
        "",
    ]
    for sentence in cardinality_text(class_rule.min_count, class_rule.max_count):
        lines.extend([sentence, ""])

    min_text = "N/A" if class_rule.min_count is None else str(class_rule.min_count)
    max_text = "N/A" if class_rule.max_count is None else str(class_rule.max_count)
    lines.extend(
        [
            "| Min Count | Max Count |",
            "| --------- | --------- |",
            f"| {min_text} | {max_text} |",
            "",
            "| Property | Required | Description | Range | Value |",
            "| -------- | -------- | ----------- | ----- | ----- |",
        ]
    )

    if class_rule.specializes:
        lines.append(f"| @type | Yes |  |  | {clean(', '.join(class_rule.specializes))} |")

    props = order_properties(session.rules.properties_of(class_rule.id))
    if props:
        lines.extend(_property_row(session, prop) for prop in props)
    else:
        lines.extend(["", NO_PROPERTIES])
    lines.append("")

    examples = session.examples_of_type.get(class_rule.id)
    if examples:
        lines.extend(["### Examples of Type", "#### Examples"])
        for ref in examples:
            lines.extend([f"-  [{ref.label}](#{ref.anchor_id})", ""])

    return "\n".join(lines) + "\n"


def build_classes(session: GenerationSession) -> None:
    """Write one fragment per class and start the ``all`` aggregate.

    Reads the examples-of-type map, so examples must be built first.
    """
    session.fragments.append("all", CLASSES_HEADER)
    for entity in session.graph.by_type(session.config.class_type):
        class_rule = session.rules.classes.get(entity.id)
        if class_rule is None:
            continue
        summary = render_class(session, class_rule)
        session.fragments.set(class_rule.id, summary)
        session.fragments.append("all", summary)
