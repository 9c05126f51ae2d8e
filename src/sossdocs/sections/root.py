"""Root data entity requirements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sossdocs.logger import get_logger
from sossdocs.models import clean

if TYPE_CHECKING:
    from sossdocs.sections.base import GenerationSession


def build_root_entity(session: GenerationSession) -> None:
    """Write the ``rootDataEntity`` fragment.

    Lists the properties the root class rule requires. The fragment is empty
    when the profile has no root class rule or the rule requires nothing.
    """
    root_rule = session.rules.root_class_rule
    lines: list[str] = []

    if root_rule is not None:
        get_logger().progress(f"Found Root Data Entity class rule: {root_rule.id}")
        required = [prop for prop in root_rule.property_rules if prop.required]
        if required:
            lines.append("- MUST include the following properties:")
            lines.extend(f"  * {clean(prop.label)}" for prop in required)
            lines.append("")

    session.fragments.set("rootDataEntity", "\n".join(lines))
