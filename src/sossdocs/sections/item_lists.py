"""Item list documentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sossdocs.anchors import anchor
from sossdocs.models import clean, display_label
from sossdocs.sections.base import ITEM_LIST_PREFIX, json_block
from sossdocs.sections.terms import sorted_by_label

if TYPE_CHECKING:
    from sossdocs.models import Entity
    from sossdocs.sections.base import GenerationSession

ITEM_LISTS_HEADER = "## Item Lists\n\n"
NO_ITEMS = "*No terms defined for this item list*"


def render_item_list(session: GenerationSession, item_list: Entity) -> str:
    """Render an item list: a linked contents pass, then one record per element."""
    name = clean(ITEM_LIST_PREFIX + display_label(item_list))
    lines = [f'### <a id="{anchor(name)}"></a>{name}', "", clean(item_list.description), ""]

    items = sorted_by_label(session.graph.linked(item_list, "itemListElement"))
    if not items:
        lines.extend([NO_ITEMS, ""])
        return "\n".join(lines) + "\n"

    for item in items:
        lines.append(f"-  [{clean(display_label(item))}](#{anchor(item.id)})")
    lines.extend(["", "<hr/>", ""])

    for item in items:
        lines.extend(
            [
                f'### <a id="{clean(item.id)}"></a><a id="{anchor(item.id)}"></a>'
                f"{clean(display_label(item))}",
                "",
                json_block(item),
                "",
                f"ID: {clean(item.id)}",
                "",
            ]
        )

    return "\n".join(lines) + "\n"


def build_item_lists(session: GenerationSession) -> None:
    """Write one fragment per item list and the ``allItemLists`` aggregate."""
    session.fragments.append("allItemLists", ITEM_LISTS_HEADER)
    for item_list in session.graph.by_type(session.config.item_list_type):
        summary = render_item_list(session, item_list)
        session.fragments.set(item_list.id, summary)
        session.fragments.append("allItemLists", summary)
