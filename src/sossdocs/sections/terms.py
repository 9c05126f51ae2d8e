"""Defined term set documentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sossdocs.anchors import anchor
from sossdocs.models import clean, display_label, label_sort_key
from sossdocs.sections.base import TERM_PREFIX, TERM_SET_PREFIX, info_link

if TYPE_CHECKING:
    from sossdocs.models import Entity
    from sossdocs.sections.base import GenerationSession

TERM_SETS_HEADER = "## Defined Term Sets\n\n"
NO_TERMS = "*No terms defined for this term set*"


def sorted_by_label(entities: list[Entity]) -> list[Entity]:
    """Sort entities ascending by display label."""
    return sorted(entities, key=lambda entity: label_sort_key(display_label(entity)))


def term_members(session: GenerationSession, term_set: Entity) -> list[Entity]:
    """Get the terms declaring membership of a set, sorted by label."""
    return sorted_by_label(session.graph.referrers(term_set.id, "inDefinedTermSet"))


def _vocabulary_link(session: GenerationSession, term: Entity) -> str:
    for base in session.config.vocabulary_bases:
        if term.id.startswith(base):
            return info_link(term.id)
    return ""


def render_term_set(session: GenerationSession, term_set: Entity) -> str:
    """Render one term set with a section per member term."""
    name = clean(TERM_SET_PREFIX + display_label(term_set))
    lines = [
        f'### <a id="{anchor(name)}"></a>{name}',
        "",
        f"ID: {clean(term_set.id)}",
        "",
        clean(term_set.description),
        "",
    ]

    members = term_members(session, term_set)
    if not members:
        lines.extend([NO_TERMS, ""])
    for term in members:
        term_name = clean(TERM_PREFIX + display_label(term))
        vocabulary = _vocabulary_link(session, term)
        lines.extend(
            [
                f'#### <a id="{anchor(term_name)}"></a>{term_name}{vocabulary}',
                "",
                f"ID: {clean(term.id)}",
                "",
                clean(term.description),
                "",
            ]
        )

    return "\n".join(lines) + "\n"


def build_term_sets(session: GenerationSession) -> None:
    """Write one fragment per term set and the ``allDefinedTermSets`` aggregate."""
    session.fragments.append("allDefinedTermSets", TERM_SETS_HEADER)
    for term_set in session.graph.by_type(session.config.term_set_type):
        summary = render_term_set(session, term_set)
        session.fragments.set(term_set.id, summary)
        session.fragments.append("allDefinedTermSets", summary)
