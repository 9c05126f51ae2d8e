"""Shared state and helpers for documentation section builders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from sossdocs.anchors import anchor
from sossdocs.models import clean, display_label
from sossdocs.template import FragmentMap

if TYPE_CHECKING:
    from sossdocs.config import SossConfig
    from sossdocs.graph import EntityGraph
    from sossdocs.models import Entity
    from sossdocs.rules import RuleSet

CLASS_PREFIX = "Class: "
PROPERTY_PREFIX = "Property: "
TERM_SET_PREFIX = "Defined Term Set: "
TERM_PREFIX = "Defined Term: "
ITEM_LIST_PREFIX = "Item List: "
INFO_MARK = "ⓘ"


@dataclass
class ExampleReference:
    """Link to one example part that is an instance of a class."""

    part_id: str
    label: str
    anchor_id: str


class ExamplesOfType:
    """Cross-reference from class id to the example parts matching it.

    Filled while examples are extracted and read while classes are rendered.
    A part is listed at most once per class.
    """

    def __init__(self) -> None:
        self._by_class: dict[str, list[ExampleReference]] = {}

    def add(self, class_id: str, ref: ExampleReference) -> None:
        refs = self._by_class.setdefault(class_id, [])
        if all(existing.part_id != ref.part_id for existing in refs):
            refs.append(ref)

    def get(self, class_id: str) -> list[ExampleReference]:
        return list(self._by_class.get(class_id, []))

    def __contains__(self, class_id: object) -> bool:
        return bool(self._by_class.get(class_id))  # type: ignore[arg-type]


@dataclass
class ProvenanceInfo:
    """Inputs named in the provenance sentence."""

    template_path: Path
    profile_path: Path
    branch: str
    base_dir: Path = field(default_factory=Path.cwd)


@dataclass
class GenerationSession:
    """Everything one documentation run reads and writes.

    A new session is created per run; nothing is shared between runs.
    """

    graph: EntityGraph
    rules: RuleSet
    config: SossConfig
    provenance: ProvenanceInfo | None = None
    fragments: FragmentMap = field(default_factory=FragmentMap)
    examples_of_type: ExamplesOfType = field(default_factory=ExamplesOfType)


def json_block(entity: Entity) -> str:
    """Render an entity as a fenced JSON block."""
    return "```json\n" + json.dumps(entity.to_jsonld(), indent=2, ensure_ascii=False) + "\n```"


def info_link(url: str) -> str:
    """Outbound link affordance opening in a new tab."""
    return f' <a href="{clean(url)}" target="_blank" rel="noopener">{INFO_MARK}</a>'


def is_http(url: str | None) -> bool:
    return bool(url) and str(url).lower().startswith(("http://", "https://"))


def section_prefix(session: GenerationSession, entity: Entity) -> str:
    """Heading prefix of the section documenting a local entity."""
    if entity.has_type(session.config.term_set_type):
        return TERM_SET_PREFIX
    if entity.has_type(session.config.item_list_type):
        return ITEM_LIST_PREFIX
    return CLASS_PREFIX


def class_links(session: GenerationSession, ids: list[str], *, default: str = "") -> str:
    """Link identifiers to their documentation when they are local entities.

    Identifiers unknown to the profile render as plain text. An empty list
    renders ``default``.
    """
    if not ids:
        return default
    links: list[str] = []
    for type_id in ids:
        target = session.graph.get(type_id)
        if target is None:
            links.append(clean(type_id))
            continue
        label = clean(display_label(target))
        target_anchor = anchor(section_prefix(session, target) + label)
        links.append(f'<a href="#{target_anchor}">{label}</a>')
    return ", ".join(links)
