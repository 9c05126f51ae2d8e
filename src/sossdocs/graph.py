"""In-memory entity graph for a loaded crate."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from .logger import get_logger
from .models import ID, TYPE, Entity, is_reference

METADATA_DESCRIPTOR_ID = "ro-crate-metadata.json"


def index_by_type(entities: Iterable[Entity]) -> dict[str, list[Entity]]:
    """Group entities by each of their type labels.

    An entity with several types lands in several buckets; an entity with no
    types lands in none. Order within a bucket follows the input order.
    """
    buckets: dict[str, list[Entity]] = {}
    for entity in entities:
        for type_label in entity.types:
            buckets.setdefault(type_label, []).append(entity)
    return buckets


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)  # type: ignore[arg-type]
    return [value]


class EntityGraph:
    """All entities of one crate, with type, identifier and reverse-edge lookups.

    Inline nested entities (objects carrying ``@id`` and other keys) are lifted
    into the graph and replaced by references, so every entity is reachable by
    identifier. Later duplicates of an identifier merge their values into the
    first occurrence.
    """

    def __init__(self, nodes: Iterable[dict[str, Any]]):
        self._raw: dict[str, dict[str, list[Any]]] = {}
        self._raw_types: dict[str, list[str]] = {}
        for node in nodes:
            self._add_node(node)

        self._entities: dict[str, Entity] = {
            entity_id: Entity(
                id=entity_id,
                types=tuple(self._raw_types[entity_id]),
                properties=props,
            )
            for entity_id, props in self._raw.items()
        }
        self._by_type = index_by_type(self._entities.values())
        self._reverse = self._build_reverse_index()

    def _add_node(self, node: dict[str, Any]) -> str:
        entity_id = str(node[ID])
        props = self._raw.setdefault(entity_id, {})
        types = self._raw_types.setdefault(entity_id, [])
        for type_label in _as_list(node.get(TYPE)):
            if type_label not in types:
                types.append(str(type_label))

        for name, value in node.items():
            if name in (ID, TYPE):
                continue
            values = props.setdefault(name, [])
            for item in _as_list(value):
                values.append(self._flatten(item))
        return entity_id

    def _flatten(self, value: Any) -> Any:
        """Lift an inline entity into the graph and return a reference to it."""
        if is_reference(value) and len(value) > 1:
            nested_id = self._add_node(value)
            return {ID: nested_id}
        return value

    def _build_reverse_index(self) -> dict[tuple[str, str], list[Entity]]:
        reverse: dict[tuple[str, str], list[Entity]] = {}
        for entity in self._entities.values():
            for name, values in entity.properties.items():
                for value in values:
                    if is_reference(value):
                        reverse.setdefault((value[ID], name), []).append(entity)
        return reverse

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def get(self, entity_id: str) -> Entity | None:
        """Get an entity by its identifier."""
        return self._entities.get(entity_id)

    def by_type(self, type_label: str) -> list[Entity]:
        """Get all entities carrying a type label, in load order."""
        return list(self._by_type.get(type_label, []))

    @property
    def type_index(self) -> dict[str, list[Entity]]:
        """Copy of the full type index."""
        return {label: list(bucket) for label, bucket in self._by_type.items()}

    def linked(self, entity: Entity, name: str) -> list[Entity]:
        """Resolve the references held by a property to entities.

        A reference to an identifier not present in the graph resolves to a
        bare entity carrying only that identifier. Literal values are skipped.
        """
        resolved: list[Entity] = []
        for value in entity.properties.get(name, []):
            if not is_reference(value):
                continue
            target = self._entities.get(value[ID])
            if target is None:
                get_logger().debug(f"Unresolved reference {value[ID]} from {entity.id}.{name}")
                target = Entity(id=value[ID])
            resolved.append(target)
        return resolved

    def referrers(self, entity_id: str, name: str) -> list[Entity]:
        """Get entities whose property ``name`` references ``entity_id``."""
        return list(self._reverse.get((entity_id, name), []))

    def root_entity(self) -> Entity | None:
        """Get the root data entity, as named by the metadata descriptor's ``about``."""
        descriptor = self._entities.get(METADATA_DESCRIPTOR_ID)
        if descriptor is None:
            return None
        about = descriptor.ref_ids("about")
        if not about:
            return None
        return self._entities.get(about[0])
