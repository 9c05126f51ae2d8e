"""Profile rule parsing and crate validation.

A profile crate declares classes (``rdfs:Class``) and properties
(``rdf:Property``). Properties attach to classes through ``domainIncludes``;
classes carry cardinality constraints through ``sh:minCount`` and
``sh:maxCount``. There is no inheritance: a class only has the properties that
name it as their domain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, Field

from .anchors import anchor
from .config import SossConfig
from .exceptions import ProfileError, RulesNotParsedError
from .graph import EntityGraph
from .logger import get_logger
from .models import (
    DESCRIPTION_FIELDS,
    ID,
    Entity,
    display_label,
    is_reference,
    local_name,
    scalar,
)

MIN_COUNT = "sh:minCount"
MAX_COUNT = "sh:maxCount"
SPECIALIZATION_OF = "prov:specializationOf"
DOMAIN_INCLUDES = "domainIncludes"
RANGE_INCLUDES = "rangeIncludes"
VALUE_FIELDS = ("schema:value", "value")


def parse_count(entity: Entity, name: str) -> int | None:
    """Read a cardinality constraint as an int.

    Raises:
        ProfileError: If the value is present but not an integer
    """
    value = entity.first(name)
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise ProfileError(f"{entity.id}: {name} must be an integer, got {value!r}") from e


def _same_type(type_label: str, type_id: str) -> bool:
    return type_label == type_id or local_name(type_label) == local_name(type_id)


def _references_match(values: list[Any], fixed: Any) -> bool:
    """Check whether a fixed value appears among a property's values."""
    fixed_id = fixed[ID] if is_reference(fixed) else None
    for value in values:
        if fixed_id is not None:
            if is_reference(value) and value[ID] == fixed_id:
                return True
        elif str(scalar(value)) == str(scalar(fixed)):
            return True
    return False


@dataclass
class PropertyRule:
    """A profile-declared property and its constraints."""

    id: str
    label: str
    term: str
    description: str = ""
    min_count: int | None = None
    max_count: int | None = None
    ranges: list[str] = field(default_factory=list)
    domains: list[str] = field(default_factory=list)
    value: Any | None = None
    specializes: list[str] = field(default_factory=list)

    @property
    def required(self) -> bool:
        """A property is required when it declares a minimum count above zero."""
        return self.min_count is not None and self.min_count > 0

    @classmethod
    def from_entity(cls, entity: Entity) -> PropertyRule:
        """Build a rule from an ``rdf:Property`` entity."""
        label = display_label(entity)
        term = entity.first("rdfs:label", "name")
        fixed = None
        for name in VALUE_FIELDS:
            values = entity.get(name)
            if values:
                fixed = values[0]
                break
        return cls(
            id=entity.id,
            label=label,
            term=str(term) if term is not None else local_name(entity.id),
            description=str(entity.first(*DESCRIPTION_FIELDS) or ""),
            min_count=parse_count(entity, MIN_COUNT),
            max_count=parse_count(entity, MAX_COUNT),
            ranges=entity.ref_ids(RANGE_INCLUDES),
            domains=entity.ref_ids(DOMAIN_INCLUDES),
            value=fixed,
            specializes=entity.ref_ids(SPECIALIZATION_OF),
        )


@dataclass
class ClassRule:
    """A profile-declared class, its cardinality and its properties."""

    id: str
    label: str
    description: str = ""
    min_count: int | None = None
    max_count: int | None = None
    specializes: list[str] = field(default_factory=list)
    property_rules: list[PropertyRule] = field(default_factory=list)

    @classmethod
    def from_entity(cls, entity: Entity) -> ClassRule:
        """Build a rule from an ``rdfs:Class`` entity (properties attached later)."""
        return cls(
            id=entity.id,
            label=display_label(entity),
            description=str(entity.first(*DESCRIPTION_FIELDS) or ""),
            min_count=parse_count(entity, MIN_COUNT),
            max_count=parse_count(entity, MAX_COUNT),
            specializes=entity.ref_ids(SPECIALIZATION_OF),
        )

    def matches(self, entity: Entity) -> bool:
        """Check whether an entity is an instance of this class.

        An entity matches when it carries the class id or label as a type, or
        when it carries every base type the class specializes. Type ids are
        compared by local name, so ``schema:Dataset`` matches ``Dataset``.
        """
        types = entity.types
        if self.id in types or self.label in types:
            return True
        if not self.specializes:
            return False
        return all(any(_same_type(t, base) for t in types) for base in self.specializes)


@dataclass
class RuleSet:
    """All rules parsed from one profile."""

    classes: dict[str, ClassRule] = field(default_factory=dict)
    properties: dict[str, PropertyRule] = field(default_factory=dict)
    root_class_rule: ClassRule | None = None
    domain_to_properties: dict[str, list[PropertyRule]] = field(default_factory=dict)

    def properties_of(self, class_id: str) -> list[PropertyRule]:
        """Get the property rules declaring a class as their domain."""
        return list(self.domain_to_properties.get(class_id, []))


class Finding(BaseModel):
    """A single validation finding."""

    level: Literal["error", "warning"]
    message: str
    entity_id: str | None = None
    rule_id: str | None = None


class ValidationReport(BaseModel):
    """Result of validating a crate against a profile."""

    error: list[Finding] = Field(default_factory=list)
    warning: list[Finding] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True when no errors were found."""
        return not self.error

    def add_error(
        self, message: str, entity_id: str | None = None, rule_id: str | None = None
    ) -> None:
        self.error.append(
            Finding(level="error", message=message, entity_id=entity_id, rule_id=rule_id)
        )

    def add_warning(
        self, message: str, entity_id: str | None = None, rule_id: str | None = None
    ) -> None:
        self.warning.append(
            Finding(level="warning", message=message, entity_id=entity_id, rule_id=rule_id)
        )


class ProfileValidator:
    """Parse a profile crate into rules and check crates against them."""

    def __init__(self, profile: EntityGraph, config: SossConfig | None = None):
        self.profile = profile
        self.config = config or SossConfig()
        self._rules: RuleSet | None = None

    @property
    def rules(self) -> RuleSet:
        """Parsed rules.

        Raises:
            RulesNotParsedError: If parse_rules() has not been called
        """
        if self._rules is None:
            raise RulesNotParsedError("parse_rules() must be called before reading rules")
        return self._rules

    def parse_rules(self) -> RuleSet:
        """Build class and property rules from the profile."""
        logger = get_logger()
        rules = RuleSet()

        for entity in self.profile.by_type(self.config.property_type):
            rules.properties[entity.id] = PropertyRule.from_entity(entity)

        root_names = {anchor(name) for name in self.config.root_class_names}
        for entity in self.profile.by_type(self.config.class_type):
            class_rule = ClassRule.from_entity(entity)
            rules.classes[class_rule.id] = class_rule
            if rules.root_class_rule is None and (
                anchor(class_rule.id) in root_names or anchor(class_rule.label) in root_names
            ):
                rules.root_class_rule = class_rule
                logger.checks(f"Found root data entity class rule: {class_rule.id}")

        # Secondary index for the reverse domainIncludes edge
        for prop_rule in rules.properties.values():
            for domain_id in prop_rule.domains:
                rules.domain_to_properties.setdefault(domain_id, []).append(prop_rule)

        for class_rule in rules.classes.values():
            class_rule.property_rules = rules.properties_of(class_rule.id)
            logger.checks(
                f"Class rule {class_rule.id}: {len(class_rule.property_rules)} properties"
            )

        self._rules = rules
        return rules

    def validate_crate(self, target: EntityGraph) -> ValidationReport:
        """Check a target crate against the profile rules.

        Findings are collected into the report rather than raised.
        """
        if self._rules is None:
            self.parse_rules()
        rules = self.rules
        report = ValidationReport()

        for class_rule in rules.classes.values():
            if class_rule is rules.root_class_rule:
                continue
            instances = [entity for entity in target if class_rule.matches(entity)]
            self._check_cardinality(class_rule, len(instances), report)
            for instance in instances:
                self._check_entity(instance, class_rule, target, report)

        if rules.root_class_rule is not None:
            root = target.root_entity()
            if root is None:
                report.add_error(
                    "Crate has no root data entity (no ro-crate-metadata.json descriptor "
                    "with an 'about' reference)",
                    rule_id=rules.root_class_rule.id,
                )
            else:
                self._check_entity(root, rules.root_class_rule, target, report)

        return report

    def _check_cardinality(
        self, class_rule: ClassRule, count: int, report: ValidationReport
    ) -> None:
        min_count = class_rule.min_count or 0
        max_count = class_rule.max_count or 0
        if min_count > 0 and count < min_count:
            report.add_error(
                f"Expected at least {class_rule.min_count} instances of {class_rule.label} "
                f"but found {count}",
                rule_id=class_rule.id,
            )
        if max_count > 0 and count > max_count:
            report.add_error(
                f"Expected at most {class_rule.max_count} instances of {class_rule.label} "
                f"but found {count}",
                rule_id=class_rule.id,
            )

    def _check_entity(
        self,
        entity: Entity,
        class_rule: ClassRule,
        target: EntityGraph,
        report: ValidationReport,
    ) -> None:
        for prop_rule in class_rule.property_rules:
            values = entity.get(prop_rule.term)
            if prop_rule.required and not values:
                report.add_error(
                    f"{entity.id} ({class_rule.label}) is missing required property "
                    f"'{prop_rule.term}'",
                    entity_id=entity.id,
                    rule_id=prop_rule.id,
                )
                continue
            if (
                prop_rule.max_count is not None
                and prop_rule.max_count > 0
                and len(values) > prop_rule.max_count
            ):
                report.add_error(
                    f"{entity.id} ({class_rule.label}) has {len(values)} values for "
                    f"'{prop_rule.term}' but at most {prop_rule.max_count} are allowed",
                    entity_id=entity.id,
                    rule_id=prop_rule.id,
                )
            fixed = prop_rule.value
            if values and fixed is not None and not _references_match(values, fixed):
                report.add_warning(
                    f"{entity.id} ({class_rule.label}) property '{prop_rule.term}' "
                    f"should have the value {scalar(prop_rule.value)!r}",
                    entity_id=entity.id,
                    rule_id=prop_rule.id,
                )
            self._check_ranges(entity, class_rule, prop_rule, values, target, report)

    def _check_ranges(  # noqa: PLR0913
        self,
        entity: Entity,
        class_rule: ClassRule,
        prop_rule: PropertyRule,
        values: list[Any],
        target: EntityGraph,
        report: ValidationReport,
    ) -> None:
        range_rules = [self.rules.classes[r] for r in prop_rule.ranges if r in self.rules.classes]
        if not range_rules:
            return
        for value in values:
            if not is_reference(value):
                continue
            referenced = target.get(value[ID])
            if referenced is None:
                continue
            if not any(rule.matches(referenced) for rule in range_rules):
                expected = ", ".join(rule.label for rule in range_rules)
                report.add_warning(
                    f"{entity.id} ({class_rule.label}) property '{prop_rule.term}' references "
                    f"{referenced.id}, which is not one of: {expected}",
                    entity_id=entity.id,
                    rule_id=prop_rule.id,
                )
