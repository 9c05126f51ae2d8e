"""Example extraction and class cross-linking."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sossdocs.anchors import anchor
from sossdocs.logger import get_logger
from sossdocs.models import clean, display_label
from sossdocs.sections.base import ExampleReference, json_block

if TYPE_CHECKING:
    from sossdocs.models import Entity
    from sossdocs.sections.base import GenerationSession

NO_EXAMPLES = "No examples defined.\n\n"


def example_resources(session: GenerationSession) -> list[Entity]:
    """Get resource descriptors whose role is the example role, in load order."""
    role = session.config.example_role
    return [
        resource
        for resource in session.graph.by_type(session.config.resource_descriptor_type)
        if role in resource.ref_ids("hasRole")
    ]


def build_examples(session: GenerationSession) -> None:
    """Write the ``examples`` fragment and fill the examples-of-type map.

    Every part of every example artifact is classified against all class
    rules; each matching class gets a link to the part. This must run before
    classes are rendered.
    """
    logger = get_logger()
    lines: list[str] = []

    for number, resource in enumerate(example_resources(session), start=1):
        logger.progress(f"Processing example resource: {resource.id}")
        example_name = clean(f"Example-{number}: {display_label(resource)}")
        lines.extend([f'<a id="{anchor(example_name)}"></a>', "", f"## {example_name}", ""])

        for artifact in session.graph.linked(resource, "hasArtifact"):
            logger.checks(f"Processing example artifact: {artifact.id}")
            artifact_name = clean(f"Artifact: {display_label(artifact)}")
            lines.extend(
                [
                    f'### <a id="{anchor(artifact_name)}"></a> {artifact_name}',
                    "",
                    json_block(artifact),
                    "",
                ]
            )
            for part in session.graph.linked(artifact, "hasPart"):
                _add_part(session, lines, number, part)

    session.fragments.set("examples", "\n".join(lines) + "\n" if lines else NO_EXAMPLES)


def _add_part(session: GenerationSession, lines: list[str], number: int, part: Entity) -> None:
    part_name = clean(f"Example-{number}: {part.id}")
    part_anchor = anchor(part_name)
    lines.extend([f'#### <a id="{part_anchor}"></a>{part_name}', "", json_block(part), ""])

    ref = ExampleReference(part_id=part.id, label=part_name, anchor_id=part_anchor)
    for class_rule in session.rules.classes.values():
        if class_rule.matches(part):
            get_logger().checks(f"Found matching class for part {part_name}: {class_rule.id}")
            session.examples_of_type.add(class_rule.id, ref)
