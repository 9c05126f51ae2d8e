"""Profile documentation generator."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from sossdocs.config import SossConfig
from sossdocs.logger import get_logger
from sossdocs.rules import ProfileValidator
from sossdocs.sections import (
    GenerationSession,
    build_classes,
    build_examples,
    build_item_lists,
    build_property_index,
    build_provenance,
    build_root_entity,
    build_term_sets,
)
from sossdocs.template import FragmentMap, render

if TYPE_CHECKING:
    from sossdocs.graph import EntityGraph
    from sossdocs.sections import ProvenanceInfo

SectionBuilder = Callable[[GenerationSession], None]

# Examples fill the examples-of-type map that classes read, so they come first
SECTION_BUILDERS: tuple[SectionBuilder, ...] = (
    build_root_entity,
    build_examples,
    build_term_sets,
    build_item_lists,
    build_classes,
    build_property_index,
    build_provenance,
)


class DocumentGenerator:
    """Generate markdown documentation for a profile crate.

    Each call to build_fragments() or generate() runs in a fresh
    GenerationSession, so repeated runs give identical output.
    """

    def __init__(
        self,
        profile: EntityGraph,
        validator: ProfileValidator | None = None,
        config: SossConfig | None = None,
        provenance: ProvenanceInfo | None = None,
    ):
        """Initialize the generator.

        Args:
            profile: Loaded profile crate
            validator: Rule engine for the profile (created and parsed if omitted)
            config: Generator settings
            provenance: Paths and branch for the provenance sentence
        """
        self.profile = profile
        self.config = config or SossConfig()
        self.validator = validator or ProfileValidator(profile, self.config)
        self.provenance = provenance

    def build_fragments(self) -> FragmentMap:
        """Run every section builder and return the fragments they wrote."""
        rules = self.validator.parse_rules()
        session = GenerationSession(
            graph=self.profile,
            rules=rules,
            config=self.config,
            provenance=self.provenance,
        )
        for builder in SECTION_BUILDERS:
            get_logger().debug(f"Running section builder {builder.__name__}")
            builder(session)
        return session.fragments

    def generate(self, template: str) -> str:
        """Render a template with freshly built fragments."""
        return render(template, self.build_fragments())
