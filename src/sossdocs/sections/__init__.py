"""Documentation section builders."""

from sossdocs.sections.base import (
    ExampleReference,
    ExamplesOfType,
    GenerationSession,
    ProvenanceInfo,
)
from sossdocs.sections.classes import build_classes
from sossdocs.sections.examples import build_examples
from sossdocs.sections.item_lists import build_item_lists
from sossdocs.sections.properties import build_property_index
from sossdocs.sections.provenance import build_provenance, detect_git_branch
from sossdocs.sections.root import build_root_entity
from sossdocs.sections.terms import build_term_sets

__all__ = [
    "ExampleReference",
    "ExamplesOfType",
    "GenerationSession",
    "ProvenanceInfo",
    "build_classes",
    "build_examples",
    "build_item_lists",
    "build_property_index",
    "build_provenance",
    "build_root_entity",
    "build_term_sets",
    "detect_git_branch",
]
