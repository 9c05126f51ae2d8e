"""Pytest configuration and fixtures for sossdocs tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from sossdocs import context
from sossdocs.config import SossConfig
from sossdocs.graph import EntityGraph
from sossdocs.logger import reset_logger
from sossdocs.rules import ProfileValidator
from sossdocs.sections import GenerationSession

EXAMPLES_DIR = Path(__file__).parent.parent / "examples" / "book-profile"


@pytest.fixture(autouse=True)
def clean_global_state() -> Iterator[None]:
    """Reset logger and CLI context between tests."""
    reset_logger()
    context.reset()
    yield
    reset_logger()
    context.reset()


@pytest.fixture
def examples_dir() -> Path:
    """Directory holding the example book profile, template and crates."""
    return EXAMPLES_DIR


def class_node(class_id: str, label: str, **extra: Any) -> dict[str, Any]:
    """Build an rdfs:Class node."""
    return {"@id": class_id, "@type": "rdfs:Class", "rdfs:label": label, **extra}


def property_node(
    prop_id: str, label: str, domain: str | list[str], **extra: Any
) -> dict[str, Any]:
    """Build an rdf:Property node declaring one or more domains."""
    domains = [domain] if isinstance(domain, str) else domain
    return {
        "@id": prop_id,
        "@type": "rdf:Property",
        "rdfs:label": label,
        "domainIncludes": [{"@id": d} for d in domains],
        **extra,
    }


def make_session(*nodes: dict[str, Any], config: SossConfig | None = None) -> GenerationSession:
    """Build a generation session from raw profile nodes."""
    graph = EntityGraph(nodes)
    effective_config = config or SossConfig()
    rules = ProfileValidator(graph, effective_config).parse_rules()
    return GenerationSession(graph=graph, rules=rules, config=effective_config)


def book_profile_nodes() -> list[dict[str, Any]]:
    """A one-class profile: Book with a required title."""
    return [
        class_node("#Book", "Book", **{"sh:minCount": 1}),
        property_node("#title", "title", "#Book", **{"sh:minCount": 1}),
    ]
