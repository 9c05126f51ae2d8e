"""Crate loading from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError
from .graph import EntityGraph
from .logger import get_logger
from .models import ID, TYPE
from .schemas import CrateSchema

GRAPH = "@graph"


def parse_crate(data: Any) -> EntityGraph:
    """Build an EntityGraph from decoded crate JSON.

    Accepts a document with an ``@graph`` list, or a single entity object
    (wrapped into a one-element graph).

    Raises:
        ParseError: If the document does not have the shape of a crate
    """
    if not isinstance(data, dict):
        raise ParseError("Crate JSON must contain an object at the root level")

    if GRAPH not in data and ID in data:
        data = {GRAPH: [data]}

    try:
        schema = CrateSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ParseError(f"Invalid crate structure: {e}") from e

    nodes: list[dict[str, Any]] = []
    for raw, node in zip(data[GRAPH], schema.graph, strict=True):
        normalized = dict(raw)
        normalized[ID] = node.id
        normalized[TYPE] = node.type
        nodes.append(normalized)
    return EntityGraph(nodes)


def load_crate(path: Path | str) -> EntityGraph:
    """Read a crate metadata file into an EntityGraph.

    Raises:
        ParseError: If the file is missing, is not UTF-8 JSON, or is not a crate
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = json.load(f)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Failed to decode {path} as UTF-8: {e}") from e
    except OSError as e:
        raise ParseError(f"Failed to read {path}: {e}") from e

    graph = parse_crate(data)
    get_logger().checks(f"Loaded {len(graph)} entities from {path}")
    return graph
