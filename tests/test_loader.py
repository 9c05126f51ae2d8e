"""Tests for crate loading."""

import json
from pathlib import Path

import pytest

from sossdocs.exceptions import ParseError
from sossdocs.loader import load_crate, parse_crate


class TestLoadCrate:
    """Test load_crate() and parse_crate()."""

    def test_load_example_profile(self, examples_dir: Path) -> None:
        graph = load_crate(examples_dir / "ro-crate-metadata.json")

        assert graph.get("#Book") is not None
        assert len(graph.by_type("rdfs:Class")) == 3
        assert [e.id for e in graph.by_type("DefinedTermSet")] == ["#Genres"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="File not found"):
            load_crate(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ParseError, match="Failed to parse JSON"):
            load_crate(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"@graph": [{"@id": "\xff\xfe"}]}')

        with pytest.raises(ParseError, match="Failed to decode"):
            load_crate(path)

    def test_root_must_be_object(self) -> None:
        with pytest.raises(ParseError, match="object at the root level"):
            parse_crate([1, 2, 3])

    def test_entity_without_id(self) -> None:
        with pytest.raises(ParseError, match="Invalid crate structure"):
            parse_crate({"@graph": [{"@type": "Dataset"}]})

    def test_missing_graph(self) -> None:
        with pytest.raises(ParseError, match="Invalid crate structure"):
            parse_crate({"@context": "x"})

    def test_single_entity_document(self) -> None:
        graph = parse_crate({"@id": "./", "@type": "Dataset", "name": "Solo"})

        entity = graph.get("./")
        assert entity is not None
        assert entity.types == ("Dataset",)

    def test_type_string_normalized(self, tmp_path: Path) -> None:
        path = tmp_path / "crate.json"
        path.write_text(
            json.dumps({"@graph": [{"@id": "a", "@type": "Book", "name": "A"}]}),
            encoding="utf-8",
        )

        entity = load_crate(path).get("a")
        assert entity is not None
        assert entity.types == ("Book",)
        assert entity.properties["name"] == ["A"]
