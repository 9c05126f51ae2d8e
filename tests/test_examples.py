"""Tests for example extraction and class cross-linking."""

from typing import Any

from sossdocs.config import EXAMPLE_ROLE
from sossdocs.sections import build_examples
from tests.conftest import class_node, make_session


def example(resource_id: str, name: str, artifacts: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "@id": resource_id,
        "@type": "ResourceDescriptor",
        "name": name,
        "hasRole": {"@id": EXAMPLE_ROLE},
        "hasArtifact": artifacts,
    }


class TestBuildExamples:
    """Test build_examples()."""

    def test_no_examples(self) -> None:
        session = make_session(class_node("#Book", "Book"))

        build_examples(session)

        assert session.fragments["examples"] == "No examples defined.\n\n"

    def test_other_roles_ignored(self) -> None:
        session = make_session(
            {
                "@id": "#schema",
                "@type": "ResourceDescriptor",
                "hasRole": {"@id": "http://www.w3.org/ns/dx/prof/role/schema"},
            }
        )

        build_examples(session)

        assert session.fragments["examples"] == "No examples defined.\n\n"

    def test_numbering_and_anchors(self) -> None:
        session = make_session(
            example("#ex1", "First", []),
            example("#ex2", "Second", []),
        )

        build_examples(session)
        text = session.fragments["examples"]

        assert '<a id="example-1-first"></a>' in text
        assert "## Example-1: First" in text
        assert "## Example-2: Second" in text
        assert text.index("Example-1") < text.index("Example-2")

    def test_artifacts_and_parts_rendered(self) -> None:
        artifact = {
            "@id": "crate.json",
            "@type": "File",
            "name": "Sample crate",
            "hasPart": [{"@id": "#book", "@type": "Book", "title": "T"}],
        }
        session = make_session(class_node("#Book", "Book"), example("#ex", "Sample", [artifact]))

        build_examples(session)
        text = session.fragments["examples"]

        assert '### <a id="artifact-sample-crate"></a> Artifact: Sample crate' in text
        assert '#### <a id="example-1-book"></a>Example-1: #book' in text
        assert '"title": [\n    "T"\n  ]' in text
        assert "```json" in text

    def test_part_matches_many_classes(self) -> None:
        artifact = {
            "@id": "crate.json",
            "hasPart": [{"@id": "#thing", "@type": ["Book", "Person"]}],
        }
        session = make_session(
            class_node("#Book", "Book"),
            class_node("#Person", "Person"),
            class_node("#Place", "Place"),
            example("#ex", "Sample", [artifact]),
        )

        build_examples(session)

        for class_id in ("#Book", "#Person"):
            refs = session.examples_of_type.get(class_id)
            assert [ref.anchor_id for ref in refs] == ["example-1-thing"]
        assert session.examples_of_type.get("#Place") == []

    def test_part_listed_once_per_class(self) -> None:
        part = {"@id": "#book", "@type": "Book"}
        session = make_session(
            class_node("#Book", "Book"),
            example(
                "#ex",
                "Sample",
                [{"@id": "a1", "hasPart": [part]}, {"@id": "a2", "hasPart": [part]}],
            ),
        )

        build_examples(session)

        assert len(session.examples_of_type.get("#Book")) == 1

    def test_parts_with_colliding_anchors_both_listed(self) -> None:
        artifact = {
            "@id": "crate.json",
            "hasPart": [
                {"@id": "#moby.dick", "@type": "Book"},
                {"@id": "#moby-dick", "@type": "Book"},
            ],
        }
        session = make_session(class_node("#Book", "Book"), example("#ex", "Sample", [artifact]))

        build_examples(session)
        refs = session.examples_of_type.get("#Book")

        assert [ref.part_id for ref in refs] == ["#moby.dick", "#moby-dick"]
        assert [ref.label for ref in refs] == ["Example-1: #moby.dick", "Example-1: #moby-dick"]
