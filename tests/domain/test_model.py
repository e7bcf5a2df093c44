"""Tests for the graph façade value types."""

import pytest

from ograph.domain.model import (
    INVALID_NID,
    GraphNode,
    GraphRelation,
    InvalidAttributesError,
    accepts,
    check_attributes,
)


class TestGraphNode:
    def test_defaults(self) -> None:
        node = GraphNode(name="neo")
        assert node.gid == INVALID_NID
        assert node.attributes == ""

    def test_rel_builds_relation(self) -> None:
        neo, morpheus = GraphNode(name="neo"), GraphNode(name="morpheus")
        rel = neo.rel("knows", morpheus)
        assert rel.source is neo
        assert rel.target is morpheus
        assert rel.name == "knows"

    @pytest.mark.parametrize(
        ("other", "expected"),
        [
            (7, True),
            (8, False),
            (GraphNode(name="other", gid=7), True),
            (GraphNode(name="neo", gid=8), False),
            ("7", False),
            (True, False),
            (None, False),
        ],
    )
    def test_is(self, other: object, expected: bool) -> None:
        assert GraphNode(name="neo", gid=7).is_(other) is expected


class TestAttributes:
    @pytest.mark.parametrize("payload", ["", "{}", '{"a": [1, 2]}', "[]", "null"])
    def test_accepts_empty_or_json(self, payload: str) -> None:
        check_attributes(payload)

    @pytest.mark.parametrize("payload", ["{", "not json", "{'single': 1}"])
    def test_rejects_non_json(self, payload: str) -> None:
        with pytest.raises(InvalidAttributesError, match="utf-8 encoded json"):
            check_attributes(payload)


class TestPredicate:
    def test_none_accepts_everything(self) -> None:
        rel = GraphRelation(source=GraphNode(name="a"), target=GraphNode(name="b"), name="x")
        assert accepts(None, rel) is True

    def test_callable_filters(self) -> None:
        rel = GraphRelation(
            source=GraphNode(name="a"), target=GraphNode(name="b"), name="x", attributes="{}"
        )
        assert accepts(lambda r: r.target.name == "b", rel) is True
        assert accepts(lambda r: r.target.name == "c", rel) is False
