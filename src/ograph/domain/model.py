"""Graph façade values: nodes, relations, and relation predicates.

These are what applications hold. The service layer converts them to
storage records and writes the assigned ids back, so a ``GraphNode`` is
usable as a relation endpoint as soon as ``save_all`` returns.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass

INVALID_NID = 0

INVALID_ENCODING = "attributes must be a utf-8 encoded json"


class InvalidAttributesError(ValueError):
    """Attributes are neither empty nor a JSON document."""


def check_attributes(attributes: str) -> None:
    """Accept empty text or any JSON document; reject everything else."""
    if not attributes:
        return
    try:
        json.loads(attributes)
    except ValueError as exc:
        raise InvalidAttributesError(INVALID_ENCODING) from exc


@dataclass
class GraphNode:
    """A node in the object graph."""

    name: str
    attributes: str = ""
    gid: int = INVALID_NID

    def rel(self, label: str, other: GraphNode, attributes: str = "") -> GraphRelation:
        """Relation from this node to *other* labeled *label*."""
        return GraphRelation(source=self, target=other, name=label, attributes=attributes)

    def is_(self, other: object) -> bool:
        """True when *other* (a gid or a node) has this node's gid."""
        if isinstance(other, bool):
            return False
        if isinstance(other, int):
            return self.gid == other
        if isinstance(other, GraphNode):
            return self.gid == other.gid
        return False


@dataclass
class GraphRelation:
    """A connection between two nodes."""

    source: GraphNode
    target: GraphNode
    name: str
    attributes: str = ""


type Predicate = Callable[[GraphRelation], bool] | None


def accepts(predicate: Predicate, relation: GraphRelation) -> bool:
    """Apply *predicate*; a missing predicate accepts everything."""
    if predicate is None:
        return True
    return predicate(relation)


type Saveable = GraphNode | GraphRelation
