"""ObjectGraph — the application-facing graph over a GraphRepository.

Translates :mod:`ograph.domain.model` values to storage records and back.
``save_all`` batches every value into one scope, so a single failure
rolls the whole batch back, and the values written back to the caller's
objects are undone with it. Each top-level call starts from a clean
handle: an error left over from an earlier call does not block it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ograph.domain.model import (
    GraphNode,
    GraphRelation,
    InvalidAttributesError,
    Predicate,
    Saveable,
    accepts,
    check_attributes,
)
from ograph.errors import OGraphError, ValidationError
from ograph.infrastructure.repositories.records import Node, NodeSnapshot, Relation
from ograph.services.base import BaseService
from ograph.services.result import ServiceResult

if TYPE_CHECKING:
    from ograph.infrastructure.repositories.graph import GraphRepository


class UnsupportedValueError(ValidationError):
    """``save_all`` got something that is neither a node nor a relation."""

    code = "INVALID_TYPE"


def _snapshot(node: GraphNode) -> NodeSnapshot:
    return NodeSnapshot(gid=node.gid, name=node.name, attributes=node.attributes)


def _checked(attributes: str) -> str:
    try:
        check_attributes(attributes)
    except InvalidAttributesError as exc:
        raise ValidationError(str(exc)) from exc
    return attributes


type _Undo = list[tuple[Saveable, dict[str, Any]]]


def _restore(undo: _Undo) -> None:
    """Put back the fields a rolled-back batch wrote onto its values."""
    for item, fields in reversed(undo):
        for name, value in fields.items():
            setattr(item, name, value)


class ObjectGraph(BaseService):
    """Save and walk an object graph."""

    def _fresh(self) -> GraphRepository:
        repo = self.repo
        if repo.scope is None:
            repo.reset()
        return repo

    # ------------------------------------------------------------------
    # save_all
    # ------------------------------------------------------------------

    def save_all(self, *items: Saveable) -> ServiceResult:
        """Persist *items* in order inside one scope.

        Nodes get their gid and normalized attributes written back;
        relations get their normalized attributes and canonical label.
        Relations must come after the nodes they connect. When the batch
        rolls back every value is left as it was passed in, so a node
        never keeps a gid whose row was never committed.
        """
        undo: _Undo = []
        try:
            repo = self._fresh()
            with repo.transaction():
                for item in items:
                    self._save(repo, item, undo)
        except OGraphError as exc:
            _restore(undo)
            return self._failure("save_all", exc)
        except Exception:
            _restore(undo)
            raise

        return ServiceResult(ok=True, op="save_all", data={"count": len(items)})

    def _save(self, repo: GraphRepository, item: object, undo: _Undo) -> None:
        match item:
            case GraphNode():
                self._save_node(repo, item, undo)
            case GraphRelation():
                self._save_relation(repo, item, undo)
            case _:
                msg = f"cannot save {item!r}"
                raise UnsupportedValueError(msg)

    @staticmethod
    def _save_node(repo: GraphRepository, node: GraphNode, undo: _Undo) -> None:
        record = Node(name=node.name, attributes=_checked(node.attributes), gid=node.gid)
        repo.save_node(record)
        undo.append((node, {"gid": node.gid, "attributes": node.attributes}))
        node.gid = record.gid
        node.attributes = record.attributes

    @staticmethod
    def _save_relation(repo: GraphRepository, relation: GraphRelation, undo: _Undo) -> None:
        record = Relation(
            source=_snapshot(relation.source),
            target=_snapshot(relation.target),
            name=relation.name,
            attributes=_checked(relation.attributes),
        )
        repo.save_relation(record)
        undo.append((relation, {"name": relation.name, "attributes": relation.attributes}))
        relation.name = record.name
        relation.attributes = record.attributes

    # ------------------------------------------------------------------
    # node / walk
    # ------------------------------------------------------------------

    def node(self, gid: int = 0, name: str = "") -> ServiceResult:
        """Fetch one node by gid, or by name when *gid* is unset."""
        try:
            record = self._fresh().fetch_node(name=name, gid=gid)
        except OGraphError as exc:
            return self._failure("node", exc)

        found = GraphNode(name=record.name, attributes=record.attributes, gid=record.gid)
        return ServiceResult(ok=True, op="node", data={"node": found})

    def walk(
        self,
        source: GraphNode,
        using: str,
        *,
        predicate: Predicate = None,
    ) -> ServiceResult:
        """Relations leaving *source* labeled *using*.

        Endpoints with the same gid are the same ``GraphNode`` object
        within one result. *predicate* filters the relations returned;
        ``meta`` says how many rows the walk read and how many it dropped.
        """
        try:
            raw = self._fresh().walk(source.gid, using)
        except OGraphError as exc:
            return self._failure("walk", exc)

        seen: dict[int, GraphNode] = {}

        def endpoint(snapshot: NodeSnapshot) -> GraphNode:
            node = seen.get(snapshot.gid)
            if node is None:
                node = GraphNode(
                    name=snapshot.name, attributes=snapshot.attributes, gid=snapshot.gid
                )
                seen[snapshot.gid] = node
            return node

        found: list[GraphRelation] = []
        for record in raw:
            relation = GraphRelation(
                source=endpoint(record.source),
                target=endpoint(record.target),
                name=record.name,
                attributes=record.attributes,
            )
            if accepts(predicate, relation):
                found.append(relation)

        return ServiceResult(
            ok=True,
            op="walk",
            data={
                "source_id": source.gid,
                "label": using,
                "count": len(found),
                "relations": found,
            },
            meta={"walked": len(raw), "filtered": len(raw) - len(found)},
        )

    def close(self) -> Exception | None:
        """Close the bound repository, returning its teardown error if any."""
        return self.repo.close()
