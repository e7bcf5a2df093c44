"""Point lookups and label walks over the relational rows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, select

from ograph.infrastructure.database.schema import keywords, nodes, relations
from ograph.infrastructure.repositories.records import (
    INVALID_GID,
    Node,
    NodeSnapshot,
    Relation,
)

if TYPE_CHECKING:
    from sqlalchemy import Row

    from ograph.infrastructure.database.gateway import Querier

_from = nodes.alias("f")
_to = nodes.alias("t")
_kw = keywords.alias("kw")
_rel = relations.alias("r")


def fetch_node(querier: Querier, *, name: str = "", gid: int = INVALID_GID) -> Node:
    """Fetch one node; *gid* wins over *name* when both are given."""
    stmt = select(nodes.c.gid, nodes.c.name, nodes.c.attributes)
    if gid != INVALID_GID:
        stmt = stmt.where(nodes.c.gid == gid)
    else:
        stmt = stmt.where(nodes.c.name == name)
    row = querier.query_row(stmt)
    return Node(name=row.name, attributes=row.attributes, gid=row.gid)


def _relation_select() -> Select[Any]:
    return select(
        _from.c.gid.label("from_gid"),
        _from.c.name.label("from_name"),
        _from.c.attributes.label("from_attributes"),
        _to.c.gid.label("to_gid"),
        _to.c.name.label("to_name"),
        _to.c.attributes.label("to_attributes"),
        _rel.c.field,
        _kw.c.name.label("name"),
        _rel.c.attributes,
    ).select_from(
        _rel.join(_kw, _rel.c.field == _kw.c.kid)
        .join(_from, _rel.c.from_ == _from.c.gid)
        .join(_to, _rel.c.to_ == _to.c.gid)
    )


def _relation_from_row(row: Row[Any]) -> Relation:
    return Relation(
        source=NodeSnapshot(gid=row.from_gid, name=row.from_name, attributes=row.from_attributes),
        target=NodeSnapshot(gid=row.to_gid, name=row.to_name, attributes=row.to_attributes),
        name=row.name,
        attributes=row.attributes,
        field=row.field,
    )


def fetch_relation(querier: Querier, from_gid: int, to_gid: int, kid: int) -> Relation:
    """Fetch the relation identified by its natural triple."""
    stmt = _relation_select().where(
        _rel.c.from_ == from_gid,
        _rel.c.to_ == to_gid,
        _rel.c.field == kid,
    )
    return _relation_from_row(querier.query_row(stmt))


def walk(querier: Querier, from_gid: int, kid: int) -> list[Relation]:
    """Every relation leaving *from_gid* under label *kid*, in storage order."""
    stmt = _relation_select().where(_rel.c.from_ == from_gid, _rel.c.field == kid)
    return [_relation_from_row(row) for row in querier.query(stmt)]
