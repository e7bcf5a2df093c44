"""Entity mapper — upserts for nodes and relations.

Every function takes the querier of an already-open scope; opening one
when none is active is the repository's job, not the mapper's.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, update

from ograph.errors import ValidationError
from ograph.infrastructure.database.schema import nodes, relations
from ograph.infrastructure.repositories.keywords import intern_keyword
from ograph.infrastructure.repositories.records import (
    INVALID_GID,
    Keyword,
    Node,
    Relation,
    normalize_attributes,
)

if TYPE_CHECKING:
    from ograph.infrastructure.database.gateway import Querier


def save_node(querier: Querier, node: Node) -> Node:
    """Insert *node* when it has no gid yet, otherwise update its attributes.

    The name is fixed at creation. Updating a gid that does not exist
    touches zero rows and is not an error here.
    """
    node.attributes = normalize_attributes(node.attributes)
    if node.gid == INVALID_GID:
        row = querier.query_row(
            insert(nodes)
            .values(name=node.name, attributes=node.attributes)
            .returning(nodes.c.gid)
        )
        node.gid = row.gid
    else:
        querier.execute(
            update(nodes).where(nodes.c.gid == node.gid).values(attributes=node.attributes)
        )
    return node


def validate_relation(relation: Relation) -> None:
    """Reject a relation whose endpoints were never persisted."""
    if relation.source.gid == INVALID_GID:
        raise ValidationError("from is required")
    if relation.target.gid == INVALID_GID:
        raise ValidationError("to is required")


def save_relation(querier: Querier, relation: Relation) -> Relation:
    """Upsert *relation* by its ``(from, to, label)`` triple.

    The label is interned first and its ``kid`` and canonical name are
    written back. Then an update by triple is tried, falling back to an
    insert when it touched nothing. The two steps are not atomic: a
    concurrent insert of the same triple makes ours fail with
    :class:`~ograph.errors.ConstraintError`, which is not retried.
    """
    validate_relation(relation)
    relation.attributes = normalize_attributes(relation.attributes)

    keyword = intern_keyword(querier, Keyword(name=relation.name))
    relation.field = keyword.kid
    relation.name = keyword.name

    affected = querier.execute(
        update(relations)
        .where(
            relations.c.from_ == relation.source.gid,
            relations.c.to_ == relation.target.gid,
            relations.c.field == relation.field,
        )
        .values(attributes=relation.attributes)
    )
    if affected > 0:
        return relation

    querier.execute(
        insert(relations).values(
            from_=relation.source.gid,
            to_=relation.target.gid,
            field=relation.field,
            attributes=relation.attributes,
        )
    )
    return relation
