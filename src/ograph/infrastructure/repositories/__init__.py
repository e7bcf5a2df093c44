"""Repository handle, transaction scope, and the mappers behind them."""

from ograph.infrastructure.repositories.graph import GraphRepository
from ograph.infrastructure.repositories.records import (
    EMPTY_ATTRIBUTES,
    INVALID_GID,
    INVALID_KID,
    Keyword,
    Node,
    NodeSnapshot,
    Relation,
)
from ograph.infrastructure.repositories.scope import ScopeState, TransactionScope

__all__ = [
    "EMPTY_ATTRIBUTES",
    "INVALID_GID",
    "INVALID_KID",
    "GraphRepository",
    "Keyword",
    "Node",
    "NodeSnapshot",
    "Relation",
    "ScopeState",
    "TransactionScope",
]
