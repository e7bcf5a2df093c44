"""ograph — a directed, labeled property graph persisted in a relational store."""

from ograph.errors import (
    ConfigError,
    ConstraintError,
    NotFoundError,
    OGraphError,
    StorageError,
    ValidationError,
)
from ograph.infrastructure.repositories import (
    INVALID_GID,
    INVALID_KID,
    GraphRepository,
    Keyword,
    Node,
    NodeSnapshot,
    Relation,
    ScopeState,
    TransactionScope,
)

__version__ = "0.1.0"

__all__ = [
    "INVALID_GID",
    "INVALID_KID",
    "ConfigError",
    "ConstraintError",
    "GraphRepository",
    "Keyword",
    "Node",
    "NodeSnapshot",
    "NotFoundError",
    "OGraphError",
    "Relation",
    "ScopeState",
    "StorageError",
    "TransactionScope",
    "ValidationError",
    "__version__",
]
