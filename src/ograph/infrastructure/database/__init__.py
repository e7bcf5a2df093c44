"""Relational storage: engine, schema, and the statement gateway via SQLAlchemy Core."""

from ograph.infrastructure.database.engine import (
    create_db_engine,
    create_schema,
    delete_all,
    drop_schema,
)
from ograph.infrastructure.database.gateway import ConnectionGateway, EngineGateway, Querier
from ograph.infrastructure.database.schema import keywords, metadata, nodes, relations

__all__ = [
    "ConnectionGateway",
    "EngineGateway",
    "Querier",
    "create_db_engine",
    "create_schema",
    "delete_all",
    "drop_schema",
    "keywords",
    "metadata",
    "nodes",
    "relations",
]
