"""SQLAlchemy Core table definitions for the ograph store.

Three tables hold the whole graph: ``nodes``, the interned relation
labels in ``keywords``, and ``relations`` keyed by the natural triple
``(from_, to_, field)``. Attributes are opaque JSON text; the store never
looks inside them.
"""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Column,
    ForeignKey,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

# SQLite only autoincrements an INTEGER PRIMARY KEY.
_Gid = BigInteger().with_variant(Integer(), "sqlite")

nodes = Table(
    "nodes",
    metadata,
    Column("gid", _Gid, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("attributes", Text),  # JSON object
    UniqueConstraint("name", name="unq_name_cannot_repeat"),
)

# No uniqueness on name: concurrent first use of a label may intern it twice.
keywords = Table(
    "keywords",
    metadata,
    Column("kid", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
)

relations = Table(
    "relations",
    metadata,
    Column("field", Integer, ForeignKey("keywords.kid"), nullable=False),
    Column("attributes", Text),  # JSON object
    Column("from_", _Gid, ForeignKey("nodes.gid"), nullable=False),
    Column("to_", _Gid, ForeignKey("nodes.gid"), nullable=False),
    PrimaryKeyConstraint("from_", "to_", "field"),
)

# Keywords survive a bulk delete; relations go first because of the foreign keys.
DELETE_ORDER = (relations, nodes)
