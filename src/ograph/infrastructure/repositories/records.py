"""Storage records exchanged with the repository.

A :class:`Relation` embeds :class:`NodeSnapshot` values for both ends.
Snapshots are copies taken when the relation was built or read; they are
never refreshed when the endpoint node changes later.
"""

from __future__ import annotations

from dataclasses import dataclass

INVALID_GID = 0
INVALID_KID = 0
EMPTY_ATTRIBUTES = "{}"


def normalize_attributes(attributes: str | None) -> str:
    """Return *attributes*, or the empty JSON object when blank."""
    return attributes or EMPTY_ATTRIBUTES


@dataclass
class Node:
    """A graph vertex. ``gid`` stays :data:`INVALID_GID` until first saved."""

    name: str
    attributes: str = EMPTY_ATTRIBUTES
    gid: int = INVALID_GID

    def snapshot(self) -> NodeSnapshot:
        return NodeSnapshot(gid=self.gid, name=self.name, attributes=self.attributes)


@dataclass
class Keyword:
    """An interned relation label."""

    name: str
    kid: int = INVALID_KID


@dataclass(frozen=True)
class NodeSnapshot:
    """Denormalized copy of a node as seen by a relation."""

    gid: int
    name: str
    attributes: str = EMPTY_ATTRIBUTES


@dataclass
class Relation:
    """A labeled edge, unique per ``(source.gid, target.gid, field)``."""

    source: NodeSnapshot
    target: NodeSnapshot
    name: str
    attributes: str = EMPTY_ATTRIBUTES
    field: int = INVALID_KID

    @classmethod
    def between(
        cls,
        source: Node,
        name: str,
        target: Node,
        *,
        attributes: str = EMPTY_ATTRIBUTES,
    ) -> Relation:
        """Build a relation from *source* to *target*, snapshotting both."""
        return cls(
            source=source.snapshot(),
            target=target.snapshot(),
            name=name,
            attributes=attributes,
        )
