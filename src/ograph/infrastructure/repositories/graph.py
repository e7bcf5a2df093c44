"""GraphRepository — the handle through which the graph is persisted.

The handle owns the engine and at most one :class:`TransactionScope`.
Calls are not reentrant; share a handle across threads only behind a lock.

Failure gating:

- Every failure except :class:`~ograph.errors.NotFoundError` is recorded
  on the handle (``error``) and on the active scope. ``NotFoundError`` is
  an expected answer to a lookup and never poisons anything.
- Once an error is recorded, ``begin`` and therefore every save, plus
  ``keyword``, ``fetch_relation`` and ``walk``, raise that same error
  without touching the store. ``fetch_node`` stays a plain lookup.
- ``end`` rolls back a scope that recorded an error. The handle keeps
  its error until ``reset`` is called.

Usage::

    repo = GraphRepository.from_settings(settings)
    with repo.transaction():
        neo = repo.save_node(Node(name="neo"))
        morpheus = repo.save_node(Node(name="morpheus"))
        repo.save_relation(Relation.between(neo, "knows", morpheus))
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from ograph.errors import NotFoundError, OGraphError, translate_errors
from ograph.infrastructure.database import engine as db
from ograph.infrastructure.database.gateway import EngineGateway
from ograph.infrastructure.repositories import keywords as interner
from ograph.infrastructure.repositories import mapper
from ograph.infrastructure.repositories import walk as fetcher
from ograph.infrastructure.repositories.records import INVALID_GID, Keyword, Node, Relation
from ograph.infrastructure.repositories.scope import ScopeState, TransactionScope

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

    from ograph.config.settings import OGraphSettings
    from ograph.infrastructure.database.gateway import Querier

logger = logging.getLogger(__name__)


class GraphRepository:
    """Transactional access to nodes, keywords, and relations."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._scope: TransactionScope | None = None
        self._error: Exception | None = None

    @classmethod
    def from_settings(cls, settings: OGraphSettings) -> GraphRepository:
        """Build a repository on the engine described by *settings*.

        ``database.echo`` is honored by :func:`configure_from_settings`,
        which routes the statement log through structlog.
        """
        return cls(db.create_db_engine(settings.database.url))

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine."""
        return self._engine

    @property
    def error(self) -> Exception | None:
        """The first failure recorded since the last :meth:`reset`."""
        return self._error

    @property
    def scope(self) -> TransactionScope | None:
        """The active scope, if any."""
        return self._scope

    def reset(self) -> None:
        """Forget the recorded error so new work can start."""
        self._error = None

    # ------------------------------------------------------------------
    # Failure bookkeeping
    # ------------------------------------------------------------------

    def _check(self) -> None:
        if self._error is not None:
            raise self._error

    def _record(self, exc: Exception) -> None:
        if self._error is None:
            self._error = exc
        if self._scope is not None:
            self._scope.record(exc)

    @contextmanager
    def _recording(self) -> Iterator[None]:
        try:
            yield
        except NotFoundError:
            raise
        except Exception as exc:
            self._record(exc)
            raise

    def _querier(self) -> Querier:
        if self._scope is not None:
            return self._scope.gateway
        return EngineGateway(self._engine)

    # ------------------------------------------------------------------
    # Transaction coordination
    # ------------------------------------------------------------------

    def begin(self) -> TransactionScope:
        """Open a scope, or return the one already active."""
        if self._scope is not None:
            return self._scope
        self._check()
        with self._recording():
            self._scope = TransactionScope(self._engine)
        return self._scope

    def end(self) -> ScopeState | None:
        """Commit or roll back the active scope and clear it."""
        scope = self._scope
        if scope is None:
            return None
        self._scope = None
        try:
            return scope.finish()
        except Exception as exc:
            if self._error is None:
                self._error = exc
            raise

    @contextmanager
    def transaction(self) -> Iterator[TransactionScope]:
        """Run a block inside a scope.

        Only a scope opened here is finished here. An exception from the
        block is recorded and re-raised after rollback; an error recorded
        during the block and swallowed by it is raised after rollback.
        """
        owned = self._scope is None
        scope = self.begin()
        try:
            yield scope
        except Exception as exc:
            self._record(exc)
            if owned:
                self.end()
            raise
        if owned and self.end() is ScopeState.ROLLED_BACK and scope.error is not None:
            raise scope.error

    def abort_pending(self) -> Exception | None:
        """Roll back an open scope; the rollback error is recorded only on a clean handle."""
        scope = self._scope
        if scope is None:
            return None
        self._scope = None
        rollback_error = scope.abort()
        if rollback_error is not None and self._error is None:
            self._error = rollback_error
        return rollback_error

    def close(self) -> Exception | None:
        """Abort any pending scope and release the engine's connections.

        Returns the teardown error: the one from releasing connections if
        that failed, else the rollback error. Either is recorded only on
        a clean handle.
        """
        rollback_error = self.abort_pending()
        try:
            with translate_errors():
                self._engine.dispose()
        except OGraphError as exc:
            logger.warning("Releasing connections failed: %s", exc)
            if self._error is None:
                self._error = exc
            return exc
        return rollback_error

    # ------------------------------------------------------------------
    # Schema administration (best-effort)
    # ------------------------------------------------------------------

    def create(self) -> None:
        """Create the schema if absent."""
        with self._recording():
            db.create_schema(self._engine)

    def drop(self) -> None:
        """Drop every table and recreate the schema empty."""
        with self._recording():
            db.drop_schema(self._engine)

    def delete_all(self) -> None:
        """Delete all nodes and relations; keywords are kept."""
        with self._recording():
            db.delete_all(self._engine)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_node(self, node: Node) -> Node:
        """Insert or update *node*, writing the assigned gid back."""
        self._check()
        scope = self.begin()
        with self._recording():
            return mapper.save_node(scope.gateway, node)

    def save_keyword(self, keyword: Keyword) -> Keyword:
        """Intern *keyword* by name, writing the kid back."""
        self._check()
        scope = self.begin()
        with self._recording():
            return interner.intern_keyword(scope.gateway, keyword)

    def save_relation(self, relation: Relation) -> Relation:
        """Upsert *relation* by its natural triple."""
        self._check()
        with self._recording():
            mapper.validate_relation(relation)
        scope = self.begin()
        with self._recording():
            return mapper.save_relation(scope.gateway, relation)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def keyword(self, ident: int | str) -> Keyword:
        """Look up a keyword by kid or by name."""
        self._check()
        with self._recording():
            return interner.lookup_keyword(self._querier(), ident)

    def fetch_node(self, name: str = "", gid: int = INVALID_GID) -> Node:
        """Fetch a node by gid, or by name when no gid is given."""
        with self._recording():
            return fetcher.fetch_node(self._querier(), name=name, gid=gid)

    def fetch_relation(self, from_gid: int, to_gid: int, name: str) -> Relation:
        """Fetch the relation ``from_gid -[name]-> to_gid``.

        An unknown label raises ``NotFoundError`` before the relation query runs.
        """
        label = self.keyword(name)
        with self._recording():
            return fetcher.fetch_relation(self._querier(), from_gid, to_gid, label.kid)

    def walk(self, from_gid: int, name: str) -> list[Relation]:
        """All relations leaving *from_gid* labeled *name*.

        Row order is whatever the store yields. An unknown label raises
        ``NotFoundError`` rather than returning an empty list.
        """
        label = self.keyword(name)
        with self._recording():
            return fetcher.walk(self._querier(), from_gid, label.kid)
