"""TransactionScope — one unit of work and the first failure inside it."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from ograph.errors import translate_errors
from ograph.infrastructure.database.gateway import ConnectionGateway

if TYPE_CHECKING:
    from sqlalchemy import Connection, RootTransaction
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class ScopeState(StrEnum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class TransactionScope:
    """An open transaction plus the first error recorded while it ran.

    ``finish()`` commits a clean scope and rolls back a failed one. Either
    way the connection goes back to the pool and the scope is spent.
    """

    def __init__(self, engine: Engine) -> None:
        with translate_errors():
            self._conn: Connection = engine.connect()
            try:
                self._transaction: RootTransaction = self._conn.begin()
            except BaseException:
                self._conn.close()
                raise
        self.gateway = ConnectionGateway(self._conn)
        self.state = ScopeState.ACTIVE
        self.error: Exception | None = None
        logger.debug("Scope opened")

    @property
    def failed(self) -> bool:
        return self.error is not None

    def record(self, exc: Exception) -> None:
        """Remember *exc* unless an earlier failure is already recorded."""
        if self.error is None:
            self.error = exc

    def finish(self) -> ScopeState:
        """Commit when clean, roll back otherwise."""
        try:
            if self.error is None:
                try:
                    with translate_errors():
                        self._transaction.commit()
                except Exception as exc:
                    self.record(exc)
                    self.state = ScopeState.ROLLED_BACK
                    raise
                self.state = ScopeState.COMMITTED
            else:
                with translate_errors():
                    self._transaction.rollback()
                self.state = ScopeState.ROLLED_BACK
        finally:
            self._conn.close()
        logger.debug("Scope %s", self.state)
        return self.state

    def abort(self) -> Exception | None:
        """Roll back unconditionally, returning the rollback error if any."""
        rollback_error: Exception | None = None
        try:
            with translate_errors():
                self._transaction.rollback()
        except Exception as exc:
            rollback_error = exc
            logger.warning("Rollback of pending scope failed: %s", exc)
        finally:
            self._conn.close()
        self.state = ScopeState.ROLLED_BACK
        logger.debug("Scope aborted")
        return rollback_error
