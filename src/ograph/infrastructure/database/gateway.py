"""Storage gateway — the three statement shapes the repository needs.

The same :class:`Querier` contract is served by a connection that belongs
to an open transaction and by the bare engine, so mappers and fetchers
never care which one is active. There are no retries here; driver
errors leave through :func:`~ograph.errors.translate_errors`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from ograph.errors import NO_ROWS, NotFoundError, translate_errors

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine
    from sqlalchemy.sql import Executable


class Querier(Protocol):
    """Run a statement for its row count, its single row, or all its rows."""

    def execute(self, stmt: Executable) -> int: ...

    def query_row(self, stmt: Executable) -> Row[Any]: ...

    def query(self, stmt: Executable) -> list[Row[Any]]: ...


class ConnectionGateway:
    """Querier bound to a connection, typically one inside a transaction."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def execute(self, stmt: Executable) -> int:
        with translate_errors():
            return self._conn.execute(stmt).rowcount

    def query_row(self, stmt: Executable) -> Row[Any]:
        with translate_errors():
            row = self._conn.execute(stmt).first()
        if row is None:
            raise NotFoundError(NO_ROWS)
        return row

    def query(self, stmt: Executable) -> list[Row[Any]]:
        with translate_errors():
            return list(self._conn.execute(stmt).all())


class EngineGateway:
    """Ambient querier: a pooled connection per call, committed on success."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def execute(self, stmt: Executable) -> int:
        with translate_errors(), self._engine.begin() as conn:
            return ConnectionGateway(conn).execute(stmt)

    def query_row(self, stmt: Executable) -> Row[Any]:
        with translate_errors(), self._engine.begin() as conn:
            return ConnectionGateway(conn).query_row(stmt)

    def query(self, stmt: Executable) -> list[Row[Any]]:
        with translate_errors(), self._engine.begin() as conn:
            return ConnectionGateway(conn).query(stmt)
