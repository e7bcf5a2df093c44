"""Engine setup and administrative schema maintenance.

SQLAlchemy Core (not ORM) is used because the store is addressed through
a handful of fixed statements; there is nothing for an identity map to do.
SQLite gets foreign keys switched on for every connection and WAL mode for
file databases, so ambient reads keep working while a scope holds the
write lock.

The admin helpers are best-effort: each statement runs in its own
transaction, failures are logged and skipped, and only the first one is
raised once every statement has been tried. They exist for test fixtures
and resets, not for the transactional data path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, delete, event
from sqlalchemy.engine import Engine, make_url

from ograph.errors import OGraphError, translate_errors
from ograph.infrastructure.database.schema import DELETE_ORDER, metadata

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from sqlalchemy import Connection

logger = logging.getLogger(__name__)


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *url*; SQLite gets foreign keys and WAL."""
    engine = create_engine(url, echo=echo)

    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        use_wal = parsed.database not in (None, "", ":memory:")

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            if use_wal:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def _run_each(
    engine: Engine,
    steps: Iterable[tuple[str, Callable[[Connection], object]]],
) -> OGraphError | None:
    """Run every step in its own transaction, returning the first failure."""
    first_error: OGraphError | None = None
    for label, step in steps:
        try:
            with translate_errors(), engine.begin() as conn:
                step(conn)
        except OGraphError as exc:
            logger.warning("Admin statement failed (%s): %s", label, exc)
            if first_error is None:
                first_error = exc
    return first_error


def create_schema(engine: Engine) -> None:
    """Create every table that does not exist yet. Idempotent."""
    error = _run_each(
        engine,
        (
            (f"create {table.name}", lambda conn, t=table: t.create(conn, checkfirst=True))
            for table in metadata.sorted_tables
        ),
    )
    if error is not None:
        raise error
    logger.debug("Schema ready on %s", engine.url.render_as_string(hide_password=True))


def drop_schema(engine: Engine) -> None:
    """Drop all tables, then recreate them empty."""
    error = _run_each(
        engine,
        (
            (f"drop {table.name}", lambda conn, t=table: t.drop(conn, checkfirst=True))
            for table in reversed(metadata.sorted_tables)
        ),
    )
    if error is not None:
        raise error
    create_schema(engine)


def delete_all(engine: Engine) -> None:
    """Remove all nodes and relations but keep the keyword vocabulary."""
    error = _run_each(
        engine,
        (
            (f"delete {table.name}", lambda conn, t=table: conn.execute(delete(t)))
            for table in DELETE_ORDER
        ),
    )
    if error is not None:
        raise error
    create_schema(engine)
