"""structlog configuration for ograph.

Library modules log through stdlib ``logging.getLogger(__name__)``; this
module routes those records, and SQLAlchemy's statement log when asked,
through one structlog formatter on stderr. Two output modes:
- Human (default): colored console output
- JSON (log_json=True): one JSON object per line
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from ograph.config.settings import OGraphSettings

# SQLAlchemy logs each statement at INFO on this logger.
SQL_LOGGER = "sqlalchemy.engine"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    sql: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: ``ograph`` loggers emit DEBUG. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        sql: Emit every SQL statement SQLAlchemy executes (INFO).
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("ograph").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger(SQL_LOGGER).setLevel(logging.INFO if sql else logging.WARNING)


def configure_from_settings(settings: OGraphSettings) -> None:
    """Apply the ``[logging]`` section; ``[database] echo`` turns on SQL logging."""
    configure_logging(
        verbose=settings.logging.verbose,
        log_json=settings.logging.json_lines,
        sql=settings.database.echo,
    )
