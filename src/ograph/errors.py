"""Error taxonomy shared by every ograph layer.

Each error carries a machine-readable ``code`` that the service layer
copies into :class:`~ograph.services.result.ServiceError`. Driver errors
are translated at the storage gateway with the original exception kept
as ``__cause__`` so nothing about the store's own report is lost.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, ClassVar

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

if TYPE_CHECKING:
    from collections.abc import Iterator


class OGraphError(Exception):
    """Base class for all ograph failures."""

    code: ClassVar[str] = "OGRAPH_ERROR"


class ValidationError(OGraphError):
    """A value was rejected before any statement reached the store."""

    code = "VALIDATION_FAILED"


class NotFoundError(OGraphError):
    """A point lookup matched zero rows."""

    code = "NOT_FOUND"


class ConstraintError(OGraphError):
    """The store rejected a write with a uniqueness or foreign-key violation."""

    code = "CONSTRAINT_VIOLATION"


class StorageError(OGraphError):
    """Any other failure reported by the driver or the connection."""

    code = "STORAGE_ERROR"


class ConfigError(OGraphError):
    """Configuration could not be loaded."""

    code = "CONFIG_ERROR"


NO_ROWS = "no rows in result set"


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise SQLAlchemy errors as :class:`OGraphError` subclasses."""
    try:
        yield
    except NoResultFound as exc:
        raise NotFoundError(NO_ROWS) from exc
    except IntegrityError as exc:
        raise ConstraintError(_driver_message(exc)) from exc
    except SQLAlchemyError as exc:
        raise StorageError(_driver_message(exc)) from exc
