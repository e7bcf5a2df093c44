"""BaseService — foundation for ograph services.

Every service works against a :class:`GraphRepository`. Services own
their transaction boundaries via ``self.repo.transaction()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ograph.errors import OGraphError, StorageError
from ograph.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from ograph.infrastructure.repositories.graph import GraphRepository

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ObjectGraph(BaseService):
            def save_all(self, *items) -> ServiceResult:
                with self.repo.transaction():
                    ...
    """

    def __init__(self, repo: GraphRepository | None = None) -> None:
        self._repo = repo

    def use(self, repo: GraphRepository) -> None:
        """Bind the service to *repo*."""
        self._repo = repo

    @property
    def repo(self) -> GraphRepository:
        """The bound repository."""
        if self._repo is None:
            raise StorageError("no repository bound; call use() first")
        return self._repo

    @staticmethod
    def _failure(op: str, exc: OGraphError) -> ServiceResult:
        """Wrap *exc* as a failed result for *op*."""
        logger.debug("%s failed: %s", op, exc)
        detail = {"cause": type(exc.__cause__).__name__} if exc.__cause__ is not None else {}
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=str(exc), detail=detail),
        )
