"""What every ObjectGraph call returns.

Repository failures never escape the service layer: an ``OGraphError``
is turned into a :class:`ServiceError` with the same ``code``, so callers
branch on ``result.ok`` and ``result.error.code`` instead of catching.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why a call failed.

    ``detail`` carries the driver exception's type name when the failure
    came from the store (``{"cause": "IntegrityError"}``).
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one ObjectGraph call.

    Attributes:
        ok: Whether the call succeeded.
        op: ``"save_all"``, ``"node"`` or ``"walk"``.
        data: The payload on success (``count``, ``node``, ``relations``...).
        error: Set exactly when ``ok`` is False.
        meta: Bookkeeping about how the answer was produced; ``walk``
            reports the rows read and the rows its predicate dropped.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
