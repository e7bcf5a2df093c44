"""Keyword interning — relation labels resolved to stable numeric ids.

Labels have low cardinality and are reused constantly, so each distinct
string is stored once and relations carry the fixed-width ``kid``.

Interning is lookup-then-insert and is not serialized: two scopes that
both see a brand-new label miss the lookup and each insert a row. Both
rows are valid; every relation keeps whichever ``kid`` its writer got.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import insert, select

from ograph.errors import NotFoundError, ValidationError
from ograph.infrastructure.database.schema import keywords
from ograph.infrastructure.repositories.records import Keyword

if TYPE_CHECKING:
    from ograph.infrastructure.database.gateway import Querier

logger = logging.getLogger(__name__)


def lookup_keyword(querier: Querier, ident: int | str) -> Keyword:
    """Fetch a keyword by ``kid`` (int) or by name (str).

    Raises:
        NotFoundError: No keyword matches.
        ValidationError: *ident* is neither an int nor a str.
    """
    stmt = select(keywords.c.kid, keywords.c.name)
    # bool is an int subclass but never a kid
    if isinstance(ident, int) and not isinstance(ident, bool):
        stmt = stmt.where(keywords.c.kid == ident)
    elif isinstance(ident, str):
        stmt = stmt.where(keywords.c.name == ident).order_by(keywords.c.kid).limit(1)
    else:
        msg = f"cannot use {ident!r} as keyword identification"
        raise ValidationError(msg)

    row = querier.query_row(stmt)
    return Keyword(name=row.name, kid=row.kid)


def intern_keyword(querier: Querier, keyword: Keyword) -> Keyword:
    """Resolve *keyword* by name, inserting it on first use.

    The resolved ``kid`` and canonical name are written back onto
    *keyword*, which is also returned.
    """
    if not keyword.name:
        raise ValidationError("cannot save an empty keyword")

    try:
        found = lookup_keyword(querier, keyword.name)
    except NotFoundError:
        row = querier.query_row(
            insert(keywords).values(name=keyword.name).returning(keywords.c.kid)
        )
        keyword.kid = row.kid
        logger.debug("Interned keyword %r as kid=%d", keyword.name, keyword.kid)
    else:
        keyword.kid = found.kid
        keyword.name = found.name
    return keyword
