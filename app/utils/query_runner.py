"""
Store access with failure context.

Failures are logged with the logical query name and the arguments that
produced it, then re-raised as CatalogQueryError. Nothing is retried here.
"""
import logging
from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from app.core.exceptions import CatalogQueryError

logger = logging.getLogger(__name__)


async def run_query(
    db: AsyncSession,
    stmt: Executable,
    *,
    query: str,
    params: Any = None,
) -> Result:
    """
    Execute stmt on the session's pooled connection.

    Args:
        db: Database session
        stmt: Statement to execute
        query: Logical query name, used in logs and error messages
        params: Request arguments that produced the statement

    Returns:
        Buffered result
    """
    try:
        return await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.error(f"[{query}] query failed with params {params!r}: {type(e).__name__}: {e}")
        raise CatalogQueryError(query, params) from e
