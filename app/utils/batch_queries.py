"""
Concurrent fan-out of independent read queries.

An AsyncSession runs one statement at a time, so sub-queries that should
overlap each get their own short-lived session (and pooled connection).
"""
import asyncio
from typing import Any, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

SessionQuery = Callable[[AsyncSession], Awaitable[Any]]


async def run_in_session(
    session_factory: async_sessionmaker[AsyncSession],
    query: SessionQuery,
) -> Any:
    """Run one query in a fresh session; the connection is released on exit."""
    async with session_factory() as session:
        return await query(session)


async def gather_queries(
    session_factory: async_sessionmaker[AsyncSession],
    *queries: SessionQuery,
) -> list[Any]:
    """
    Run read-only queries concurrently and wait for all of them.

    Results come back in argument order. The first failure cancels the
    queries still running and is re-raised as is, so callers see the
    original exception rather than an ExceptionGroup.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(run_in_session(session_factory, query))
                for query in queries
            ]
    except ExceptionGroup as errors:
        raise errors.exceptions[0]
    return [task.result() for task in tasks]
