"""Concurrent query fan-out."""

import asyncio

import pytest

from app.core.exceptions import CatalogQueryError
from app.schemas.criteria import FilterCriteria
from app.services.artist_service import ArtistService
from app.services.track_service import TrackService
from app.utils.batch_queries import gather_queries


async def test_results_in_argument_order(session_factory):
    async def slow(session):
        await asyncio.sleep(0.05)
        return "slow"

    async def fast(session):
        return "fast"

    assert await gather_queries(session_factory, slow, fast) == ["slow", "fast"]


async def test_real_queries_run_in_separate_sessions(session_factory, catalog):
    artists, tracks = await gather_queries(
        session_factory,
        lambda db: ArtistService.count(db, FilterCriteria()),
        lambda db: TrackService.count(db, FilterCriteria()),
    )
    assert (artists, tracks) == (5, 8)


async def test_failure_cancels_pending_queries(session_factory):
    cancelled = asyncio.Event()

    async def stalled(session):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    async def failing(session):
        raise CatalogQueryError("artists")

    with pytest.raises(CatalogQueryError, match="Error fetching artists"):
        await gather_queries(session_factory, stalled, failing)
    assert cancelled.is_set()


async def test_no_queries(session_factory):
    assert await gather_queries(session_factory) == []
