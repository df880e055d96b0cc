"""
Pytest fixtures and configuration for the test suite.

Service tests run against a real SQLite database (one file per test) so the
composed SQL is actually executed. API tests drive the ASGI app in-process
with the session dependencies pointed at the same database.

Seeded catalog (energy, valence, danceability, acousticness, tempo):

    t1 Morning  al1  [a1]          0.90 0.10 0.50 0.20 120  Frantic
    t2 Noon     al1  [a1, a2]      0.50 0.50 0.60 0.30 100  Calm
    t3 Night    al2  [a1, a3]      0.10 0.90 0.40 0.80  80  Serene
    t4 Dusk     al2  [a1, a3, a2]  0.50 0.80 0.70 0.10 110  Cheerful
    t5 Dawn     al3  [a2]          0.80 0.80 0.90 0.05 128  Euphotic
    t6 Static   al3  [a2, a1]      None 0.40 0.50 0.50  90  Other
    t7 Lonely   --   [a4]          0.20 0.20 0.30 0.90  70  Bleak
    t8 Pulse    al4  [a5]          0.85 0.50 0.80 0.10 140  Tense

Lyrics: t1 "Rise and shine", t3 "Love in the night, love in the dark",
t4 "Sunset love, golden light", t5 "Morning light on the city",
t8 "Lovely pulse of the city night"; the rest have none.

Albums by release: al3 2019 (60) [a2], al1 2020 (70) [a1],
al2 2021 (50) [a1, a3], al4 2022 (30) [a5].
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base, get_db, get_session_factory
from app.main import app
from tests.factories import ALBUM_CREDITS, TRACK_CREDITS, catalog_rows, make_artist, seed


# === DATABASE FIXTURES ===

@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def broken_db(tmp_path):
    """Session on a database without any tables: every query fails."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    async with async_sessionmaker(bind=engine, class_=AsyncSession)() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def catalog(session_factory):
    """Seed the standard catalog described in the module docstring."""
    artists, albums, tracks = catalog_rows()
    async with session_factory() as session:
        await seed(session, artists, albums, tracks, ALBUM_CREDITS, TRACK_CREDITS)


@pytest.fixture
async def bulk_artists(session_factory):
    """25 artists named Bulk 01 .. Bulk 25."""
    artists = [make_artist(f"b{i:02d}", f"Bulk {i:02d}", popularity=i) for i in range(1, 26)]
    async with session_factory() as session:
        await seed(session, artists)


# === API FIXTURES ===

@pytest.fixture
async def client(session_factory, catalog):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
