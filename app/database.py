from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from app.config import get_settings

settings = get_settings()


def _engine_options() -> dict:
    """Pool options for the configured backend."""
    if settings.is_sqlite:
        # SQLite picks its own pool class; sizing arguments are rejected
        return {"echo": settings.debug}

    return {
        "echo": settings.debug,            # Log SQL queries in debug mode
        "pool_pre_ping": True,             # Check connection health before using
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "connect_args": {
            "statement_cache_size": 0,     # Required behind pgbouncer
            "command_timeout": settings.db_command_timeout,
        },
    }


# Bounded pool shared process-wide; each query borrows one connection
engine = create_async_engine(settings.database_url, **_engine_options())

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


async def get_db():
    """
    Dependency that provides a read-only database session.

    The catalog is never written from this service, so nothing is
    committed; closing the session returns its connection to the pool.

    Usage in FastAPI:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency returning the session factory for fan-out queries."""
    return AsyncSessionLocal
