from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

# SQLAlchemy declarative base for models
Base = declarative_base()


def _is_in_memory_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite") and (
        database_url.endswith("://") or ":memory:" in database_url
    )


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the history store."""
    if _is_in_memory_sqlite(database_url):
        # One shared connection, otherwise every checkout sees an empty database.
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url, echo=echo, connect_args={"check_same_thread": False}
        )
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create the collection tables if they do not exist yet."""
    from translateme.models import translation  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

