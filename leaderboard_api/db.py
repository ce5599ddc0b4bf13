from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator
from sqlalchemy import event, pool
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from leaderboard_api.config import settings

class Base(DeclarativeBase):
    pass

# aiosqlite connections are bound to the loop that opened them
_engine_kwargs = {"poolclass": pool.NullPool} if settings.database_url.startswith("sqlite") else {}

engine = create_async_engine(settings.database_url, future=True, echo=False, **_engine_kwargs)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ships with foreign keys off; scores must always reference a participant
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session

@asynccontextmanager
async def unit_of_work(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commit everything done inside the block, or nothing."""
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise

def _register_models() -> None:
    import leaderboard_api.models.participant  # noqa: F401
    import leaderboard_api.models.score  # noqa: F401
    import leaderboard_api.models.contest_state  # noqa: F401

async def init_models() -> None:
    _register_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def drop_models() -> None:
    _register_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
