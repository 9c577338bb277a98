from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from card_market.config import Settings, settings
from card_market.infrastructure.db_schema import metadata


def build_engine(config: Settings) -> AsyncEngine:
    return create_async_engine(config.DATABASE_URL, echo=config.SQL_ECHO)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False)


async def create_tables(bind: AsyncEngine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(metadata.create_all)


engine = build_engine(settings)
AsyncSessionLocal = build_session_factory(engine)
