from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from .config import settings


def _engine_options(database_url: str) -> dict:
    """Параметры пула: у SQLite нет пула соединений, как у серверных БД"""
    if database_url.startswith("sqlite"):
        return {"echo": settings.database_echo}
    return {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": 10,
        "max_overflow": 20,
    }


# Создание асинхронного движка базы данных
engine = create_async_engine(
    settings.database_url,
    **_engine_options(settings.database_url)
)

# Создание фабрики асинхронных сессий
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)

# Базовый класс для моделей
Base = declarative_base()


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """Dependency для получения асинхронной сессии базы данных"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
