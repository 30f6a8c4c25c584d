from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlalchemy import text
from contextlib import asynccontextmanager
from healthhub.core.config import settings
from healthhub.core.logger import get_logger

logger = get_logger("database")

# Pool is capped at max_connections; extra acquirers queue for pool_timeout seconds
engine = create_async_engine(
    settings.database.url,
    echo=False,
    connect_args={
        "server_settings": {
            "application_name": "healthhub_backend",
            "jit": "off",
        },
        "command_timeout": 30,
    },
    poolclass=AsyncAdaptedQueuePool,
    pool_size=settings.database.max_connections,
    max_overflow=0,
    pool_timeout=settings.database.pool_timeout_seconds,
    pool_recycle=1800,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)

async def get_db():
    """Dependency for getting a database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

@asynccontextmanager
async def async_session():
    """Context manager for a database session outside request scope."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


class DatabaseQueries:

    @staticmethod
    async def ping(db: AsyncSession) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            result = await db.execute(text("SELECT 1"))
            return result.scalar() == 1
        except Exception as e:
            logger.warning(f"Database ping failed: {repr(e)}")
            return False

db_queries = DatabaseQueries()
