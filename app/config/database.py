from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy import text
import asyncio
import logging
from .settings import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    """Opciones del pool; SQLite (pruebas) no acepta las de un servidor"""
    if database_url.startswith("sqlite"):
        return {"echo": settings.debug}
    return {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_recycle": 1200,
        "pool_size": 20,
        "max_overflow": 40,
        "pool_timeout": 10,
        "connect_args": {
            "server_settings": {
                "application_name": "via_alta",
            },
            "command_timeout": 60,
        },
    }


# Create async engine with better connection handling
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# Create session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=True,
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """Get database session with proper error handling"""
    session = None
    try:
        session = async_session_factory()
        yield session
    except Exception as e:
        if session:
            await session.rollback()
        raise e
    finally:
        if session:
            await session.close()


async def test_connection(max_retries: int = 5, delay: float = 2.0) -> bool:
    """Test database connection with retries"""
    for attempt in range(max_retries):
        try:
            async with async_session_factory() as session:
                await session.execute(text("SELECT 1"))
                await session.commit()
                logger.info(f"Database connection successful on attempt {attempt + 1}")
                return True
        except Exception as e:
            logger.warning(f"Database connection attempt {attempt + 1} failed: {e}")
            if attempt < max_retries - 1:
                logger.info(f"Retrying in {delay} seconds...")
                await asyncio.sleep(delay)
            else:
                logger.error("All database connection attempts failed")
                return False
    return False


async def wait_for_db(max_wait: int = 60) -> bool:
    """Wait for database to be ready"""
    logger.info("Waiting for database to be ready...")
    start_time = asyncio.get_running_loop().time()

    while True:
        if await test_connection(max_retries=1):
            return True

        elapsed = asyncio.get_running_loop().time() - start_time
        if elapsed > max_wait:
            logger.error(f"Timeout waiting for database after {max_wait} seconds")
            return False

        await asyncio.sleep(2)


async def init_db():
    """Initialize database tables with connection verification"""
    # Registrar todos los modelos en Base.metadata
    import app.models  # noqa: F401

    if not await wait_for_db():
        raise RuntimeError("Database is not ready")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized successfully")
    return True


async def close_db():
    """Close database connections"""
    try:
        await engine.dispose()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")
