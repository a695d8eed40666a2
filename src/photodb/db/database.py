import logging
from typing import AsyncIterator, Optional

from sqlalchemy import inspect
from sqlalchemy.dialects import registry
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.schema import CreateTable

from core.config import configs
from photodb.exceptions import DatabaseError

logger = logging.getLogger(__name__)

PHOTO_TABLE = "photo"


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given database URL."""
    return create_async_engine(url, echo=echo, future=True)


def build_sessionmaker(db_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Create async engine
engine = build_engine(configs.DATABASE_URL, echo=configs.DATABASE_ECHO)

# Create async session factory
AsyncSessionLocal = build_sessionmaker(engine)

# Create base class for models
Base = declarative_base()


def _register_models() -> None:
    # Importing the model module attaches the photo table to Base.metadata
    import photodb.models.photo  # noqa: F401


async def init_db(db_engine: Optional[AsyncEngine] = None) -> bool:
    """
    Open the database and create the photo schema if the table is missing.

    Returns True when the schema was created, False when it already existed.
    """
    db_engine = db_engine or engine
    _register_models()

    try:
        async with db_engine.begin() as conn:
            exists = await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(PHOTO_TABLE))
            if exists:
                logger.debug(f"Table '{PHOTO_TABLE}' found, schema left untouched.")
                return False

            logger.info("Database is empty, creating schema...")
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        logger.error(f"Unable to open the database {db_engine.url!r}: {e}")
        raise DatabaseError(f"Unable to open the database: {e}") from e

    logger.info(f"Schema created for table '{PHOTO_TABLE}'.")
    return True


def dump_schema(dialect_name: str = "sqlite") -> str:
    """Return the CREATE TABLE statement of the photo table for a SQL dialect."""
    _register_models()
    dialect = registry.load(dialect_name)()
    table = Base.metadata.tables[PHOTO_TABLE]
    return str(CreateTable(table).compile(dialect=dialect)).strip()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield an async database session and close it afterwards."""
    logger.debug("Creating new database session.")
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            logger.debug("Closing database session.")
            await session.close()
