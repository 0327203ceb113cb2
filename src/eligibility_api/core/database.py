"""Async database engine and session management for the zone and address store.

The API lifespan and the CLI both go through :func:`init_engine_from_settings`
so pool sizing and the schema search path come from one place.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from eligibility_api.core.config import Settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(
    database_url: str,
    *,
    schema: str | None,
    pool_size: int,
    max_overflow: int,
    echo: bool,
) -> dict[str, object]:
    options: dict[str, object] = {"echo": echo}
    backend = make_url(database_url).get_backend_name()
    if backend == "sqlite":
        return options

    options.update(pool_size=pool_size, max_overflow=max_overflow, pool_pre_ping=True)
    if schema is not None:
        # asyncpg takes session settings rather than a libpq options string
        options["connect_args"] = {"server_settings": {"search_path": f"{schema},public"}}
    return options


def init_engine(
    database_url: str,
    *,
    schema: str | None = None,
    pool_size: int = 10,
    max_overflow: int = 5,
    echo: bool = False,
) -> AsyncEngine:
    """Create and store the async engine and session factory.

    Pool options and the schema search path only apply to pooled server
    backends; SQLite engines are created with defaults.

    Args:
        database_url: Async connection string (asyncpg in production, aiosqlite in tests).
        schema: Optional PostgreSQL schema placed first on the search path.
        pool_size: Persistent connections kept in the pool.
        max_overflow: Extra connections allowed above ``pool_size``.
        echo: Log emitted SQL.

    Returns:
        The created async engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    options = _engine_options(
        database_url, schema=schema, pool_size=pool_size, max_overflow=max_overflow, echo=echo
    )
    _engine = create_async_engine(database_url, **options)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    logger.info(f"Database engine initialized ({_engine.url.get_backend_name()}, schema={schema or 'default'})")
    return _engine


def init_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the engine from application settings."""
    return init_engine(
        settings.database_url,
        schema=settings.database_schema,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )


def get_engine() -> AsyncEngine:
    """Return the current async engine.

    Raises:
        RuntimeError: If the engine has not been initialized.
    """
    if _engine is None:
        msg = "Database engine not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the current session factory.

    Raises:
        RuntimeError: If the engine has not been initialized.
    """
    if _session_factory is None:
        msg = "Session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _session_factory


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession]:
    """Open a session from the current factory, rolling back on error.

    Callers commit explicitly; anything left uncommitted is discarded on close.
    """
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def ping_database() -> bool:
    """Run ``SELECT 1`` without raising.

    Returns:
        True when the database answered.
    """
    if _engine is None:
        return False
    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Database ping failed: {e}")
        return False
    return True


async def dispose_engine() -> None:
    """Dispose of the async engine and release connections."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None
