"""
FastAPI dependency injection for database access and services.

Provides injectable dependencies for:
- Database connections (asyncpg pool)
- Repository instances
- Service instances

All dependencies use FastAPI's dependency injection system so tests can
swap them through ``app.dependency_overrides``.
"""

import asyncpg
import structlog
from typing import Optional
from functools import lru_cache
from fastapi import Depends

from api.src.config import get_settings
from api.src.repositories.joke_repo import DadJokeRepository
from api.src.services.name_service import NameService
from api.src.services.weather_mood_service import WeatherMoodService

logger = structlog.get_logger(__name__)


# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================

_pool: Optional[asyncpg.Pool] = None


async def init_db_pool() -> asyncpg.Pool:
    """
    Initialize database connection pool.

    Should be called during application startup.

    Returns:
        asyncpg connection pool
    """
    global _pool

    if _pool is not None:
        return _pool

    settings = get_settings()

    try:
        _pool = await asyncpg.create_pool(
            settings.database_dsn,
            min_size=settings.database_pool_min_size,
            max_size=settings.database_pool_max_size,
            command_timeout=settings.database_command_timeout
        )

        logger.info(
            "database_pool_initialized",
            min_size=settings.database_pool_min_size,
            max_size=settings.database_pool_max_size,
            database=settings.database_dsn.split("@")[-1]
        )

        return _pool

    except Exception as e:
        logger.error("database_pool_init_failed", error=str(e))
        raise


async def close_db_pool():
    """
    Close database connection pool.

    Should be called during application shutdown.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        logger.info("database_pool_closed")
        _pool = None


def get_db_pool() -> asyncpg.Pool:
    """
    Get database connection pool.

    Returns:
        asyncpg connection pool

    Raises:
        RuntimeError: If pool is not initialized
    """
    if _pool is None:
        logger.error("database_pool_not_initialized")
        raise RuntimeError(
            "Database pool not initialized. Call init_db_pool() during startup."
        )
    return _pool


# ============================================================================
# REPOSITORY DEPENDENCIES
# ============================================================================


def get_joke_repository(
    pool: asyncpg.Pool = Depends(get_db_pool)
) -> DadJokeRepository:
    """
    Get dad joke repository bound to the shared pool.

    Example:
        @app.get("/dad-jokes")
        async def random_joke(repo: DadJokeRepository = Depends(get_joke_repository)):
            return await repo.find_random_joke()
    """
    return DadJokeRepository(pool)


# ============================================================================
# SERVICE DEPENDENCIES
# ============================================================================


@lru_cache()
def get_name_service() -> NameService:
    """
    Get the process-wide name registry.

    Cached so every request sees the same set of registered names.
    """
    return NameService()


@lru_cache()
def get_weather_mood_service() -> WeatherMoodService:
    """Get weather mood service instance (cached, stateless)."""
    return WeatherMoodService()
