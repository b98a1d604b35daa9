"""
Dad joke repository for database operations.

Provides async CRUD operations for the dad_jokes table using asyncpg with
PostgreSQL. Every method runs a single statement on a pooled connection.
"""

import asyncpg
import structlog
from datetime import datetime, timezone
from typing import List, Optional

from api.src.models.joke import DadJoke

logger = structlog.get_logger(__name__)

_COLUMNS = "id, joke_text, created_at, updated_at"


class DadJokeRepository:
    """Repository for dad joke database operations."""

    def __init__(self, pool: asyncpg.Pool):
        """
        Initialize dad joke repository.

        Args:
            pool: asyncpg connection pool
        """
        self.pool = pool

    async def find_random_joke(self) -> Optional[DadJoke]:
        """
        Pick one joke uniformly at random.

        Sorting by RANDOM() scans the whole table, which is fine for the
        handful of seeded rows but will not scale to large tables.

        Returns:
            A joke, or None when the table is empty
        """
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT {_COLUMNS}
                    FROM dad_jokes
                    ORDER BY RANDOM()
                    LIMIT 1
                    """
                )

                if not row:
                    logger.debug("dad_joke_table_empty")
                    return None

                return DadJoke.from_record(row)

        except Exception as e:
            logger.error("dad_joke_find_random_failed", error=str(e))
            raise

    async def find_all(self) -> List[DadJoke]:
        """
        List every joke ordered by id.

        Returns:
            List of jokes
        """
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT {_COLUMNS}
                    FROM dad_jokes
                    ORDER BY id
                    """
                )

                return [DadJoke.from_record(row) for row in rows]

        except Exception as e:
            logger.error("dad_joke_find_all_failed", error=str(e))
            raise

    async def find_by_id(self, joke_id: int) -> Optional[DadJoke]:
        """
        Get joke by ID.

        Args:
            joke_id: Joke ID

        Returns:
            Joke or None if not found
        """
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT {_COLUMNS}
                    FROM dad_jokes
                    WHERE id = $1
                    """,
                    joke_id
                )

                if not row:
                    logger.debug("dad_joke_not_found", joke_id=joke_id)
                    return None

                return DadJoke.from_record(row)

        except Exception as e:
            logger.error("dad_joke_find_by_id_failed", error=str(e), joke_id=joke_id)
            raise

    async def save(self, joke: DadJoke) -> Optional[DadJoke]:
        """
        Insert a new joke or update the text of an existing one.

        Jokes without an id are inserted and returned with the generated id.
        Jokes with an id get their text and updated_at rewritten.

        Args:
            joke: Joke to persist

        Returns:
            The persisted joke, or None if an update targeted a missing id
        """
        if joke.id is None:
            return await self._insert(joke)
        return await self._update(joke)

    async def _insert(self, joke: DadJoke) -> DadJoke:
        try:
            async with self.pool.acquire() as conn:
                joke_id = await conn.fetchval(
                    """
                    INSERT INTO dad_jokes (joke_text, created_at, updated_at)
                    VALUES ($1, $2, $3)
                    RETURNING id
                    """,
                    joke.joke_text,
                    joke.created_at,
                    joke.updated_at
                )

                logger.info("dad_joke_created", joke_id=joke_id, length=len(joke.joke_text))

                return joke.model_copy(update={"id": joke_id})

        except Exception as e:
            logger.error("dad_joke_create_failed", error=str(e))
            raise

    async def _update(self, joke: DadJoke) -> Optional[DadJoke]:
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    UPDATE dad_jokes
                    SET joke_text = $1, updated_at = $2
                    WHERE id = $3
                    RETURNING {_COLUMNS}
                    """,
                    joke.joke_text,
                    datetime.now(timezone.utc),
                    joke.id
                )

                if not row:
                    logger.debug("dad_joke_not_found", joke_id=joke.id)
                    return None

                logger.info("dad_joke_updated", joke_id=joke.id)

                return DadJoke.from_record(row)

        except Exception as e:
            logger.error("dad_joke_update_failed", error=str(e), joke_id=joke.id)
            raise

    async def delete_by_id(self, joke_id: int) -> bool:
        """
        Delete joke.

        Args:
            joke_id: Joke ID

        Returns:
            True if deleted, False if not found
        """
        try:
            async with self.pool.acquire() as conn:
                result = await conn.execute(
                    """
                    DELETE FROM dad_jokes
                    WHERE id = $1
                    """,
                    joke_id
                )

                deleted = result.split()[-1] != "0"

                if deleted:
                    logger.info("dad_joke_deleted", joke_id=joke_id)
                else:
                    logger.debug("dad_joke_not_found", joke_id=joke_id)

                return deleted

        except Exception as e:
            logger.error("dad_joke_delete_failed", error=str(e), joke_id=joke_id)
            raise

    async def count(self) -> int:
        """
        Count stored jokes.

        Returns:
            Total joke count
        """
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchval("SELECT COUNT(*) FROM dad_jokes")

        except Exception as e:
            logger.error("dad_joke_count_failed", error=str(e))
            raise
