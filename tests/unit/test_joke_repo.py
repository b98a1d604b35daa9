"""
Unit tests for the dad joke repository with a mocked asyncpg pool.

Tests cover:
- Row to model mapping
- Random selection query shape
- Insert versus update in save()
- Delete result parsing
- Errors propagating to the caller
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from api.src.models.joke import DadJoke
from api.src.repositories.joke_repo import DadJokeRepository


NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def row(joke_id: int, text: str) -> dict:
    return {"id": joke_id, "joke_text": text, "created_at": NOW, "updated_at": NOW}


@pytest.fixture
def conn():
    return AsyncMock()


@pytest.fixture
def repo(conn):
    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    return DadJokeRepository(pool)


class TestFindRandomJoke:
    @pytest.mark.asyncio
    async def test_maps_row(self, repo, conn):
        conn.fetchrow.return_value = row(4, "What do you call fake spaghetti? An impasta.")

        joke = await repo.find_random_joke()

        assert joke == DadJoke(
            id=4,
            joke_text="What do you call fake spaghetti? An impasta.",
            created_at=NOW,
            updated_at=NOW
        )
        query = conn.fetchrow.call_args.args[0]
        assert "ORDER BY RANDOM()" in query
        assert "LIMIT 1" in query

    @pytest.mark.asyncio
    async def test_empty_table_returns_none(self, repo, conn):
        conn.fetchrow.return_value = None

        assert await repo.find_random_joke() is None

    @pytest.mark.asyncio
    async def test_database_error_propagates(self, repo, conn):
        conn.fetchrow.side_effect = OSError("connection reset")

        with pytest.raises(OSError, match="connection reset"):
            await repo.find_random_joke()


class TestFind:
    @pytest.mark.asyncio
    async def test_find_all(self, repo, conn):
        conn.fetch.return_value = [row(1, "a"), row(2, "b")]

        jokes = await repo.find_all()

        assert [j.id for j in jokes] == [1, 2]

    @pytest.mark.asyncio
    async def test_find_by_id_passes_parameter(self, repo, conn):
        conn.fetchrow.return_value = row(7, "seven")

        joke = await repo.find_by_id(7)

        assert joke.joke_text == "seven"
        assert conn.fetchrow.call_args.args[1] == 7

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, repo, conn):
        conn.fetchrow.return_value = None

        assert await repo.find_by_id(99) is None


class TestSave:
    @pytest.mark.asyncio
    async def test_new_joke_is_inserted(self, repo, conn):
        conn.fetchval.return_value = 11
        joke = DadJoke(joke_text="I'm on a seafood diet.")

        saved = await repo.save(joke)

        assert saved.id == 11
        assert saved.joke_text == joke.joke_text
        assert joke.id is None
        assert "INSERT INTO dad_jokes" in conn.fetchval.call_args.args[0]

    @pytest.mark.asyncio
    async def test_existing_joke_is_updated(self, repo, conn):
        conn.fetchrow.return_value = row(5, "new text")

        saved = await repo.save(DadJoke(id=5, joke_text="new text"))

        assert saved.id == 5
        args = conn.fetchrow.call_args.args
        assert "UPDATE dad_jokes" in args[0]
        assert args[1] == "new text"
        assert args[3] == 5
        conn.fetchval.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_of_missing_joke_returns_none(self, repo, conn):
        conn.fetchrow.return_value = None

        assert await repo.save(DadJoke(id=404, joke_text="ghost")) is None


class TestDeleteAndCount:
    @pytest.mark.asyncio
    async def test_delete_existing(self, repo, conn):
        conn.execute.return_value = "DELETE 1"

        assert await repo.delete_by_id(1) is True

    @pytest.mark.asyncio
    async def test_delete_missing(self, repo, conn):
        conn.execute.return_value = "DELETE 0"

        assert await repo.delete_by_id(1) is False

    @pytest.mark.asyncio
    async def test_count(self, repo, conn):
        conn.fetchval.return_value = 10

        assert await repo.count() == 10


class TestDadJokeModel:
    def test_blank_text_rejected(self):
        with pytest.raises(ValueError):
            DadJoke(joke_text="")

    def test_new_joke_has_no_id_and_utc_timestamps(self):
        joke = DadJoke(joke_text="Nacho cheese.")

        assert joke.id is None
        assert joke.created_at.tzinfo is not None
