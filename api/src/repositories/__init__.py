"""Database repositories backed by asyncpg."""
