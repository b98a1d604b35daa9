"""
Dad joke models.

Provides the persisted joke record and the response schema served by
the /dad-jokes endpoint.
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DadJoke(BaseModel):
    """
    A row of the dad_jokes table.

    ``id`` is None until the joke has been inserted; the database assigns it.
    """
    id: Optional[int] = Field(
        None,
        description="Database identifier, assigned on insert"
    )
    joke_text: str = Field(
        ...,
        min_length=1,
        description="The joke itself"
    )
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DadJoke":
        """Build a joke from an asyncpg record."""
        return cls(
            id=record["id"],
            joke_text=record["joke_text"],
            created_at=record["created_at"],
            updated_at=record["updated_at"]
        )


class DadJokeResponse(BaseModel):
    """Random dad joke response schema."""
    joke: str = Field(..., description="Joke text")

    model_config = {
        "json_schema_extra": {
            "example": {
                "joke": "What do you call fake spaghetti? An impasta."
            }
        }
    }
