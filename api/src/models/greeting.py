"""Greeting response schema."""

from pydantic import BaseModel


class GreetingResponse(BaseModel):
    """Random greeting."""
    message: str
