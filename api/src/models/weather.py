"""Weather mood request/response schemas."""

from pydantic import BaseModel, Field, field_validator


class WeatherRequest(BaseModel):
    """
    Weather data provided by the client.

    Attributes:
        temperature: Current temperature in Celsius
        condition: Current weather condition (e.g. sunny, rainy)
    """
    temperature: int = Field(..., description="Temperature in Celsius")
    condition: str = Field(..., description="Weather condition, e.g. sunny or rainy")

    @field_validator("temperature", mode="before")
    @classmethod
    def validate_not_boolean(cls, v):
        # bool is an int subclass and would pass lax int coercion
        if isinstance(v, bool):
            raise ValueError("Temperature must be an integer, not a boolean")
        return v

    @field_validator("condition")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Condition cannot be empty")
        return v

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {"temperature": 15, "condition": "sunny"}
        }
    }


class WeatherMoodResponse(BaseModel):
    """Suggested outfit mood for the given weather."""
    mood: str
