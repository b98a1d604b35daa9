"""Name registration request/response schemas."""

from pydantic import BaseModel, Field, field_validator


class NameRequest(BaseModel):
    """Name registration request schema."""
    name: str = Field(..., description="Name to register")

    @field_validator("name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {"name": "John"}
        }
    }


class NameResponse(BaseModel):
    """Name registration outcome."""
    name: str
    message: str
