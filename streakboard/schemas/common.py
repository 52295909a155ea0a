"""
Shared schema primitives used across the API.

JSON bodies are camelCase (what the bot front end speaks); Python attributes
stay snake_case through the alias generator.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorDetail(BaseModel):
    """A single field-level validation error."""
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned for all 4xx/5xx responses."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class AlreadyCheckedInResponse(ErrorResponse):
    success: bool = False
    reason: str = "AlreadyCheckedIn"
