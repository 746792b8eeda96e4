"""Schemas shared by every router."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case in Python, camelCase on the wire."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class MessageResponse(CamelModel):
    message: str


class ErrorResponse(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"status": 404, "error": "BookNotFound", "message": "Book not found"}]
        }
    }

    status: int
    error: str
    message: str
    details: dict | list | None = Field(None)
