"""Pydantic request/response schemas for authentication and user administration."""

from __future__ import annotations

from pydantic import Field

from bookstore.api.schemas import CamelModel

# --- Request Schemas ---


class RegisterRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"username": "jane", "email": "jane.doe@example.com", "password": "s3cret-pass"}]
        }
    }

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "s3cret-pass"}]}}

    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class CreateUserRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"username": "clerk", "email": "clerk@example.com", "password": "s3cret-pass", "role": "ADMIN"}
            ]
        }
    }

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)
    role: str = Field("USER", max_length=10)


class UpdateUserRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"username": "jane", "role": "ADMIN"}]}}

    username: str | None = Field(None, min_length=1, max_length=50)
    email: str | None = Field(None, min_length=3, max_length=254)
    role: str | None = Field(None, max_length=10)


# --- Response Schemas ---


class UserRecord(CamelModel):
    id: str
    username: str
    email: str
    role: str


class AuthResponse(CamelModel):
    token: str
    user: UserRecord


# --- Mappers ---


def user_record(user) -> UserRecord:
    return UserRecord(id=str(user.id), username=user.username, email=user.email, role=user.role)
