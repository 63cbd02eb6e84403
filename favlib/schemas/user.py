"""
User Pydantic Schemas

Schemas:
- UserCreate: Signup body (username, email, password)
- UserLogin: Login body (username, password)
- UserResponse: Public user data (never exposes the password hash)
- AuthResponse: Signup/login result (user + message)
- CurrentUserResponse: fetch-user result
- MessageResponse: Plain message (logout, errors)

Request fields are optional at the schema level: a missing field is
reported by the auth service as "All fields are required." rather than
as a schema validation error.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for signup."""

    username: str | None = Field(
        default=None,
        max_length=50,
        description="Unique username",
        examples=["alice"],
    )

    email: str | None = Field(
        default=None,
        max_length=255,
        description="Unique email address",
        examples=["alice@example.com"],
    )

    password: str | None = Field(
        default=None,
        max_length=128,
        description="Plain text password, hashed before storage",
        examples=["pw123"],
    )


class UserLogin(BaseModel):
    """Schema for login."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class UserResponse(BaseModel):
    """
    Schema for user responses.

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="User's email address")
    created_at: datetime = Field(..., description="When the user registered")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "alice",
                "email": "alice@example.com",
                "created_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class AuthResponse(BaseModel):
    user: UserResponse
    message: str


class CurrentUserResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Logged out successfully."])
