"""Authentication-related request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Payload for operator registration."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    full_name: str | None = None
    role: str = "CASHIER"


class LoginRequest(BaseModel):
    """Payload for operator login."""

    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"


class AuthUserResponse(BaseModel):
    """User response for auth endpoints."""

    id: int
    username: str
    full_name: str | None = None
    role: str

    model_config = ConfigDict(from_attributes=True)
