"""Pydantic schemas for authentication endpoints."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    """Request model for user signup."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")


class LoginRequest(BaseModel):
    """Request model for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class UserResponse(BaseModel):
    """Public user profile (no credential fields)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str


class AuthResponse(BaseModel):
    """Response for signup and login."""

    message: str
    token: str = Field(..., description="JWT bearer token")
    user: UserResponse
