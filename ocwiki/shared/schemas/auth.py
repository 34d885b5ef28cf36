"""
Auth Schemas

Request/response models for the admin authentication endpoints.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Schema for admin login."""

    username: str = Field(min_length=1, max_length=256, description="Admin username")
    password: str = Field(min_length=1, max_length=1024, description="Admin password")


class LoginResponse(BaseModel):
    """Schema for a successful login; the token itself travels in a cookie."""

    success: bool = True
    expires_in: int  # seconds


class SessionResponse(BaseModel):
    """Schema for the current admin session."""

    id: str
    username: str
