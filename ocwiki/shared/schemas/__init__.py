"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Message, error and health responses
- auth: Login and session schemas

Usage:
======
    from ocwiki.shared.schemas.auth import LoginRequest, LoginResponse
    from ocwiki.shared.schemas.common import ErrorResponse
"""

from ocwiki.shared.schemas.common import (
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from ocwiki.shared.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SessionResponse,
)

__all__ = [
    # Common
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "SessionResponse",
]
