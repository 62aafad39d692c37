"""Pydantic schemas for request/response validation."""
from app.schemas.users import (
    BulkUsersRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    UserResponse,
)

__all__ = [
    "BulkUsersRequest",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "SignupRequest",
    "SignupResponse",
    "UserResponse",
]
