"""Schemas for account endpoints."""
from pydantic import BaseModel, Field
from typing import List, Optional


class SignupRequest(BaseModel):
    """Request schema for /signup endpoint."""
    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., min_length=1, description="Login email, unique")
    password: str = Field(..., min_length=1, description="Plaintext password")


class SignupResponse(BaseModel):
    """Response schema for /signup endpoint."""
    message: str
    userId: int


class LoginRequest(BaseModel):
    """Request schema for /login endpoint."""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response schema for /login endpoint."""
    message: str
    userId: int
    name: str


class BulkUsersRequest(BaseModel):
    """Request schema for /block-users, /unblock-users and /delete-users."""
    userId: Optional[int] = Field(None, description="ID of the acting user")
    userIds: Optional[List[int]] = Field(None, description="IDs of the target users")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str


class UserResponse(BaseModel):
    """Public view of a user; never includes the password hash."""
    id: int
    name: str
    email: str
    lastSeen: Optional[str]
    isBlocked: bool
