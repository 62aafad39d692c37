"""Serialization utilities for converting models to API responses."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    """
    Serialize datetime to ISO format string with a UTC offset.

    Naive values are assumed to already be in UTC (SQLite drops tzinfo).

    Args:
        value: Datetime value or None

    Returns:
        ISO format string or None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def serialize_user(user: Any) -> Dict[str, Any]:
    """
    Serialize a User row to its public representation.

    The password hash is never part of the output.

    Args:
        user: User model instance

    Returns:
        Dictionary with id, name, email, lastSeen and isBlocked
    """
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "lastSeen": serialize_datetime(user.last_seen),
        "isBlocked": bool(user.is_blocked),
    }
