"""Database query utility functions."""
from typing import Any, Optional, Type, TypeVar
from sqlalchemy.orm import Session

from app.utils.exceptions import NotFoundError

T = TypeVar("T")


def get_by_id(
    db: Session,
    model: Type[T],
    id_value: int,
    error_message: Optional[str] = None,
    for_update: bool = False,
) -> T:
    """
    Get a model instance by ID.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id_value: Integer primary key
        error_message: Custom error message if not found
        for_update: Lock the row for the rest of the transaction

    Returns:
        Model instance

    Raises:
        NotFoundError: If model not found
    """
    query = db.query(model).filter(model.id == id_value)
    if for_update:
        query = query.with_for_update()

    instance = query.first()
    if not instance:
        raise NotFoundError(error_message or f"{model.__name__} not found")

    return instance


def get_by_field(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    error_message: Optional[str] = None,
) -> Optional[T]:
    """
    Get a model instance by a specific field.

    Args:
        db: Database session
        model: SQLAlchemy model class
        field_name: Name of the field to filter by
        field_value: Value to filter by
        error_message: Custom error message if not found (if None, returns None instead of raising)

    Returns:
        Model instance or None
    """
    field = getattr(model, field_name)
    instance = db.query(model).filter(field == field_value).first()

    if not instance and error_message:
        raise NotFoundError(error_message)

    return instance
