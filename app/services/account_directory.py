"""Account directory: registration, login and block/delete administration.

All user-state rules live here. The HTTP layer only validates request shape
and maps the exceptions raised by this module to responses.

Privileged operations (block, unblock, delete) go through ``_acting_as``,
which opens a transaction, locks the acting user's row and refuses the call
when that user is missing or blocked. The actor's state is read before the
mutation is applied, so an unblocked actor may block itself; every later
privileged call or login by it is then refused.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Iterable, Iterator, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config import settings
from app.database import SessionLocal
from app.models import User
from app.utils.db import get_by_field, get_by_id
from app.utils.exceptions import (
    BlockedError,
    InvalidCredentialsError,
    ValidationError,
    handle_database_error,
)
from app.utils.hashing import DEFAULT_ROUNDS, hash_password, verify_password
from app.utils.logger import logger


@dataclass(frozen=True)
class AuthenticatedUser:
    """Result of a successful login."""
    user_id: int
    name: str


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class AccountDirectory:
    """Owns user identity, credential checks and block state."""

    def __init__(self, session_factory: sessionmaker, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self._session_factory = session_factory
        self._bcrypt_rounds = bcrypt_rounds

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        """Yield a session inside a transaction, translating store failures."""
        try:
            with self._session_factory() as db, db.begin():
                yield db
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation}: {e}", exc_info=True)
            raise handle_database_error(e, operation) from e

    @contextmanager
    def _acting_as(self, acting_user_id: Optional[int], operation: str) -> Iterator[Session]:
        """
        Open a transaction on behalf of an actor after checking they may act.

        Args:
            acting_user_id: ID of the user performing the operation
            operation: Name of the operation, for logs and error messages

        Raises:
            ValidationError: If the actor ID is missing
            NotFoundError: If the actor does not exist
            BlockedError: If the actor is blocked
        """
        if not acting_user_id:
            raise ValidationError("User ID missing in request.")

        with self._transaction(operation) as db:
            actor = get_by_id(db, User, acting_user_id, "User not found.", for_update=True)
            if actor.is_blocked:
                logger.warning(f"Blocked user {acting_user_id} attempted {operation}")
                raise BlockedError("Your account is blocked. Redirecting to login.")
            yield db

    def register(self, name: str, email: str, password: str) -> int:
        """
        Create a new account.

        Args:
            name: Display name
            email: Unique login email
            password: Plaintext password, stored only as a bcrypt hash

        Returns:
            The new user's ID

        Raises:
            ValidationError: If a field is missing or empty
            ConflictError: If the email is already registered
            StoreError: On any other database failure
        """
        if not name or not email or not password:
            raise ValidationError("Name, email and password required")

        password_hash = hash_password(password, rounds=self._bcrypt_rounds)

        with self._transaction("register") as db:
            user = User(
                name=name,
                email=email,
                password_hash=password_hash,
                last_seen=utcnow(),
                is_blocked=False,
            )
            db.add(user)
            db.flush()
            user_id = user.id

        logger.info(f"Registered user {user_id} ({email})")
        return user_id

    def authenticate(
        self,
        email: str,
        password: str,
        defer: Optional[Callable[..., None]] = None,
    ) -> AuthenticatedUser:
        """
        Check credentials and record the login.

        The password is verified before the block flag is looked at, so a
        wrong password is always reported as such.

        Args:
            email: Login email
            password: Plaintext password
            defer: Optional scheduler, called as ``defer(fn, *args)``, used to
                run the ``last_seen`` update after the caller has its answer

        Returns:
            The authenticated user's ID and name

        Raises:
            ValidationError: If a field is missing or empty
            NotFoundError: If no user has this email
            InvalidCredentialsError: If the password is wrong
            BlockedError: If the account is blocked
        """
        if not email or not password:
            raise ValidationError("Email and Password required")

        with self._transaction("authenticate") as db:
            user = get_by_field(db, User, "email", email, error_message="User not found")
            user_id, name = user.id, user.name
            password_hash, is_blocked = user.password_hash, user.is_blocked

        if not verify_password(password, password_hash):
            logger.info(f"Invalid password for user {user_id}")
            raise InvalidCredentialsError("Invalid password")

        if is_blocked:
            logger.info(f"Blocked user {user_id} attempted to log in")
            raise BlockedError("Your account is blocked.")

        if defer is not None:
            defer(self.record_login, user_id)
        else:
            self.record_login(user_id)

        return AuthenticatedUser(user_id=user_id, name=name)

    def record_login(self, user_id: int) -> None:
        """
        Move ``last_seen`` forward to now. Best-effort: failures are logged only.

        Args:
            user_id: The user who just logged in
        """
        now = utcnow()
        try:
            with self._session_factory() as db, db.begin():
                db.query(User).filter(
                    User.id == user_id,
                    or_(User.last_seen.is_(None), User.last_seen <= now),
                ).update({User.last_seen: now}, synchronize_session=False)
        except SQLAlchemyError as e:
            logger.warning(f"Failed to update last_seen for user {user_id}: {e}")

    def list_users(self) -> List[User]:
        """
        Return every user, ordered by ID.

        Raises:
            StoreError: On database failure
        """
        with self._transaction("list_users") as db:
            users = db.query(User).order_by(User.id).all()
            db.expunge_all()
        return users

    def set_blocked_state(
        self,
        acting_user_id: Optional[int],
        target_user_ids: Iterable[int],
        blocked: bool,
    ) -> int:
        """
        Block or unblock a set of users.

        Unknown target IDs are ignored. Repeating the call is harmless.

        Args:
            acting_user_id: ID of the user performing the change
            target_user_ids: IDs to update
            blocked: New value of the block flag

        Returns:
            Number of rows matched

        Raises:
            ValidationError: If the actor ID or the targets are missing
            NotFoundError: If the actor does not exist
            BlockedError: If the actor is blocked
            StoreError: On database failure
        """
        operation = "block_users" if blocked else "unblock_users"
        with self._acting_as(acting_user_id, operation) as db:
            ids = _require_targets(target_user_ids, "blocking" if blocked else "unblocking")
            matched = db.query(User).filter(User.id.in_(ids)).update(
                {User.is_blocked: blocked}, synchronize_session=False
            )

        logger.info(f"User {acting_user_id} {'blocked' if blocked else 'unblocked'} {matched} user(s): {ids}")
        return matched

    def delete_users(self, acting_user_id: Optional[int], target_user_ids: Iterable[int]) -> int:
        """
        Permanently delete a set of users.

        Unknown target IDs are ignored.

        Args:
            acting_user_id: ID of the user performing the deletion
            target_user_ids: IDs to delete

        Returns:
            Number of rows deleted

        Raises:
            ValidationError: If the actor ID or the targets are missing
            NotFoundError: If the actor does not exist
            BlockedError: If the actor is blocked
            StoreError: On database failure
        """
        with self._acting_as(acting_user_id, "delete_users") as db:
            ids = _require_targets(target_user_ids, "deletion")
            deleted = db.query(User).filter(User.id.in_(ids)).delete(synchronize_session=False)

        logger.info(f"User {acting_user_id} deleted {deleted} user(s): {ids}")
        return deleted


def _require_targets(target_user_ids: Optional[Iterable[int]], purpose: str) -> List[int]:
    ids = sorted(set(target_user_ids or []))
    if not ids:
        raise ValidationError(f"No users selected for {purpose}")
    return ids


@lru_cache
def get_account_directory() -> AccountDirectory:
    """Dependency returning the directory bound to the application database."""
    return AccountDirectory(SessionLocal, bcrypt_rounds=settings.bcrypt_rounds)
