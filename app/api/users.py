"""Account API endpoints."""
from fastapi import APIRouter, BackgroundTasks, Depends

from app.schemas.users import (
    BulkUsersRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    UserResponse,
)
from app.services.account_directory import AccountDirectory, get_account_directory
from app.utils.serialization import serialize_user

router = APIRouter(tags=["users"])


@router.post("/signup", response_model=SignupResponse)
def signup(
    request: SignupRequest,
    directory: AccountDirectory = Depends(get_account_directory),
) -> SignupResponse:
    """
    Register a new user.

    Args:
        request: Name, email and password
        directory: Account directory

    Returns:
        Confirmation with the new user ID
    """
    user_id = directory.register(request.name, request.email, request.password)
    return SignupResponse(message="User registered successfully!", userId=user_id)


@router.get("/users", response_model=list[UserResponse])
def list_users(
    directory: AccountDirectory = Depends(get_account_directory),
) -> list[UserResponse]:
    """List every registered user."""
    return [UserResponse(**serialize_user(u)) for u in directory.list_users()]


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    background_tasks: BackgroundTasks,
    directory: AccountDirectory = Depends(get_account_directory),
) -> LoginResponse:
    """
    Check credentials. The last-seen timestamp is updated after the response is sent.

    Args:
        request: Login credentials
        background_tasks: Request-scoped task queue
        directory: Account directory

    Returns:
        Login response with the user's ID and name
    """
    user = directory.authenticate(
        request.email,
        request.password,
        defer=background_tasks.add_task,
    )
    return LoginResponse(message="Login successful!", userId=user.user_id, name=user.name)


@router.delete("/delete-users", response_model=MessageResponse)
def delete_users(
    request: BulkUsersRequest,
    directory: AccountDirectory = Depends(get_account_directory),
) -> MessageResponse:
    """Delete the selected users on behalf of the acting user."""
    directory.delete_users(request.userId, request.userIds)
    return MessageResponse(message="Users deleted successfully")


@router.put("/block-users", response_model=MessageResponse)
def block_users(
    request: BulkUsersRequest,
    directory: AccountDirectory = Depends(get_account_directory),
) -> MessageResponse:
    """Block the selected users on behalf of the acting user."""
    directory.set_blocked_state(request.userId, request.userIds, blocked=True)
    return MessageResponse(message="Users blocked successfully")


@router.put("/unblock-users", response_model=MessageResponse)
def unblock_users(
    request: BulkUsersRequest,
    directory: AccountDirectory = Depends(get_account_directory),
) -> MessageResponse:
    """Unblock the selected users on behalf of the acting user."""
    directory.set_blocked_state(request.userId, request.userIds, blocked=False)
    return MessageResponse(message="Users unblocked successfully")
