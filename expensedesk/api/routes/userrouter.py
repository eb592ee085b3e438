from fastapi import APIRouter, Depends, HTTPException, status as http_status
from typing import List
import logging

from expensedesk.api.deps import get_store
from expensedesk.database.services.record_store import RecordStore
from expensedesk.database.services.user_service import UserService
from expensedesk.logic.helpers import public_user
from expensedesk.ReqResModels.usermodels import (
    CreateUserRequest,
    UpdateUserRequest,
    LoginRequest,
    UserResponse,
    DeleteUserResponse,
)
from expensedesk.ReqResModels.companymodels import ErrorResponse
from expensedesk.logic.exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    ValidationError,
    AuthenticationError,
    DatabaseError
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["users"],
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        400: {"model": ErrorResponse, "description": "Bad request"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

@router.post(
    "/auth/login",
    response_model=UserResponse,
    summary="Log in",
    description="Check an email and password and return the matching user"
)
def login(
    request: LoginRequest,
    store: RecordStore = Depends(get_store)
):
    """Authenticate a user"""
    try:
        return public_user(UserService.authenticate(store, str(request.email), request.password))
    except AuthenticationError as e:
        raise HTTPException(
            status_code=http_status.HTTP_401_UNAUTHORIZED,
            detail=e.message
        )
    except DatabaseError as e:
        logger.error(f"Login error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to authenticate user"
        )

@router.get(
    "/user/{email}",
    response_model=UserResponse,
    summary="Get user by email",
    description="Resolve a user through the email lookup record"
)
def get_user_by_email(
    email: str,
    store: RecordStore = Depends(get_store)
):
    """Get user by email"""
    try:
        user = UserService.get_user_by_email(store, email)
    except DatabaseError as e:
        logger.error(f"Get user error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user"
        )
    if not user:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return public_user(user)

@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="Get users",
    description="Retrieve every user"
)
def get_users(store: RecordStore = Depends(get_store)):
    """Get all users"""
    try:
        return [public_user(user) for user in UserService.list_users(store)]
    except DatabaseError as e:
        logger.error(f"Get users error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch users"
        )

@router.post(
    "/users",
    response_model=UserResponse,
    status_code=http_status.HTTP_201_CREATED,
    summary="Create a new user",
    description="Create a new user and its email lookup record"
)
def create_user(
    request: CreateUserRequest,
    store: RecordStore = Depends(get_store)
):
    """Create a new user"""
    try:
        return public_user(UserService.create_user(store, request))
    except (UserAlreadyExistsError, ValidationError) as e:
        raise HTTPException(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except DatabaseError as e:
        logger.error(f"Create user error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user"
        )

@router.put(
    "/users/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="Change a user's name, role, manager or approver flag"
)
def update_user(
    user_id: str,
    request: UpdateUserRequest,
    store: RecordStore = Depends(get_store)
):
    """Update user information"""
    try:
        return public_user(UserService.update_user(store, user_id, request))
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except DatabaseError as e:
        logger.error(f"Update user error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user"
        )

@router.delete(
    "/users/{user_id}",
    response_model=DeleteUserResponse,
    summary="Delete user",
    description="Delete a user and its email lookup record"
)
def delete_user(
    user_id: str,
    store: RecordStore = Depends(get_store)
):
    """Delete user"""
    try:
        UserService.delete_user(store, user_id)
        return {"success": True}
    except UserNotFoundError:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    except DatabaseError as e:
        logger.error(f"Delete user error: {e.message}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user"
        )
