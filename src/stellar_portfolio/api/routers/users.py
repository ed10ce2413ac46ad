"""User endpoints."""

from fastapi import APIRouter, Depends

from stellar_portfolio.api.deps import get_user_service
from stellar_portfolio.api.schemas import UserCreate, UserResponse, UserUpdate
from stellar_portfolio.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserResponse, status_code=201)
def create_user(
    data: UserCreate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a new user."""
    user = users.create_user(email=data.email, display_name=data.display_name)
    return UserResponse.model_validate(user)


@router.get("/", response_model=list[UserResponse])
def list_users(
    users: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """List all users."""
    return [UserResponse.model_validate(u) for u in users.list_users()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a user by ID."""
    return UserResponse.model_validate(users.get_user(user_id))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    data: UserUpdate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update a user's email or display name."""
    user = users.update_user(user_id, email=data.email, display_name=data.display_name)
    return UserResponse.model_validate(user)
