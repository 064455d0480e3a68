from typing import List

from fastapi import APIRouter, Depends

from ..gate import require_authenticated_user
from ..models import User
from ..schemas import UserResponse
from ..service import UserService
from ..dependencies import get_user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def authenticated_user(user: User = Depends(require_authenticated_user)):
    return user


@router.get("/", response_model=List[UserResponse])
def all_users(
    _user: User = Depends(require_authenticated_user),
    service: UserService = Depends(get_user_service),
):
    """List every registered user. Requires a valid bearer token."""
    return service.all_users()
