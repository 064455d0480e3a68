"""
Signup and login endpoints.
"""
from fastapi import APIRouter, Depends, Request

from ..auth import TokenService
from ..dependencies import get_authentication_service, get_token_service
from ..errors import DuplicateIdentity, InvalidCredentials
from ..schemas import LoginResponse, LoginUserRequest, RegisterUserRequest, UserResponse
from ..service import AuthenticationService
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse)
def register(
    payload: RegisterUserRequest,
    request: Request,
    service: AuthenticationService = Depends(get_authentication_service),
):
    try:
        user = service.signup(payload.email, payload.password, full_name=payload.full_name)
    except DuplicateIdentity:
        log_auth_event("signup_duplicate", request, email=payload.email)
        raise

    log_auth_event("signup_success", request, email=user.email, user_id=user.id)
    return user


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginUserRequest,
    request: Request,
    service: AuthenticationService = Depends(get_authentication_service),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        user = service.authenticate(credentials.email, credentials.password)
    except InvalidCredentials:
        log_auth_event("login_failure", request, email=credentials.email)
        raise

    issued = tokens.issue(user.id)
    log_auth_event("login_success", request, email=user.email, user_id=user.id)
    return LoginResponse(token=issued.token, expires_in=issued.expires_in)
