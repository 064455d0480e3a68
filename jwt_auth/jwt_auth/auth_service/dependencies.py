"""
FastAPI dependency providers for the service objects.

Tests swap any of these through ``app.dependency_overrides``.
"""
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from .auth import PasswordHasher, TokenService
from .config import settings
from .db import get_db
from .service import AuthenticationService, UserService
from .store import CredentialStore


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expiration_ms=settings.JWT_EXPIRATION_MS,
    )


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_authentication_service(
    store: CredentialStore = Depends(get_credential_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthenticationService:
    return AuthenticationService(store, hasher)


def get_user_service(store: CredentialStore = Depends(get_credential_store)) -> UserService:
    return UserService(store)
