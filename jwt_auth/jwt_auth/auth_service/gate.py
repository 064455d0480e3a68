"""
Authorization gate: maps an inbound bearer token to the current user.

The resolved user is handed to handlers as an explicit dependency value and
lives only as long as the request that resolved it.
"""
from typing import Optional
import logging

from fastapi import Depends, Header, HTTPException, status

from .auth import TokenService
from .dependencies import get_credential_store, get_token_service
from .errors import TokenError
from .models import User
from .store import CredentialStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class AuthorizationGate:
    def __init__(self, token_service: TokenService):
        self.token_service = token_service

    @staticmethod
    def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
        if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
            return None
        token = authorization[len(BEARER_PREFIX):].strip()
        return token or None

    def resolve(self, authorization: Optional[str], store: CredentialStore) -> Optional[User]:
        """
        Return the user the request's token belongs to, or None for an
        anonymous request. Token failures of every kind collapse into None.
        """
        token = self.extract_bearer_token(authorization)
        if token is None:
            return None

        try:
            subject = self.token_service.validate(token)
        except TokenError as exc:
            logger.info("Rejected bearer token: reason=%s", type(exc).__name__)
            return None

        # Re-resolve so a token cannot outlive the account it names.
        try:
            user_id = int(subject)
        except ValueError:
            logger.info("Rejected bearer token: non-numeric subject")
            return None
        user = store.find_by_id(user_id)
        if user is None:
            logger.info("Rejected bearer token: unknown subject user_id=%s", user_id)
        return user


def get_authorization_gate(token_service: TokenService = Depends(get_token_service)) -> AuthorizationGate:
    return AuthorizationGate(token_service)


def get_current_identity(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    store: CredentialStore = Depends(get_credential_store),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> Optional[User]:
    return gate.resolve(authorization, store)


def require_authenticated_user(identity: Optional[User] = Depends(get_current_identity)) -> User:
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity
