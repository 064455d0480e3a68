from typing import List, Optional
import logging

from .auth import PasswordHasher
from .errors import InvalidCredentials
from .models import User
from .store import CredentialStore

logger = logging.getLogger(__name__)


class AuthenticationService:
    def __init__(self, store: CredentialStore, hasher: PasswordHasher):
        self.store = store
        self.hasher = hasher

    def signup(self, email: str, password: str, full_name: Optional[str] = None) -> User:
        """
        Register a user. Raises DuplicateIdentity, leaving the existing
        record untouched, if the email is taken.
        """
        hashed_pw = self.hasher.hash(password)
        user = self.store.create(email, hashed_pw, full_name=full_name)
        logger.info("User registered: user_id=%s email=%s", user.id, user.email)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Return the user owning these credentials.

        Unknown email and wrong password raise the same InvalidCredentials so
        callers cannot probe which accounts exist.
        """
        user = self.store.find_by_email(email)
        if not user:
            # Keep the unknown-email path as slow as a real verify
            self.hasher.dummy_verify()
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password):
            raise InvalidCredentials()
        return user


class UserService:
    def __init__(self, store: CredentialStore):
        self.store = store

    def all_users(self) -> List[User]:
        return self.store.list_all()
