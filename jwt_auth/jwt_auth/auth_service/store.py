"""
Credential store backed by the ``users`` table.
"""
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import DuplicateIdentity
from .models import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, email: str, password_hash: str, full_name: Optional[str] = None) -> User:
        """
        Insert a new user.

        The pre-check only avoids a needless write; the UNIQUE constraint on
        ``users.email`` decides races between concurrent signups.

        Raises:
            DuplicateIdentity: If a user with this email already exists
        """
        email = normalize_email(email)
        if self.find_by_email(email) is not None:
            raise DuplicateIdentity(email)

        user = User(email=email, full_name=full_name, password=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Concurrent signup lost unique check: email=%s", email)
            raise DuplicateIdentity(email) from exc
        self.db.refresh(user)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id.asc()).all()
