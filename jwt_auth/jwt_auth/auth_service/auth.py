from passlib.context import CryptContext
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
import json
import logging
import jwt
from jwt.utils import base64url_decode, base64url_encode

from .errors import Expired, InvalidSignature, Malformed

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordHasher:
    """Salted one-way password hashing.

    Salt and round count are embedded in the hash string, so verify needs
    nothing but the stored value.
    """

    def __init__(self, schemes=None):
        # Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
        self.context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return self.context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Unrecognised or corrupt hash string
            logger.warning("Stored password hash could not be parsed")
            return False

    def dummy_verify(self) -> bool:
        return self.context.dummy_verify()


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_in: int


class TokenService:
    """Issues and validates signed, time-bound JWTs.

    Tokens carry ``sub``, ``iat`` and ``exp``. Nothing is stored server-side:
    a token is valid iff its signature checks out and the clock is still
    before ``exp``.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiration_ms: int = 3600000,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        if expiration_ms <= 0:
            raise ValueError("expiration_ms must be positive")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiration_ms = expiration_ms
        self.clock = clock or _utcnow

    @property
    def expiration_seconds(self) -> int:
        return self.expiration_ms // 1000

    def issue(self, subject) -> IssuedToken:
        now = self.clock()
        issued_at_us = (now - EPOCH) // timedelta(microseconds=1)
        expire_us = issued_at_us + self.expiration_ms * 1000
        payload = {
            "sub": str(subject),
            "iat": issued_at_us // 1_000_000,
            # Round up so the token never lives shorter than the TTL
            "exp": -(-expire_us // 1_000_000),
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_in=self.expiration_seconds)

    @staticmethod
    def _check_structure(token: str) -> None:
        """
        Reject tokens whose header or payload cannot be read, and treat any
        undecodable or non-canonical signature segment as a bad signature.
        """
        segments = token.split(".") if isinstance(token, str) else []
        if len(segments) != 3:
            raise Malformed("Not enough segments")
        header_segment, payload_segment, signature_segment = segments
        try:
            header = json.loads(base64url_decode(header_segment))
            claims = json.loads(base64url_decode(payload_segment))
        except (ValueError, TypeError) as exc:
            raise Malformed("Header or payload could not be decoded") from exc
        if not isinstance(header, dict) or not isinstance(claims, dict):
            raise Malformed("Header and payload must be JSON objects")

        try:
            signature = base64url_decode(signature_segment)
        except (ValueError, TypeError) as exc:
            raise InvalidSignature("Signature could not be decoded") from exc
        if base64url_encode(signature).decode("ascii") != signature_segment:
            raise InvalidSignature("Signature is not canonically encoded")

    def validate(self, token: str) -> str:
        """
        Verify a token and return the subject it binds.

        Raises:
            InvalidSignature: signature or algorithm does not match, or the
                signature segment is corrupt
            Expired: current time is at or past ``exp``
            Malformed: not a JWT, or a required claim is missing
        """
        self._check_structure(token)
        try:
            # Expiry is checked below against the injected clock.
            data = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            raise InvalidSignature(str(exc)) from exc
        except jwt.DecodeError as exc:
            # Header and payload already decoded, so only the signature is left
            raise InvalidSignature(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise Malformed(str(exc)) from exc

        exp = data["exp"]
        subject = data["sub"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise Malformed("exp claim must be a numeric date")
        if not isinstance(subject, str) or not subject:
            raise Malformed("sub claim must be a non-empty string")
        if self.clock().timestamp() >= exp:
            raise Expired("Token has expired")
        return subject
