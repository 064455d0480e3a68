"""
Domain errors raised by the credential store, authentication service and
token service.

HTTP mapping happens in ``main.py``; the authorization gate never surfaces
``TokenError`` subclasses to the caller.
"""


class AuthError(Exception):
    """Base class for every authentication failure."""


class DuplicateIdentity(AuthError):
    def __init__(self, email: str):
        super().__init__(f"Email already exists: {email}")
        self.email = email


class InvalidCredentials(AuthError):
    # One message for unknown email and wrong password alike.
    def __init__(self):
        super().__init__("Invalid credentials")


class TokenError(AuthError):
    """A bearer token could not be accepted."""


class InvalidSignature(TokenError):
    pass


class Expired(TokenError):
    pass


class Malformed(TokenError):
    pass
