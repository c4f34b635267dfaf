"""
Authentication module exceptions.

These exceptions are raised inside the auth module and converted to
structured results at the AuthService boundary. Messages are safe to
return to callers; anything sensitive belongs in logs only.
"""

from shared.exceptions import AuthenticationError, InternalError, ValidationError


class CredentialsRequiredError(ValidationError):
    """Raised when the username or password is missing or empty."""

    def __init__(self, message: str = "Username and password are required"):
        super().__init__(message, code="VALIDATION_ERROR")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised for an unknown username or a wrong password.

    Both causes share this exception and message so callers cannot
    tell which usernames exist.
    """

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid, malformed or missing claims."""

    def __init__(
        self,
        message: str = "Invalid authentication token",
        code: str = "INVALID_TOKEN",
    ):
        super().__init__(message, code=code)


class TokenSignatureError(InvalidTokenError):
    """Raised when a JWT signature does not match its contents."""

    def __init__(self):
        super().__init__(code="BAD_SIGNATURE")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MalformedHashError(InternalError):
    """Raised when a stored password hash cannot be parsed."""

    def __init__(self, message: str = "Stored password hash is malformed"):
        super().__init__(message, code="MALFORMED_HASH")


class AuthInternalError(InternalError):
    """Generic fault surfaced to callers in place of the real cause."""

    def __init__(self):
        super().__init__("Internal server error", code="INTERNAL_ERROR")
