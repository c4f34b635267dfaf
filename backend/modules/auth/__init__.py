"""
Authentication module.

Handles credential checks, password hashing and session token issuance.

Public API:
- IAuthService: Interface for auth operations
- IUserDirectory: Lookup contract supplied by the host application
- Credentials, AuthResult, SessionClaims, UserSummary: Data models
- Auth exceptions: InvalidCredentialsError, InvalidTokenError, etc.
"""

from .interfaces import IAuthService, IUserDirectory, IPasswordHasher, ITokenIssuer
from .models import (
    AuthErrorCode,
    AuthResult,
    Credentials,
    SessionClaims,
    TokenVerification,
    UserRecord,
    UserSummary,
)
from .exceptions import (
    AuthInternalError,
    CredentialsRequiredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MalformedHashError,
    TokenSignatureError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserDirectory",
    "IPasswordHasher",
    "ITokenIssuer",
    # Models
    "AuthErrorCode",
    "AuthResult",
    "Credentials",
    "SessionClaims",
    "TokenVerification",
    "UserRecord",
    "UserSummary",
    # Exceptions
    "AuthInternalError",
    "CredentialsRequiredError",
    "ExpiredTokenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MalformedHashError",
    "TokenSignatureError",
]
