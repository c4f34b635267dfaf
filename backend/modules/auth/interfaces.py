"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The user directory in particular is supplied by the
host application; the auth module never assumes a storage technology.
"""

from datetime import timedelta
from typing import Optional, Protocol, Union, runtime_checkable

from .models import (
    AuthResult,
    Credentials,
    SessionClaims,
    TokenVerification,
    UserRecord,
    UserSummary,
)


@runtime_checkable
class IUserDirectory(Protocol):
    """
    Read-only lookup of stored users.

    Implementations must be safe for concurrent reads.
    """

    async def find_by_username(self, username: str) -> Optional[UserRecord]:
        """
        Find a user by login name.

        Args:
            username: Exact username to look up

        Returns:
            UserRecord if found, None otherwise
        """
        ...


@runtime_checkable
class IPasswordHasher(Protocol):
    """Interface for one-way salted password hashing."""

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        ...

    def verify(self, password: str, digest: str) -> bool:
        """
        Check a password against a digest produced by hash().

        Raises:
            MalformedHashError: If the digest cannot be parsed
        """
        ...


@runtime_checkable
class ITokenIssuer(Protocol):
    """Interface for signing and verifying session tokens."""

    def issue(self, user: UserSummary, ttl: Optional[timedelta] = None) -> str:
        ...

    def decode(self, token: str) -> SessionClaims:
        ...

    def verify(self, token: str) -> TokenVerification:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    No method raises for bad input or internal faults; outcomes are
    reported through return values.
    """

    async def authenticate(self, credentials: Union[Credentials, dict]) -> AuthResult:
        """
        Check credentials and issue a session token.

        Args:
            credentials: Username and password

        Returns:
            AuthResult with token and user summary, or an error
        """
        ...

    async def validate_token(self, token: str) -> Optional[SessionClaims]:
        """
        Validate a session token.

        Returns:
            SessionClaims if the token is valid, None otherwise
        """
        ...

    async def hash_password(self, password: str) -> Optional[str]:
        """
        Hash a password for storage by registration flows.

        Returns:
            The digest, or None if hashing failed
        """
        ...
