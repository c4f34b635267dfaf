"""
Authentication service implementation.

Checks usernames and passwords against a user directory and issues
signed session tokens. This is the error boundary of the auth module:
every outcome leaves as an AuthResult, SessionClaims or None.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from shared.exceptions import ConfigurationError

from .directory import seed_demo_directory
from .exceptions import (
    AuthInternalError,
    CredentialsRequiredError,
    InvalidCredentialsError,
)
from .interfaces import IAuthService, IPasswordHasher, ITokenIssuer, IUserDirectory
from .models import AuthResult, Credentials, SessionClaims, UserSummary
from .passwords import BcryptPasswordHasher
from .tokens import JWTTokenIssuer

logger = logging.getLogger(__name__)

_TIMING_PASSWORD = "timing-equalization-placeholder"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Password hashing and token signing run in worker threads so a slow
    bcrypt round does not stall other requests on the event loop.
    """

    def __init__(
        self,
        directory: Optional[IUserDirectory] = None,
        hasher: Optional[IPasswordHasher] = None,
        issuer: Optional[ITokenIssuer] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._hasher = hasher or BcryptPasswordHasher(rounds=self._settings.bcrypt_rounds)
        self._issuer = issuer or JWTTokenIssuer(
            secret=self._settings.signing_secret(),
            algorithm=self._settings.jwt_algorithm,
            issuer=self._settings.token_issuer,
            default_ttl=timedelta(hours=self._settings.token_ttl_hours),
        )

        if directory is None:
            if self._settings.environment == "production":
                raise ConfigurationError(
                    "A user directory must be provided in production",
                    code="MISSING_USER_DIRECTORY",
                )
            directory = seed_demo_directory(self._hasher)
        self._directory = directory

        # Unknown usernames are verified against this so they cost one bcrypt run.
        self._timing_hash = self._hasher.hash(_TIMING_PASSWORD)

    async def authenticate(self, credentials: Union[Credentials, dict]) -> AuthResult:
        """
        Check credentials and issue a session token.

        Unknown usernames and wrong passwords produce the same result.
        Unexpected faults are logged and reported as a generic internal error.
        """
        try:
            user = await self._check_credentials(credentials)
            token = await asyncio.to_thread(self._issuer.issue, user)
        except (CredentialsRequiredError, InvalidCredentialsError) as e:
            logger.info("Login rejected: %s", e.code)
            return AuthResult.failure(e)
        except Exception:
            logger.exception("Unexpected error during authentication")
            return AuthResult.failure(AuthInternalError())

        logger.info("Login succeeded for user_id=%s", user.id)
        return AuthResult.ok(token, user)

    async def _check_credentials(self, credentials: Union[Credentials, dict]) -> UserSummary:
        if not isinstance(credentials, Credentials):
            try:
                credentials = Credentials.model_validate(credentials or {})
            except PydanticValidationError as e:
                raise CredentialsRequiredError() from e

        if not credentials.is_complete():
            raise CredentialsRequiredError()

        password = credentials.password.get_secret_value()
        record = await self._directory.find_by_username(credentials.username)

        if record is None:
            await self._verify_against_timing_hash(password)
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, password, record.password_hash)
        if not matches:
            raise InvalidCredentialsError()

        return UserSummary.from_record(record)

    async def _verify_against_timing_hash(self, password: str) -> None:
        await asyncio.to_thread(self._hasher.verify, password, self._timing_hash)

    async def validate_token(self, token: str) -> Optional[SessionClaims]:
        """
        Validate a session token.

        Failures are logged and reported as None.
        """
        try:
            result = await asyncio.to_thread(self._issuer.verify, token)
        except Exception:
            logger.exception("Unexpected error during token validation")
            return None

        if not result.valid:
            return None
        return result.claims

    async def hash_password(self, password: str) -> Optional[str]:
        """
        Hash a password for storage.

        Failures are logged and reported as None.
        """
        try:
            return await asyncio.to_thread(self._hasher.hash, password)
        except Exception:
            logger.exception("Unexpected error while hashing a password")
            return None


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
