"""
Session token issuing and verification.

Tokens are HS256 (or other HMAC) JWTs: three base64url segments for
header, payload and signature, verifiable by any compliant library.
"""

import binascii
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from jwt.utils import base64url_decode, base64url_encode
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import ConfigurationError

from .exceptions import ExpiredTokenError, InvalidTokenError, TokenSignatureError
from .models import SessionClaims, TokenVerification, UserSummary

logger = logging.getLogger(__name__)

DEFAULT_ISSUER = "task-attachments-app"
DEFAULT_TTL = timedelta(hours=24)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_canonical(token: str) -> bool:
    """
    Check the token is three canonically encoded base64url segments.

    The base64 decoder ignores stray characters and unused trailing bits,
    so an altered character can decode to the original bytes. Re-encoding
    each segment rejects those variants.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return False
    for part in parts:
        try:
            raw = base64url_decode(part)
        except (ValueError, binascii.Error):
            return False
        if base64url_encode(raw).decode("ascii") != part:
            return False
    return True


class JWTTokenIssuer:
    """
    Signs and verifies time-bounded session tokens.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        issuer: str = DEFAULT_ISSUER,
        default_ttl: timedelta = DEFAULT_TTL,
        clock: Optional[Clock] = None,
    ):
        if not secret:
            raise ConfigurationError("A signing secret is required", code="MISSING_SECRET")
        if not algorithm.startswith("HS"):
            raise ConfigurationError(
                f"Unsupported signing algorithm: {algorithm}",
                code="UNSUPPORTED_ALGORITHM",
                details={"algorithm": algorithm},
            )
        self._secret = secret
        self.algorithm = algorithm
        self.issuer = issuer
        self.default_ttl = default_ttl
        self._clock = clock or utc_now

    def issue(self, user: UserSummary, ttl: Optional[timedelta] = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user: Identity to embed in the token
            ttl: Lifetime of the token, defaults to default_ttl

        Returns:
            Encoded JWT string
        """
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= timedelta(0):
            raise ValueError("Token ttl must be positive")

        now = self._clock()
        claims = SessionClaims(
            user_id=user.id,
            username=user.username,
            email=user.email,
            iss=self.issuer,
            iat=int(now.timestamp()),
            exp=int((now + ttl).timestamp()),
        )
        return jwt.encode(claims.to_payload(), self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> SessionClaims:
        """
        Verify a token and return its claims.

        Signature is checked first, then expiry, then the claim set.

        Raises:
            TokenSignatureError: If the signature does not match
            ExpiredTokenError: If the token is past its expiry
            InvalidTokenError: If the token is malformed or missing claims
        """
        if not isinstance(token, str) or not token:
            raise InvalidTokenError()
        if not _is_canonical(token):
            raise InvalidTokenError()

        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iat", "iss"],
                },
            )
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e

        exp = payload.get("exp")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise InvalidTokenError()
        if self._clock().timestamp() > exp:
            raise ExpiredTokenError()

        try:
            return SessionClaims.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidTokenError() from e

    def verify(self, token: str) -> TokenVerification:
        """Verify a token, reporting failure as a value instead of raising."""
        try:
            return TokenVerification.accepted(self.decode(token))
        except (InvalidTokenError, ExpiredTokenError) as e:
            logger.warning("Token rejected: %s", e.code)
            return TokenVerification.rejected(e)
