"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, model_validator

from shared.exceptions import TaskAttachmentsError


class AuthErrorCode(str, Enum):
    """Machine-readable failure kinds returned to callers."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    BAD_SIGNATURE = "BAD_SIGNATURE"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @classmethod
    def from_exception(cls, exc: TaskAttachmentsError) -> "AuthErrorCode":
        try:
            return cls(exc.code)
        except ValueError:
            return cls.INTERNAL_ERROR


class Credentials(BaseModel):
    """
    Login request submitted by a caller.

    Empty values are accepted here and rejected by AuthService so that the
    caller gets the specific validation message.
    """

    username: Optional[str] = Field(None, description="Login name")
    password: Optional[SecretStr] = Field(None, description="Plain text password")

    model_config = {"frozen": True}

    def is_complete(self) -> bool:
        return bool(self.username) and bool(
            self.password and self.password.get_secret_value()
        )


class UserRecord(BaseModel):
    """
    Stored user as returned by a user directory.

    The password hash never serializes and never shows up in repr.
    """

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    email: EmailStr = Field(..., description="Email address")
    password_hash: str = Field(..., exclude=True, repr=False)
    created_at: datetime = Field(..., description="Account creation time")

    model_config = {"frozen": True}


class UserSummary(BaseModel):
    """Public view of a user returned after a successful login."""

    id: int
    username: str
    email: str

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserSummary":
        return cls(id=record.id, username=record.username, email=record.email)


class SessionClaims(BaseModel):
    """
    Decoded session token payload.

    Wire names follow the token format (userId, iss, iat, exp); every
    claim is required.
    """

    user_id: int = Field(..., alias="userId", strict=True)
    username: str
    email: str
    iss: str = Field(..., description="Issuer")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class AuthResult(BaseModel):
    """
    Outcome of AuthService.authenticate.

    Exactly one of (token and user) or error is present.
    """

    success: bool
    token: Optional[str] = None
    user: Optional[UserSummary] = None
    error: Optional[str] = None
    error_code: Optional[AuthErrorCode] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_exclusive(self) -> "AuthResult":
        if self.success:
            if not self.token or self.user is None:
                raise ValueError("successful result requires token and user")
            if self.error is not None or self.error_code is not None:
                raise ValueError("successful result cannot carry an error")
        else:
            if not self.error or self.error_code is None:
                raise ValueError("failed result requires an error")
            if self.token is not None or self.user is not None:
                raise ValueError("failed result cannot carry a token or user")
        return self

    @classmethod
    def ok(cls, token: str, user: UserSummary) -> "AuthResult":
        return cls(success=True, token=token, user=user)

    @classmethod
    def failure(cls, exc: TaskAttachmentsError) -> "AuthResult":
        return cls(
            success=False,
            error=exc.message,
            error_code=AuthErrorCode.from_exception(exc),
        )


class TokenVerification(BaseModel):
    """Response from token verification."""

    valid: bool = Field(..., description="Whether the token is valid")
    claims: Optional[SessionClaims] = Field(None, description="Claims if valid")
    error: Optional[str] = Field(None, description="Error message if invalid")
    error_code: Optional[AuthErrorCode] = None

    model_config = {"frozen": True}

    @classmethod
    def accepted(cls, claims: SessionClaims) -> "TokenVerification":
        return cls(valid=True, claims=claims)

    @classmethod
    def rejected(cls, exc: TaskAttachmentsError) -> "TokenVerification":
        return cls(
            valid=False,
            error=exc.message,
            error_code=AuthErrorCode.from_exception(exc),
        )
