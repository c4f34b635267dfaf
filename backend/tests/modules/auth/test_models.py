import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    MalformedHashError,
)
from modules.auth.models import (
    AuthErrorCode,
    AuthResult,
    Credentials,
    SessionClaims,
    TokenVerification,
    UserRecord,
    UserSummary,
)


@pytest.fixture
def record():
    return UserRecord(
        id=1,
        username="admin",
        email="admin@example.com",
        password_hash="$2b$04$abcdefghijklmnopqrstuuJ8d0d8bW0gCq0Fz0m1xGqv3xK7sZ8K",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestCredentials:
    def test_password_hidden_in_repr(self):
        """Passwords should not render in repr or str."""
        credentials = Credentials(username="admin", password="password123")
        assert "password123" not in repr(credentials)
        assert "password123" not in str(credentials)

    def test_is_complete(self):
        """Both fields must be non-empty."""
        assert Credentials(username="admin", password="x").is_complete()
        assert not Credentials(username="admin", password="").is_complete()
        assert not Credentials(username="", password="x").is_complete()
        assert not Credentials().is_complete()


class TestUserRecord:
    def test_hash_excluded_from_dump(self, record):
        """password_hash should never serialize."""
        assert "password_hash" not in record.model_dump()
        assert "$2b$" not in record.model_dump_json()

    def test_hash_excluded_from_repr(self, record):
        """password_hash should not show up in repr."""
        assert "$2b$" not in repr(record)

    def test_rejects_invalid_email(self):
        """Email should be validated."""
        with pytest.raises(ValidationError):
            UserRecord(
                id=1,
                username="admin",
                email="not-an-email",
                password_hash="x",
                created_at=datetime.now(timezone.utc),
            )


class TestUserSummary:
    def test_from_record(self, record):
        """Summary should copy the public fields only."""
        summary = UserSummary.from_record(record)
        assert summary.model_dump() == {
            "id": 1,
            "username": "admin",
            "email": "admin@example.com",
        }

    def test_forbids_password_hash(self):
        """Summary should refuse a password hash field."""
        with pytest.raises(ValidationError):
            UserSummary(id=1, username="admin", email="a@example.com", password_hash="x")


class TestSessionClaims:
    def test_parse_wire_payload(self):
        """Should parse the camel-case token payload."""
        claims = SessionClaims.model_validate({
            "userId": 1,
            "username": "admin",
            "email": "admin@example.com",
            "iss": "task-attachments-app",
            "iat": 1704063600,
            "exp": 1704067200,
        })
        assert claims.user_id == 1
        assert claims.expires_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert claims.to_payload()["userId"] == 1

    def test_missing_field_rejected(self):
        """Every claim should be required."""
        with pytest.raises(ValidationError):
            SessionClaims.model_validate({
                "userId": 1,
                "username": "admin",
                "iss": "task-attachments-app",
                "iat": 1704063600,
                "exp": 1704067200,
            })

    def test_user_id_must_be_integer(self):
        """A string user id should not be coerced."""
        with pytest.raises(ValidationError):
            SessionClaims.model_validate({
                "userId": "1",
                "username": "admin",
                "email": "admin@example.com",
                "iss": "task-attachments-app",
                "iat": 1704063600,
                "exp": 1704067200,
            })

    def test_claims_are_immutable(self):
        """Claims should be frozen once built."""
        claims = SessionClaims(
            user_id=1,
            username="admin",
            email="admin@example.com",
            iss="task-attachments-app",
            iat=1704063600,
            exp=1704067200,
        )
        with pytest.raises(ValidationError):
            claims.username = "root"


class TestAuthResult:
    def test_ok(self):
        """Successful results carry token and user only."""
        user = UserSummary(id=1, username="admin", email="admin@example.com")
        result = AuthResult.ok("token", user)
        assert result.success is True
        assert result.error is None
        assert result.error_code is None

    def test_failure_from_exception(self):
        """Failures take message and code from the exception."""
        result = AuthResult.failure(InvalidCredentialsError())
        assert result.success is False
        assert result.error == "Invalid credentials"
        assert result.error_code == AuthErrorCode.INVALID_CREDENTIALS

    def test_unknown_code_maps_to_internal(self):
        """Exceptions without a public code map to INTERNAL_ERROR."""
        result = AuthResult.failure(MalformedHashError())
        assert result.error_code == AuthErrorCode.INTERNAL_ERROR

    def test_success_without_token_rejected(self):
        """A success must include a token and user."""
        with pytest.raises(ValidationError):
            AuthResult(success=True)

    def test_success_with_error_rejected(self):
        """A success cannot also carry an error."""
        user = UserSummary(id=1, username="admin", email="admin@example.com")
        with pytest.raises(ValidationError):
            AuthResult(
                success=True,
                token="t",
                user=user,
                error="Invalid credentials",
                error_code=AuthErrorCode.INVALID_CREDENTIALS,
            )

    def test_failure_with_token_rejected(self):
        """A failure cannot carry a token."""
        with pytest.raises(ValidationError):
            AuthResult(
                success=False,
                token="t",
                error="Invalid credentials",
                error_code=AuthErrorCode.INVALID_CREDENTIALS,
            )

    def test_failure_without_error_rejected(self):
        """A failure must say why."""
        with pytest.raises(ValidationError):
            AuthResult(success=False)


class TestTokenVerification:
    def test_rejected(self):
        """Rejected verifications carry no claims."""
        result = TokenVerification.rejected(ExpiredTokenError())
        assert result.valid is False
        assert result.claims is None
        assert result.error_code == AuthErrorCode.TOKEN_EXPIRED
