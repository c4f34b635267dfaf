"""
Error hierarchy shared by the login service and its configuration.

Every failure carries a stable ``code`` that callers branch on and a
``message`` that is safe to show an end user. ``details`` stay in local
logs. The auth module maps each code onto an AuthErrorCode when it
builds a result.
"""

from typing import Optional, Any


class TaskAttachmentsError(Exception):
    """
    Root of the Task Attachments error tree.

    ``code`` defaults to the class name when a subclass does not fix one.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Error body as returned to the caller of a login or token check."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(TaskAttachmentsError):
    """Credentials or token input was missing or unusable."""


class AuthenticationError(TaskAttachmentsError):
    """Credentials were rejected or a session token did not verify."""


class InternalError(TaskAttachmentsError):
    """Unexpected fault behind the login service. Only the message leaves it."""


class ConfigurationError(TaskAttachmentsError):
    """Startup settings such as the signing secret are missing or invalid."""
