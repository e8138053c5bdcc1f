"""
Custom exception classes for the application.

Each exception carries the HTTP status and the short plain-text message the
endpoint answers with. Upstream response bodies never end up in `message`.
"""

from typing import Any


class AppException(Exception):
    """Base exception for application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            message: Human-readable error message returned to the caller.
            code: Machine-readable error code.
            details: Additional error details, logged but never returned.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class AuthenticationError(AppException):
    """Raised when the request carries no usable bearer credential."""

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "UNAUTHORIZED", details)


class ForbiddenError(AppException):
    """Raised when the caller is not a verified operator.

    Not-found and not-verified are deliberately indistinguishable.
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Forbidden",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "FORBIDDEN", details)


class ConfigurationError(AppException):
    """Raised when required server configuration is missing."""

    status_code = 500

    def __init__(
        self,
        message: str = "Server not configured",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "SERVER_NOT_CONFIGURED", details)


class UpstreamError(AppException):
    """Raised when the mesh provider fails or answers unexpectedly."""

    status_code = 502

    def __init__(
        self,
        message: str = "Upstream failed",
        code: str = "UPSTREAM_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class OAuthError(UpstreamError):
    """Raised when the client-credentials grant fails."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("OAuth failed", "OAUTH_FAILED", details)


class KeyCreateError(UpstreamError):
    """Raised when the key-creation call fails."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Key create failed", "KEY_CREATE_FAILED", details)


class KeyMissingError(UpstreamError):
    """Raised when the key-creation response carries no key."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Key missing", "KEY_MISSING", details)
