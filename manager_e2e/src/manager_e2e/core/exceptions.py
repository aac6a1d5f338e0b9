"""Custom exceptions for the manager E2E suite."""

from typing import Any

AUTH_SETUP_HINT = "Run `manager-e2e auth-setup` to regenerate the storage state"


class ManagerE2EError(Exception):
    """Base exception for all manager E2E errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class SessionExpiredError(ManagerE2EError):
    """Raised when the stored session is no longer authenticated."""

    def __init__(
        self,
        message: str = f"Session expired. {AUTH_SETUP_HINT}.",
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


class AuthenticationError(ManagerE2EError):
    """Raised when a login flow cannot be completed."""

    def __init__(
        self,
        message: str = "Authentication required",
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.provider = provider


class MfaRequiredError(AuthenticationError):
    """Raised when the identity provider asks for a multi-factor approval."""

    def __init__(
        self,
        message: str = f"Microsoft login blocked by MFA. {AUTH_SETUP_HINT} or approve the Authenticator request.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, provider="microsoft", details=details)


class ElementNotFoundError(ManagerE2EError):
    """Raised when a required element never becomes available."""

    def __init__(
        self,
        message: str,
        element: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.element = element


class WizardNavigationError(ManagerE2EError):
    """Raised when a creation wizard cannot reach the expected step."""

    def __init__(
        self,
        message: str,
        target_step: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.target_step = target_step
        self.path = path


class UploadTimeoutError(ManagerE2EError):
    """Raised when a media upload does not finish in time."""

    def __init__(
        self,
        message: str = "Video upload did not finish within the expected time",
        timeout_ms: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.timeout_ms = timeout_ms


class ValidationError(ManagerE2EError):
    """Raised when configuration or test data is invalid."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value


class RetryExhaustedError(ManagerE2EError):
    """Raised when all retry attempts have been exhausted."""

    def __init__(
        self,
        message: str = "All retry attempts exhausted",
        attempts: int = 0,
        last_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.attempts = attempts
        self.last_error = last_error
