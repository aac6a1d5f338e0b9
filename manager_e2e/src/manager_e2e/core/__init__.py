"""Core exceptions shared across the suite."""

from manager_e2e.core.exceptions import (
    AUTH_SETUP_HINT,
    AuthenticationError,
    ElementNotFoundError,
    ManagerE2EError,
    MfaRequiredError,
    RetryExhaustedError,
    SessionExpiredError,
    UploadTimeoutError,
    ValidationError,
    WizardNavigationError,
)

__all__ = [
    "AUTH_SETUP_HINT",
    "ManagerE2EError",
    "SessionExpiredError",
    "AuthenticationError",
    "MfaRequiredError",
    "ElementNotFoundError",
    "WizardNavigationError",
    "UploadTimeoutError",
    "ValidationError",
    "RetryExhaustedError",
]
