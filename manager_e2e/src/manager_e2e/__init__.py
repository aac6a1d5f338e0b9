"""Manager E2E - end-to-end browser tests for the communications manager.

This package provides the browser helpers the test suite is built on:
- Resolving elements from ordered candidate queries
- Walking creation wizards whose step order varies per content type
- Dismissing crop and confirmation dialogs after media uploads
- Logging in with a password or through Microsoft SSO

Library Usage:
    >>> from manager_e2e import Config, PublicationWorkflow, load_users
    >>>
    >>> config = Config.from_env()
    >>> users = load_users(config.users_file)
    >>> workflow = PublicationWorkflow(page, users, config.login_options())
    >>> result = workflow.publish_simple_post("Post simples - sem midia")
    >>> print(result.title)

CLI Usage:
    $ manager-e2e auth-setup
    $ manager-e2e info
"""

__version__ = "0.1.0"

# Core
from manager_e2e.core.config import Config, LoginOptions
from manager_e2e.core.exceptions import (
    ManagerE2EError,
    SessionExpiredError,
    AuthenticationError,
    MfaRequiredError,
    ElementNotFoundError,
    WizardNavigationError,
    UploadTimeoutError,
    ValidationError,
)

# Models
from manager_e2e.models import (
    POST_TYPES,
    Credentials,
    MediaFiles,
    PostType,
    PublicationResult,
    Status,
    UsersData,
    get_post_type,
    load_users,
)

# Browser
from manager_e2e.browser import CandidateQuery, ElementResolver, dismiss_crop_dialog_if_present

# Wizard
from manager_e2e.wizard import StepSnapshot, WizardNavigator, WizardStep, classify

# Auth
from manager_e2e.auth import login_as_valid_user

# Workflows
from manager_e2e.workflows import PublicationWorkflow, safe_goto

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "LoginOptions",
    "ManagerE2EError",
    "SessionExpiredError",
    "AuthenticationError",
    "MfaRequiredError",
    "ElementNotFoundError",
    "WizardNavigationError",
    "UploadTimeoutError",
    "ValidationError",
    # Models
    "POST_TYPES",
    "Credentials",
    "MediaFiles",
    "PostType",
    "PublicationResult",
    "Status",
    "UsersData",
    "get_post_type",
    "load_users",
    # Browser
    "CandidateQuery",
    "ElementResolver",
    "dismiss_crop_dialog_if_present",
    # Wizard
    "StepSnapshot",
    "WizardNavigator",
    "WizardStep",
    "classify",
    # Auth
    "login_as_valid_user",
    # Workflows
    "PublicationWorkflow",
    "safe_goto",
]
