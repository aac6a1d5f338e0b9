"""Configuration management for the manager E2E suite."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from manager_e2e.models.users import Credentials

load_dotenv()

DEFAULT_BASE_URL = "https://qa-progic.comcaqui.com"


def _env(*names: str, default: str = "") -> str:
    """Return the first non-empty environment variable among ``names``."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return default


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class LoginOptions:
    """Explicit switches for the login routine.

    Attributes:
        prefer_sso_strategy: Skip the password form and go straight to SSO
        allow_interactive_mfa: Allow the SSO/MFA path at all; when False an
            unauthenticated session fails fast with a storage state hint
        override_credentials: SSO identity; an empty e-mail or password
            falls back to the users file field by field
    """

    prefer_sso_strategy: bool = False
    allow_interactive_mfa: bool = False
    override_credentials: Credentials | None = None

    def sso_credentials(self, fallback: Credentials) -> Credentials:
        """Credentials for Microsoft SSO, merging the override over ``fallback``."""
        override = self.override_credentials
        if override is None:
            return fallback
        return Credentials(
            email=override.email or fallback.email,
            password=override.password or fallback.password,
        )


@dataclass
class Config:
    """Global configuration for the suite.

    Values default from environment variables (a ``.env`` file is honoured).
    Example: MANAGER_E2E_BASE_URL=https://qa.example.com
    """

    base_url: str = field(
        default_factory=lambda: _env("MANAGER_E2E_BASE_URL", "PLAYWRIGHT_BASE_URL", default=DEFAULT_BASE_URL)
    )
    storage_state: Path = field(
        default_factory=lambda: Path(
            _env("MANAGER_E2E_STORAGE_STATE", "PLAYWRIGHT_STORAGE_STATE", default="storage/auth.json")
        )
    )
    users_file: Path = field(
        default_factory=lambda: Path(_env("MANAGER_E2E_USERS_FILE", default="data/users.json"))
    )
    media_dir: Path = field(
        default_factory=lambda: Path(_env("MANAGER_E2E_MEDIA_DIR", default="data/media"))
    )

    # Timeouts (milliseconds)
    navigation_timeout_ms: int = field(
        default_factory=lambda: int(_env("MANAGER_E2E_NAVIGATION_TIMEOUT_MS", default="30000"))
    )
    wizard_timeout_ms: int = field(
        default_factory=lambda: int(_env("MANAGER_E2E_WIZARD_TIMEOUT_MS", default="30000"))
    )

    # SSO switches
    allow_sso: bool = field(default_factory=lambda: _env_flag("ALLOW_MICROSOFT_SSO"))
    prefer_sso: bool = field(
        default_factory=lambda: os.environ.get("AUTH_STRATEGY", "").lower() == "microsoft"
        or _env_flag("USE_MICROSOFT_SSO")
    )
    sso_email: str = field(default_factory=lambda: _env("MICROSOFT_EMAIL"))
    sso_password: str = field(default_factory=lambda: _env("MICROSOFT_PASSWORD"))

    # Logging
    log_level: str = field(default_factory=lambda: _env("MANAGER_E2E_LOG_LEVEL", default="INFO"))

    def validate(self) -> None:
        """Validate that all required configuration is present.

        Raises:
            ValueError: If a value is missing or malformed.
        """
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"MANAGER_E2E_BASE_URL must be an http(s) URL, got {self.base_url!r}")
        if self.navigation_timeout_ms <= 0 or self.wizard_timeout_ms <= 0:
            raise ValueError("Timeouts must be positive")

    def url(self, path: str) -> str:
        """Join ``path`` to the base URL."""
        if path.startswith(("http://", "https://")):
            return path
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")

    def login_options(self) -> LoginOptions:
        """Build the explicit login options from the environment switches."""
        override = None
        if self.sso_email or self.sso_password:
            override = Credentials(email=self.sso_email, password=self.sso_password)
        return LoginOptions(
            prefer_sso_strategy=self.prefer_sso,
            allow_interactive_mfa=self.allow_sso,
            override_credentials=override,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Create a Config instance from environment variables.

        Returns:
            Config instance with values from environment.
        """
        return cls()
