"""Pytest configuration and fixtures for manager E2E unit tests."""

import pytest

import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from playwright.sync_api import Error as PlaywrightError  # noqa: E402

from fakes import FakeClock  # noqa: E402

ENV_VARS = (
    "MANAGER_E2E_BASE_URL",
    "PLAYWRIGHT_BASE_URL",
    "MANAGER_E2E_STORAGE_STATE",
    "PLAYWRIGHT_STORAGE_STATE",
    "MANAGER_E2E_USERS_FILE",
    "MANAGER_E2E_MEDIA_DIR",
    "MANAGER_E2E_LOG_LEVEL",
    "MANAGER_E2E_NAVIGATION_TIMEOUT_MS",
    "MANAGER_E2E_WIZARD_TIMEOUT_MS",
    "ALLOW_MICROSOFT_SSO",
    "AUTH_STRATEGY",
    "USE_MICROSOFT_SSO",
    "MICROSOFT_EMAIL",
    "MICROSOFT_PASSWORD",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every suite environment variable."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def users():
    """Valid users data."""
    from manager_e2e.models.users import Credentials, UsersData
    return UsersData(valid_user=Credentials(email="qa.user@example.com", password="s3cret"))


@pytest.fixture
def users_file(tmp_path):
    """Users JSON file on disk."""
    path = tmp_path / "users.json"
    path.write_text('{"validUser": {"email": "qa.user@example.com", "password": "s3cret"}}')
    return path


@pytest.fixture
def timeout_error() -> PlaywrightError:
    return PlaywrightError("Timeout 1000ms exceeded.")
