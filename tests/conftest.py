"""
Shared fixtures for the live manager E2E suite.

These tests drive a real browser against the QA manager through
pytest-playwright. They only run with MANAGER_E2E_RUN=1.
"""

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "manager_e2e" / "src"))

from manager_e2e.core.config import Config  # noqa: E402
from manager_e2e.models.communications import MediaFiles  # noqa: E402
from manager_e2e.models.users import load_users  # noqa: E402
from manager_e2e.sessions.storage_state import storage_state_exists  # noqa: E402


def pytest_collection_modifyitems(config, items):
    if os.environ.get("MANAGER_E2E_RUN") == "1":
        return
    skip_e2e = pytest.mark.skip(reason="set MANAGER_E2E_RUN=1 to run live browser tests")
    for item in items:
        if item.get_closest_marker("e2e"):
            item.add_marker(skip_e2e)


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(scope="session")
def manager_config() -> Config:
    config = Config.from_env()
    config.validate()
    return config


@pytest.fixture(scope="session")
def base_url(manager_config):
    return manager_config.base_url


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, manager_config):
    """Reuse the saved session when one exists."""
    args = {**browser_context_args, "base_url": manager_config.base_url}
    if storage_state_exists(manager_config.storage_state):
        args["storage_state"] = str(manager_config.storage_state)
    return args


@pytest.fixture(autouse=True)
def navigation_timeout(request, manager_config):
    if "page" in request.fixturenames:
        request.getfixturevalue("page").set_default_navigation_timeout(manager_config.navigation_timeout_ms)


# =============================================================================
# Test data
# =============================================================================


@pytest.fixture(scope="session")
def users(manager_config):
    return load_users(PROJECT_ROOT / manager_config.users_file)


@pytest.fixture(scope="session")
def login_options(manager_config):
    return manager_config.login_options()


@pytest.fixture(scope="session")
def media(manager_config) -> MediaFiles:
    files = MediaFiles.from_dir(PROJECT_ROOT / manager_config.media_dir)
    missing = files.missing()
    if missing:
        pytest.skip(f"Media fixtures missing: {', '.join(str(p) for p in missing)}")
    return files
