"""URL and page state checks shared by login and publication flows."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = logging.getLogger(__name__)

# Manager root, with or without trailing slash or query string
MANAGER_URL = re.compile(r"/manager/?($|\?)")

LOGIN_PATH = "/manager/login"

IDENTITY_PROVIDER_URL = re.compile(r"login\.microsoftonline\.com|login\.live\.com", re.IGNORECASE)
MICROSOFT_LOGIN_HOST = "login.microsoftonline.com"


def is_manager_url(url: str) -> bool:
    """Check if ``url`` is the manager landing page."""
    return bool(MANAGER_URL.search(url))


def is_login_url(url: str) -> bool:
    """Check if ``url`` is the manager login page."""
    return LOGIN_PATH in url


def wait_for_url(page: Page, pattern: re.Pattern[str], timeout_ms: float) -> bool:
    """Wait for the page URL to match ``pattern``.

    Returns:
        True if the URL matched within the timeout, False otherwise
    """
    try:
        page.wait_for_url(pattern, timeout=timeout_ms)
        return True
    except PlaywrightError as e:
        logger.debug(f"URL did not match {pattern.pattern} within {timeout_ms}ms: {e}")
        return False


def wait_for_manager_url(page: Page, timeout_ms: float) -> bool:
    """Wait for the manager landing page; returns False on timeout."""
    return wait_for_url(page, MANAGER_URL, timeout_ms)
