"""Playwright storage state snapshots used to skip interactive login."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from playwright.sync_api import sync_playwright

from manager_e2e.browser.verification import LOGIN_PATH, MANAGER_URL

logger = logging.getLogger(__name__)


def storage_state_exists(path: Path | str) -> bool:
    """Check whether a non-empty snapshot file exists at ``path``."""
    path = Path(path)
    return path.is_file() and path.stat().st_size > 0


def load_storage_state(path: Path | str) -> dict[str, Any] | None:
    """Load a snapshot. Returns None if missing or unreadable."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        with open(path) as f:
            data = json.load(f)
        logger.debug(f"Loaded storage state from: {path}")
        return data
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load storage state from {path}: {e}")
        return None


def summarize_storage_state(path: Path | str) -> dict[str, Any]:
    """Cookie and origin counts of a snapshot, for display."""
    data = load_storage_state(path)
    if data is None:
        return {"exists": False, "cookies": 0, "origins": 0}
    return {
        "exists": True,
        "cookies": len(data.get("cookies", [])),
        "origins": len(data.get("origins", [])),
    }


def create_storage_state(
    base_url: str,
    path: Path | str,
    timeout_ms: float = 0,
    on_ready: Callable[[str], None] | None = None,
) -> Path:
    """Open a headed browser at the login page and save the session once logged in.

    The user completes the login by hand (SSO, MFA). By default there is no
    timeout on waiting for the manager landing page.

    Args:
        base_url: Manager base URL
        path: Where to write the storage state JSON
        timeout_ms: Wait for the manager page; 0 waits forever
        on_ready: Called with the login URL once the browser is open

    Returns:
        Path of the saved snapshot
    """
    path = Path(path)
    login_url = f"{base_url.rstrip('/')}{LOGIN_PATH}"

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=False)
        try:
            context = browser.new_context()
            page = context.new_page()
            page.goto(login_url)
            logger.info(f"Waiting for login to complete at {login_url}")
            if on_ready:
                on_ready(login_url)

            page.wait_for_url(MANAGER_URL, timeout=timeout_ms)

            path.parent.mkdir(parents=True, exist_ok=True)
            context.storage_state(path=str(path))
            logger.info(f"Saved storage state to: {path}")
        finally:
            browser.close()

    return path
