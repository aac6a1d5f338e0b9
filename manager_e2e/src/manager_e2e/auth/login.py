"""Login to the manager console, including the Microsoft SSO path."""

from __future__ import annotations

import logging
import re
import time
from typing import TYPE_CHECKING, Callable

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import expect

from manager_e2e.browser.element_resolver import ElementResolver, by_css, by_role, is_visible_within
from manager_e2e.browser.verification import (
    IDENTITY_PROVIDER_URL,
    MICROSOFT_LOGIN_HOST,
    is_login_url,
    wait_for_manager_url,
    wait_for_url,
)
from manager_e2e.core.config import LoginOptions
from manager_e2e.core.exceptions import (
    AUTH_SETUP_HINT,
    AuthenticationError,
    MfaRequiredError,
    SessionExpiredError,
)
from manager_e2e.pages.login_page import LoginPage
from manager_e2e.utils.sanitization import literal_pattern, mask_email

if TYPE_CHECKING:
    from playwright.sync_api import Locator, Page

    from manager_e2e.models.users import Credentials, UsersData

logger = logging.getLogger(__name__)

PASSWORD_LOGIN_WAIT_MS = 8000
SSO_COMPLETION_WAIT_MS = 30000
PASSWORD_OR_MFA_WAIT_MS = 20000

MFA_HEADING = re.compile(r"approve sign in|request wasn.?t sent", re.I)
SIGN_IN_HEADING = re.compile(r"sign in|entrar", re.I)
SIGN_IN_BUTTON = re.compile(r"sign in|entrar|login", re.I)
USE_PASSWORD_LINK = re.compile(r"use your password instead|usar sua senha|usar senha", re.I)
USE_ANOTHER_ACCOUNT = re.compile(r"use another account|usar outra conta|outra conta", re.I)
STAY_SIGNED_IN_YES = re.compile(r"^\s*(yes|sim)\s*$", re.I)
STAY_SIGNED_IN_NO = re.compile(r"^\s*(no|não)\s*$", re.I)

MICROSOFT_EMAIL_FIELD = (
    by_css("#i0116"),
    by_css('input[name="loginfmt"]'),
    by_css('input[type="email"]'),
    by_css('input[placeholder*="example"]'),
    by_role("textbox"),
)

MICROSOFT_NEXT_BUTTON = (
    by_css("#idSIButton9"),
    by_role("button", name=re.compile(r"next|próximo|avançar|continuar", re.I)),
    by_css('input[type="submit"]'),
)

MICROSOFT_PASSWORD_SELECTOR = 'input#i0118, input[type="password"], input[name="passwd"]'

# Sets the value directly for inputs that ignore synthetic typing
_SET_INPUT_VALUE_JS = """(el, value) => {
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
}"""


def _attempt(action: Callable[[], object], description: str) -> bool:
    """Run a best-effort UI action, logging instead of raising on failure."""
    try:
        action()
        return True
    except (PlaywrightError, AssertionError) as e:
        logger.debug(f"{description} failed: {e}")
        return False


def login_as_valid_user(
    page: Page,
    users: UsersData,
    options: LoginOptions | None = None,
) -> None:
    """Make sure ``page`` is logged in to the manager console.

    A page whose context already carries an authenticated storage state
    returns as soon as the manager landing page loads.

    Args:
        page: Page whose context has the suite's base URL
        users: Credentials from the users file
        options: SSO switches (defaults: password login only, no SSO)

    Raises:
        SessionExpiredError: Login is required but SSO is not allowed
        MfaRequiredError: The identity provider asks for an MFA approval
        AuthenticationError: Login could not be completed
    """
    options = options or LoginOptions()
    login_page = LoginPage(page)

    page.goto("/manager")
    if not is_login_url(page.url):
        if not wait_for_manager_url(page, 5000):
            raise AssertionError(f"Expected the manager landing page, got {page.url}")
        logger.info("Session already authenticated")
        return

    if not options.allow_interactive_mfa:
        raise SessionExpiredError(
            "Microsoft SSO/MFA login is skipped in automation. "
            f"{AUTH_SETUP_HINT} before running the tests (or set ALLOW_MICROSOFT_SSO=1).",
            url=page.url,
        )

    login_page.go()

    sso_credentials = options.sso_credentials(users.valid_user)

    if not options.prefer_sso_strategy and not is_password_login_blocked(login_page):
        logger.info(f"Logging in with password as {mask_email(users.valid_user.email)}")
        login_page.fill_email(users.valid_user.email)
        login_page.fill_password(users.valid_user.password)
        login_page.submit()
        if wait_for_manager_url(page, PASSWORD_LOGIN_WAIT_MS):
            return
        logger.warning("Password login did not reach the manager, trying Microsoft SSO")

    login_with_microsoft(page, login_page, sso_credentials)

    if MICROSOFT_LOGIN_HOST in page.url:
        raise MfaRequiredError(
            f"Microsoft login did not complete (probably MFA). {AUTH_SETUP_HINT} before running the tests."
        )
    if not wait_for_manager_url(page, SSO_COMPLETION_WAIT_MS):
        raise AuthenticationError(
            f"Manager did not load after Microsoft login, stuck at {page.url}",
            provider="microsoft",
        )


def is_password_login_blocked(login_page: LoginPage) -> bool:
    """Check for the banner saying password access is not authorized."""
    return is_visible_within(login_page.password_blocked_banner().first, 1000)


def login_with_microsoft(page: Page, login_page: LoginPage, credentials: Credentials) -> None:
    """Walk through the Microsoft identity provider pages.

    Raises:
        MfaRequiredError: An "approve sign in" prompt is shown
        AuthenticationError: The password page never shows up
    """
    if is_visible_within(login_page.microsoft_button(), 5000):
        login_page.click_microsoft()

    if not wait_for_url(page, IDENTITY_PROVIDER_URL, 20000):
        raise AuthenticationError(
            f"Microsoft sign-in page did not open. {AUTH_SETUP_HINT}.",
            provider="microsoft",
        )

    maybe_select_account(page, credentials.email)

    is_visible_within(page.get_by_role("heading", name=SIGN_IN_HEADING).first, 20000)

    fill_microsoft_email(page, credentials.email)

    password_input = page.locator(MICROSOFT_PASSWORD_SELECTOR)
    use_password_link = page.get_by_role("link", name=USE_PASSWORD_LINK)
    mfa_heading = page.get_by_role("heading", name=MFA_HEADING).first

    has_password = wait_for_password_or_mfa(page, password_input, use_password_link)

    if has_password and is_visible_within(password_input.first, 5000):
        password_input.first.fill(credentials.password)
        click_first_visible(page.get_by_role("button", name=SIGN_IN_BUTTON))

        if is_visible_within(mfa_heading, 20000):
            raise MfaRequiredError(
                "Microsoft login blocked by MFA after the password. "
                f"{AUTH_SETUP_HINT} or approve the Authenticator request."
            )
    else:
        if is_visible_within(mfa_heading, 2000):
            raise MfaRequiredError()
        raise AuthenticationError(
            f"Could not advance through the Microsoft login. {AUTH_SETUP_HINT} to continue.",
            provider="microsoft",
        )

    handle_stay_signed_in(page)


def fill_microsoft_email(page: Page, email: str) -> None:
    """Type the e-mail on the identity provider page and press Next.

    The provider's inputs react inconsistently to automation, so every
    interaction is best effort.
    """
    resolver = ElementResolver(page)
    email_input = resolver.resolve(MICROSOFT_EMAIL_FIELD)
    if email_input is None:
        logger.debug("No e-mail field on identity provider page")
        return

    _attempt(email_input.click, "E-mail click")
    _attempt(lambda: email_input.fill(""), "E-mail clear")
    _attempt(lambda: email_input.press_sequentially(email, delay=40), "E-mail typing")
    _attempt(lambda: email_input.evaluate(_SET_INPUT_VALUE_JS, email), "E-mail value dispatch")
    _attempt(lambda: email_input.press("Tab"), "E-mail blur")

    next_button = resolver.resolve(MICROSOFT_NEXT_BUTTON)
    if next_button is None:
        _attempt(lambda: email_input.press("Enter"), "E-mail submit")
        return

    _attempt(lambda: expect(next_button).to_be_enabled(timeout=10000), "Next button enable wait")
    if not _attempt(lambda: next_button.click(timeout=10000), "Next click"):
        _attempt(lambda: email_input.press("Enter"), "E-mail submit")


def maybe_select_account(page: Page, email: str) -> None:
    """Pick the remembered account tile, or ask for another account."""
    account_button = page.get_by_role("button", name=literal_pattern(email)).first
    if is_visible_within(account_button, 3000):
        account_button.click()
        return

    use_another = page.get_by_role("button", name=USE_ANOTHER_ACCOUNT).first
    if is_visible_within(use_another, 3000):
        use_another.click()


def handle_stay_signed_in(page: Page) -> None:
    """Answer the "Stay signed in?" prompt, preferring yes."""
    yes_button = page.get_by_role("button", name=STAY_SIGNED_IN_YES).first
    if is_visible_within(yes_button, 5000):
        yes_button.click()
        return

    no_button = page.get_by_role("button", name=STAY_SIGNED_IN_NO).first
    if is_visible_within(no_button, 5000):
        no_button.click()


def wait_for_password_or_mfa(
    page: Page,
    password_input: Locator,
    use_password_link: Locator,
    timeout_ms: float = PASSWORD_OR_MFA_WAIT_MS,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """Poll until the password field appears, switching away from passwordless prompts.

    Returns:
        True if the password field showed up, False on timeout
    """
    start = clock()
    while (clock() - start) * 1000 < timeout_ms:
        if is_visible_within(password_input.first, 1000):
            return True

        if is_visible_within(use_password_link.first, 1000):
            _attempt(lambda: use_password_link.first.click(force=True), "Use password link")

        page.wait_for_timeout(1000)
    return False


def click_first_visible(*locators: Locator) -> bool:
    """Click the first of ``locators`` whose first match becomes visible."""
    for locator in locators:
        if is_visible_within(locator.first, 3000):
            locator.first.click()
            return True
    return False
