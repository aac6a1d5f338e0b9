"""Publication workflows driven through the manager creation wizards."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from playwright.sync_api import Error as PlaywrightError

from manager_e2e.auth.login import login_as_valid_user
from manager_e2e.browser.dialogs import dismiss_crop_dialog_if_present
from manager_e2e.browser.verification import is_login_url
from manager_e2e.core.config import LoginOptions
from manager_e2e.core.exceptions import (
    AUTH_SETUP_HINT,
    ElementNotFoundError,
    SessionExpiredError,
    WizardNavigationError,
)
from manager_e2e.models.communications import POLL, SIMPLE_POST_PATH, STANDARD_TEXT, PostType
from manager_e2e.models.results import PublicationResult, Status
from manager_e2e.pages.communication_form import CommunicationForm
from manager_e2e.utils.retry import RetryPolicy, retry_call
from manager_e2e.wizard.navigator import DEFAULT_TIMEOUT_MS, WizardNavigator
from manager_e2e.wizard.states import WizardStep
from manager_e2e.wizard.steps import TRANSITIONS, expect_segmentation_step

if TYPE_CHECKING:
    from playwright.sync_api import Page

    from manager_e2e.models.users import UsersData

logger = logging.getLogger(__name__)

GOTO_ATTEMPTS = 3
GOTO_TIMEOUT_MS = 30000
CROP_AFTER_UPLOAD_MS = 20000
CROP_AFTER_NEXT_MS = 15000
DISPLAY_DURATION = "5 dias"
VIDEO_SUFFIXES = (".mp4", ".mov", ".webm")

TV_STEP = re.compile(r"tv", re.I)
APP_STEP = re.compile(r"aplicativo", re.I)
PUBLICATION_STEP = re.compile(r"publica[cç][aã]o", re.I)
NOTIFICATION_HIGHLIGHT = re.compile(r"destaque com notifica[cç][aã]o", re.I)
PIN_TO_TOP = re.compile(r"fixar no topo.*app", re.I)
SHOW_PARTIAL_RESULTS = re.compile(r"mostrar resultados parciais", re.I)

# The initial flow stops at segmentation instead of completing it
INITIAL_FLOW_TRANSITIONS = {
    step: action for step, action in TRANSITIONS.items() if step != WizardStep.SEGMENTATION
}


def _is_aborted_navigation(error: Exception) -> bool:
    return "ERR_ABORTED" in str(error)


def safe_goto(page: Page, path: str, attempts: int = GOTO_ATTEMPTS) -> None:
    """Navigate to ``path``, retrying loads aborted by client-side redirects.

    Only ``ERR_ABORTED`` failures are retried, one second apart.

    Raises:
        SessionExpiredError: If the navigation lands on the login page
        RetryExhaustedError: If every attempt was aborted
    """

    def navigate() -> None:
        page.goto(path, wait_until="domcontentloaded", timeout=GOTO_TIMEOUT_MS)
        if is_login_url(page.url):
            raise SessionExpiredError(
                f"Session expired while opening {path}. {AUTH_SETUP_HINT}.",
                url=page.url,
            )

    retry_call(
        navigate,
        RetryPolicy(attempts=attempts, delay=1.0, factor=1.0),
        retry_on=(PlaywrightError,),
        should_retry=_is_aborted_navigation,
        sleep=lambda seconds: page.wait_for_timeout(seconds * 1000),
    )


class PublicationWorkflow:
    """Creates communications end to end for one logged-in page.

    Example:
        >>> workflow = PublicationWorkflow(page, users)
        >>> result = workflow.publish_simple_post("Post simples - com imagem", media.image)
        >>> assert result.is_published
    """

    def __init__(
        self,
        page: Page,
        users: UsersData,
        options: LoginOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the workflow.

        Args:
            page: Page whose context has the suite's base URL
            users: Credentials from the users file
            options: Login switches
            clock: Monotonic clock in seconds
        """
        self.page = page
        self.users = users
        self.options = options or LoginOptions()
        self.form = CommunicationForm(page, clock=clock)
        self._clock = clock

    def login(self) -> None:
        login_as_valid_user(self.page, self.users, self.options)

    def _advance_to_content(self, data_collection: bool, description: str) -> None:
        navigator = WizardNavigator(self.page, data_collection, clock=self._clock)
        if not navigator.advance_to_content():
            raise WizardNavigationError(
                f"Could not reach the content step of {description}",
                target_step=WizardStep.CONTENT.value,
                path=self.page.url,
            )

    def publish_simple_post(self, label: str, media: Path | str | None = None) -> PublicationResult:
        """Publish a simple post, optionally with an image, GIF or video.

        Args:
            label: Type label used in the title, e.g. "Post simples - com GIF"
            media: Media file to attach

        Returns:
            PublicationResult with status PUBLISHED

        Raises:
            WizardNavigationError: If a wizard step cannot be reached
            ElementNotFoundError: If the upload or duration control is missing
            UploadTimeoutError: If a video upload never finishes
        """
        start = self._clock()
        self.login()
        safe_goto(self.page, SIMPLE_POST_PATH)
        self._advance_to_content(False, "the simple post")

        title = self.form.fill_title_and_body_for_type(label)

        if media is not None:
            if not self.form.upload_media_file(media):
                raise ElementNotFoundError("Could not attach media to the simple post", element="file input")
            dismiss_crop_dialog_if_present(self.page, CROP_AFTER_UPLOAD_MS)
            self.form.scroll_to_bottom()

        self.form.click_next_or_step(TV_STEP, CROP_AFTER_NEXT_MS if media is not None else 0)

        if not self.form.is_option_visible(NOTIFICATION_HIGHLIGHT):
            self.form.click_next_or_step(APP_STEP)

        self.form.enable_option_by_label(NOTIFICATION_HIGHLIGHT)
        self.form.enable_option_by_label(PIN_TO_TOP)

        self.form.click_next_or_step(PUBLICATION_STEP)

        if not self.form.select_display_duration(DISPLAY_DURATION):
            raise ElementNotFoundError(
                f"Display duration {DISPLAY_DURATION!r} not found",
                element="display duration",
            )

        self.form.publish()
        if media is not None and Path(media).suffix.lower() in VIDEO_SUFFIXES:
            self.form.wait_for_upload_progress_to_finish()
        self.form.wait_for_publication_card(title)

        logger.info(f"Published {label!r}")
        return PublicationResult(
            post_type=label,
            status=Status.PUBLISHED,
            title=title,
            media=Path(media).name if media is not None else "",
            duration_seconds=self._clock() - start,
        )

    def publish_poll(self) -> PublicationResult:
        """Log in, open the poll wizard and publish a poll."""
        start = self._clock()
        self.login()
        safe_goto(self.page, POLL.path)
        return self._complete_poll(start)

    def _complete_poll(self, start: float) -> PublicationResult:
        self._advance_to_content(True, "the poll")

        title = self.form.fill_title_and_body_for_type(POLL.name)
        self.form.open_alternatives_and_fill(STANDARD_TEXT)
        self.form.click_next()

        self.form.enable_option_by_label(SHOW_PARTIAL_RESULTS)
        self.form.enable_option_by_label(NOTIFICATION_HIGHLIGHT)
        self.form.enable_option_by_label(PIN_TO_TOP)
        self.form.click_next()

        if not self.form.select_display_duration(DISPLAY_DURATION):
            logger.warning(f"Display duration {DISPLAY_DURATION!r} not offered for the poll")

        self.form.publish()
        self.form.wait_for_publication_card(title)

        logger.info(f"Published {POLL.name!r}")
        return PublicationResult(
            post_type=POLL.name,
            status=Status.PUBLISHED,
            title=title,
            duration_seconds=self._clock() - start,
        )

    def run_initial_flow(self, post_type: PostType, timeout_ms: float = DEFAULT_TIMEOUT_MS) -> PublicationResult:
        """Walk a creation wizard until its content or segmentation step.

        The poll is published end to end. Other types stop at the first of
        content (title and body filled) or segmentation (asserted visible).

        Raises:
            WizardNavigationError: If neither step shows up within ``timeout_ms``
        """
        start = self._clock()
        self.login()
        safe_goto(self.page, post_type.path)

        if post_type == POLL:
            return self._complete_poll(start)

        navigator = WizardNavigator(
            self.page,
            post_type.data_collection,
            transitions=INITIAL_FLOW_TRANSITIONS,
            clock=self._clock,
        )
        step = navigator.advance_until({WizardStep.CONTENT, WizardStep.SEGMENTATION}, timeout_ms)

        if step == WizardStep.CONTENT:
            title = self.form.fill_title_and_body_for_type(post_type.name)
            return PublicationResult(
                post_type=post_type.name,
                status=Status.CONTENT_FILLED,
                title=title,
                duration_seconds=self._clock() - start,
            )

        if step == WizardStep.SEGMENTATION:
            expect_segmentation_step(self.page)
            return PublicationResult(
                post_type=post_type.name,
                status=Status.SEGMENTATION_REACHED,
                duration_seconds=self._clock() - start,
            )

        raise WizardNavigationError(
            f"Could not reach the segmentation step of {post_type.name}",
            target_step=WizardStep.SEGMENTATION.value,
            path=post_type.path,
        )


def publish_simple_post(
    page: Page,
    users: UsersData,
    label: str,
    media: Path | str | None = None,
    options: LoginOptions | None = None,
) -> PublicationResult:
    return PublicationWorkflow(page, users, options).publish_simple_post(label, media)


def publish_poll(page: Page, users: UsersData, options: LoginOptions | None = None) -> PublicationResult:
    return PublicationWorkflow(page, users, options).publish_poll()


def run_initial_flow(
    page: Page,
    users: UsersData,
    post_type: PostType,
    options: LoginOptions | None = None,
) -> PublicationResult:
    return PublicationWorkflow(page, users, options).run_initial_flow(post_type)
