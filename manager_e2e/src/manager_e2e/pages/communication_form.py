"""Page object for the content and publication steps of a creation wizard."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from playwright.sync_api import Error as PlaywrightError

from manager_e2e.browser.dialogs import dismiss_crop_dialog_if_present
from manager_e2e.browser.element_resolver import (
    ElementResolver,
    by_role,
    by_text,
    find_first_visible,
    has_matches,
    is_visible_within,
)
from manager_e2e.core.exceptions import UploadTimeoutError, WizardNavigationError
from manager_e2e.models.communications import STANDARD_TEXT
from manager_e2e.pages import locators
from manager_e2e.utils.sanitization import build_post_title, literal_pattern
from manager_e2e.wizard.steps import click_next

if TYPE_CHECKING:
    from playwright.sync_api import Locator, Page

logger = logging.getLogger(__name__)

MAX_BODY_LENGTH = 10000
BODY_LIMIT_MESSAGE = re.compile(r"ultrapassa o n[uú]mero m[aá]ximo de caracteres", re.I)
COMMUNICATIONS_HEADING = re.compile(r"comunica[cç][oõ]es", re.I)
PARTIAL_RESULTS_LABEL = re.compile(r"resultados parciais", re.I)
UPLOAD_TIMEOUT_MS = 120000


def _upload_percent(value: str | None) -> float:
    """Parse ``aria-valuenow``; anything unreadable counts as not started."""
    try:
        return float(value) if value else 0.0
    except ValueError:
        return 0.0


class CommunicationForm:
    """Content step helpers for every communication type.

    Optional controls (toggles, duration pickers) are probed before use and
    reported as absent instead of raising.

    Example:
        form = CommunicationForm(page)
        title = form.fill_title_and_body_for_type("Post simples")
        form.click_next_or_step(re.compile("tv", re.I))
    """

    def __init__(self, page: Page, clock: Callable[[], float] = time.monotonic) -> None:
        self.page = page
        self.resolver = ElementResolver(page)
        self._clock = clock

    # -------------------------------------------------------------------------
    # Content fields
    # -------------------------------------------------------------------------

    def get_title_field(self) -> Locator | None:
        return self.resolver.resolve(locators.TITLE_FIELD)

    def get_body_field(self) -> Locator | None:
        return self.resolver.resolve(locators.BODY_FIELD)

    def fill_title_and_body_for_type(self, type_label: str, body: str = STANDARD_TEXT) -> str:
        """Fill a unique, timestamped title and the standard body.

        Returns:
            The title typed, used later to find the publication card
        """
        title_value = build_post_title(STANDARD_TEXT, type_label)
        title = self.get_title_field()
        if title is not None:
            title.fill(title_value)
        else:
            logger.debug(f"{type_label}: no title field on content step")

        body_field = self.get_body_field()
        if body_field is not None:
            body_field.fill(body)
        return title_value

    def open_alternatives_and_fill(self, text: str) -> bool:
        """Open the alternatives panel and fill the first answer option.

        Falls back to adding a new option, then to the first empty textbox.
        """
        self.resolver.click(locators.ALTERNATIVES_TOGGLE)

        if self.resolver.fill(locators.OPTION_FIELD, text):
            return True

        if self.resolver.click(locators.ADD_OPTION_BUTTON) and self.resolver.fill(locators.OPTION_FIELD, text):
            return True

        textboxes = self.page.get_by_role("textbox")
        for index in range(textboxes.count()):
            candidate = textboxes.nth(index)
            try:
                if not candidate.input_value():
                    candidate.fill(text)
                    return True
            except PlaywrightError:
                continue

        logger.warning("No answer option field found")
        return False

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def enable_option_by_label(self, label: re.Pattern[str]) -> bool:
        """Switch on an optional setting (switch, checkbox, or clickable label).

        Returns:
            False if the option is not offered on this page
        """
        toggle = self.page.get_by_role("switch", name=label)
        if has_matches(toggle) and is_visible_within(toggle.first, 1000):
            if toggle.first.get_attribute("aria-checked") != "true":
                toggle.first.click()
            return True

        checkbox = self.page.get_by_role("checkbox", name=label)
        if has_matches(checkbox):
            if not checkbox.first.is_checked():
                checkbox.first.click()
            return True

        text = self.page.get_by_text(label)
        if has_matches(text):
            text.first.click()
            return True

        logger.debug(f"Option {label.pattern!r} not offered")
        return False

    def disable_partial_results_if_present(self) -> bool:
        """Turn off "resultados parciais" where the type offers it."""
        toggle = self.page.get_by_role("switch", name=PARTIAL_RESULTS_LABEL)
        if has_matches(toggle):
            if toggle.first.get_attribute("aria-checked") == "true":
                toggle.first.click()
            return True

        checkbox = self.page.get_by_role("checkbox", name=PARTIAL_RESULTS_LABEL)
        if has_matches(checkbox):
            if checkbox.first.is_checked():
                checkbox.first.click()
            return True

        label = self.page.get_by_text(PARTIAL_RESULTS_LABEL)
        if has_matches(label):
            label.first.click()
            return True

        return False

    def select_display_duration(self, option_text: str) -> bool:
        """Choose how long the communication is displayed (e.g. "5 dias").

        Returns:
            False if no duration control exists
        """
        option_label = literal_pattern(option_text)

        combo = self.page.get_by_role("combobox", name=locators.DISPLAY_DURATION_TEXT)
        if has_matches(combo):
            combo.first.click()
            self.resolver.click([
                by_role("option", name=option_label),
                by_text(option_label),
            ])
            return True

        select = self.page.get_by_label(locators.DISPLAY_DURATION_TEXT)
        if has_matches(select):
            select.first.select_option(label=option_text)
            return True

        radio = self.page.get_by_role("radio", name=option_label)
        if has_matches(radio):
            radio.first.click()
            return True

        button = self.page.get_by_role(
            "button", name=re.compile(r"sempre|prazo de exibi[cç][aã]o", re.I)
        ).first
        if has_matches(button):
            button.click()
            clicked = self.resolver.click([
                by_role("menuitem", name=option_label),
                by_role("option", name=option_label),
                by_text(option_label),
            ])
            if clicked:
                try:
                    self.page.keyboard.press("Escape")
                    self.page.mouse.click(5, 5)
                except PlaywrightError as e:
                    logger.debug(f"Could not close duration menu: {e}")
            return True

        return False

    # -------------------------------------------------------------------------
    # Media
    # -------------------------------------------------------------------------

    def upload_media_file(self, file_path: Path | str) -> bool:
        """Attach a media file through the file input or the file chooser.

        Returns:
            False if the page has no upload control
        """
        file_input = self.page.locator('input[type="file"]')
        if has_matches(file_input):
            file_input.first.set_input_files(str(file_path))
            logger.info(f"Attached {Path(file_path).name}")
            return True

        file_button = self.page.get_by_role("button", name=locators.FILE_BUTTON_LABEL).first
        if has_matches(file_button):
            with self.page.expect_file_chooser() as chooser_info:
                file_button.click()
            chooser_info.value.set_files(str(file_path))
            logger.info(f"Attached {Path(file_path).name} via file chooser")
            return True

        return False

    def wait_for_upload_progress_to_finish(self, timeout_ms: float = UPLOAD_TIMEOUT_MS) -> bool:
        """Wait for the upload progress bar to complete and disappear.

        Returns:
            False if no progress bar showed up at all

        Raises:
            UploadTimeoutError: If the upload is still running after ``timeout_ms``
        """
        progress = self.page.get_by_role("progressbar").first
        if not is_visible_within(progress, 2000):
            return False

        start = self._clock()
        while (self._clock() - start) * 1000 < timeout_ms:
            try:
                if not progress.is_visible():
                    return True
                value = progress.get_attribute("aria-valuenow")
            except PlaywrightError:
                return True
            if _upload_percent(value) >= 100:
                try:
                    progress.wait_for(state="hidden", timeout=10000)
                except PlaywrightError:
                    logger.debug("Progress bar stayed visible after reaching 100%")
                return True
            self.page.wait_for_timeout(1000)

        raise UploadTimeoutError(timeout_ms=int(timeout_ms))

    # -------------------------------------------------------------------------
    # Navigation and publication
    # -------------------------------------------------------------------------

    def _click_visible_next(self) -> bool:
        next_button = find_first_visible(self.page.get_by_role("button", name=locators.NEXT_LABEL))
        if next_button is None:
            return False
        next_button.click()
        return True

    def _next_then_crop(self, crop_timeout_ms: float) -> bool:
        if not self._click_visible_next():
            return False
        if crop_timeout_ms > 0 and dismiss_crop_dialog_if_present(self.page, crop_timeout_ms):
            self._click_visible_next()
        return True

    def click_next_or_step(self, step_label: re.Pattern[str], crop_timeout_ms: float = 0) -> None:
        """Advance with "Próximo", or by clicking the named step tab.

        Any crop dialog in the way is dismissed first. Scrolls to the bottom
        once before giving up.

        Raises:
            WizardNavigationError: If neither control can be found
        """
        step_candidates = self.page.get_by_role("button", name=step_label)

        dismiss_crop_dialog_if_present(self.page, 1500)
        if self._next_then_crop(crop_timeout_ms):
            return

        step_button = find_first_visible(step_candidates)
        if step_button is not None:
            step_button.click()
            return

        dismiss_crop_dialog_if_present(self.page, 1500)
        self.scroll_to_bottom()

        if self._next_then_crop(crop_timeout_ms):
            return

        step_button = find_first_visible(step_candidates)
        if step_button is not None:
            step_button.click()
            return

        raise WizardNavigationError(
            f"Could not advance to step {step_label.pattern!r}",
            target_step=step_label.pattern,
        )

    def click_next(self) -> None:
        click_next(self.page)

    def scroll_to_bottom(self) -> None:
        try:
            self.page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        except PlaywrightError as e:
            logger.debug(f"Scroll failed: {e}")

    def is_option_visible(self, label: re.Pattern[str]) -> bool:
        try:
            return self.page.get_by_text(label).first.is_visible()
        except PlaywrightError:
            return False

    def publish(self) -> None:
        """Click "Publicar"."""
        self.page.get_by_role("button", name=locators.PUBLISH_LABEL).first.click()

    def wait_for_publication_card(self, title: str) -> None:
        """Wait for the communications list to show the card for ``title``.

        Raises:
            playwright.sync_api.TimeoutError: If the card never appears
        """
        self.page.get_by_role("heading", name=COMMUNICATIONS_HEADING).first.wait_for(timeout=30000)
        card = self.page.get_by_role("button", name=literal_pattern(title)).first
        if is_visible_within(card, 10000):
            return
        self.page.get_by_text(title).first.wait_for(timeout=20000)
