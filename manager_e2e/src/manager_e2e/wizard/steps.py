"""Step markers and transition actions for the creation wizard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from playwright.sync_api import expect

from manager_e2e.browser.element_resolver import ElementResolver, has_matches
from manager_e2e.models.communications import EDITORIA_NAME
from manager_e2e.pages import locators
from manager_e2e.wizard.states import StepSnapshot, WizardStep

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = logging.getLogger(__name__)

NEXT_ENABLED_TIMEOUT_MS = 10000

StepAction = Callable[["Page", bool], None]


# =============================================================================
# Markers
# =============================================================================


def is_content_step_visible(page: Page) -> bool:
    return ElementResolver(page).resolve(locators.CONTENT_MARKERS) is not None


def is_channel_step_visible(page: Page) -> bool:
    return ElementResolver(page).is_present(locators.CHANNELS_MARKERS)


def is_category_step_visible(page: Page) -> bool:
    return ElementResolver(page).is_present(locators.CATEGORY_MARKERS)


def is_segmentation_step_visible(page: Page) -> bool:
    return ElementResolver(page).is_present(locators.SEGMENTATION_MARKERS)


def probe_page(page: Page) -> StepSnapshot:
    """Read every step marker currently on the page."""
    return StepSnapshot(
        content=is_content_step_visible(page),
        channels=is_channel_step_visible(page),
        category=is_category_step_visible(page),
        segmentation=is_segmentation_step_visible(page),
    )


# =============================================================================
# Actions
# =============================================================================


def click_next(page: Page) -> None:
    """Click the wizard's "Próximo" button once it is visible and enabled.

    Raises:
        AssertionError: If the button never becomes visible or enabled
    """
    next_button = page.get_by_role("button", name=locators.NEXT_LABEL).first
    expect(next_button).to_be_visible()
    expect(next_button).to_be_enabled()
    next_button.click()


def wait_for_next_enabled(page: Page, timeout_ms: float = NEXT_ENABLED_TIMEOUT_MS) -> None:
    next_button = page.get_by_role("button", name=locators.NEXT_LABEL).first
    expect(next_button).to_be_enabled(timeout=timeout_ms)


def select_channels(page: Page, data_collection: bool) -> bool:
    """Select the app channel, plus TV for types that do not collect data.

    Returns:
        Whether the app channel was selected
    """
    resolver = ElementResolver(page)
    app_selected = resolver.check_or_click(locators.APP_CHANNEL)
    if not app_selected:
        logger.warning("App channel option not found")

    if not data_collection:
        if not resolver.check_or_click(locators.TV_CHANNEL):
            logger.debug("TV channel option not offered")

    return app_selected


def select_editoria(page: Page) -> bool:
    """Pick the default editoria on the category step.

    Tries the combobox first, then the editoria card, then a bare option.

    Returns:
        Whether the editoria was selected
    """
    resolver = ElementResolver(page)

    if resolver.click(locators.EDITORIA_COMBO):
        resolver.click(locators.EDITORIA_OPTION)
        wait_for_next_enabled(page)
        return True

    card = page.get_by_text(EDITORIA_NAME).first
    if has_matches(card):
        card.scroll_into_view_if_needed()
        card.click()
        wait_for_next_enabled(page)
        return True

    if resolver.click(locators.EDITORIA_OPTION[:1]):
        wait_for_next_enabled(page)
        return True

    logger.warning(f"Editoria {EDITORIA_NAME!r} not found")
    return False


def select_default_segmentation(page: Page) -> bool:
    """Target everyone on the segmentation step.

    Falls back to the first checkbox in the main area.
    """
    if ElementResolver(page).check_or_click(locators.EVERYONE_SEGMENT):
        return True

    fallback = page.locator("main").get_by_role("checkbox").first
    if has_matches(fallback):
        logger.info("Everyone option not found, using first segmentation checkbox")
        fallback.click()
        return True

    return False


def expect_segmentation_step(page: Page) -> None:
    """Assert that the segmentation step is on screen."""
    heading = page.get_by_role("heading", name=locators.SEGMENTATION_TEXT)
    if has_matches(heading):
        expect(heading.first).to_be_visible()
        return

    expect(page.locator("main").get_by_text(locators.SEGMENTATION_TEXT).first).to_be_visible()


def _channels_then_next(page: Page, data_collection: bool) -> None:
    select_channels(page, data_collection)
    click_next(page)


def _editoria_then_next(page: Page, data_collection: bool) -> None:
    select_editoria(page)
    click_next(page)


def _segmentation_then_next(page: Page, data_collection: bool) -> None:
    select_default_segmentation(page)
    click_next(page)


TRANSITIONS: dict[WizardStep, StepAction] = {
    WizardStep.CHANNELS: _channels_then_next,
    WizardStep.CATEGORY: _editoria_then_next,
    WizardStep.SEGMENTATION: _segmentation_then_next,
}
