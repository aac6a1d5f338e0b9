"""Dismissal of transient dialogs such as the image crop/adjust modal."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from playwright.sync_api import Error as PlaywrightError

from manager_e2e.browser.element_resolver import (
    find_first_visible,
    is_visible_now,
    is_visible_within,
)

if TYPE_CHECKING:
    from playwright.sync_api import Locator, Page

logger = logging.getLogger(__name__)

DIALOG_SELECTOR = 'dialog, [role="dialog"], .MuiDialog-root, .MuiModal-root, .ReactModal__Content'

CROP_HEADING = re.compile(r"ajuste de imagem", re.IGNORECASE)
CROP_DIALOG_TEXT = re.compile(r"ajuste de imagem|recorte|crop", re.IGNORECASE)
CONTINUE_LABEL = re.compile(r"continuar", re.IGNORECASE)
CONFIRM_LABEL = re.compile(
    r"salvar|aplicar|confirmar|concluir|\bok\b|confirmar recorte|recortar|cortar",
    re.IGNORECASE,
)
CLOSE_LABEL = re.compile(r"fechar|cancelar|^\s*[x×]\s*$", re.IGNORECASE)
ICON_BUTTON_SELECTOR = (
    '[aria-label*="aplicar" i], [aria-label*="confirm" i], [aria-label*="salvar" i], '
    '[title*="aplicar" i], [title*="confirm" i]'
)

DIALOG_GONE_TIMEOUT_MS = 5000


class DismissAction(str, Enum):
    """Which kind of control closed the dialog."""

    CONTINUE = "continue"
    CONFIRM = "confirm"
    CLOSE = "close"
    ICON_BUTTON = "icon_button"
    LAST_NATIVE_BUTTON = "last_native_button"
    LAST_ROLE_BUTTON = "last_role_button"
    KEYBOARD = "keyboard"


@dataclass(frozen=True)
class DismissRule:
    """One row of the dismissal decision table.

    Attributes:
        action: Kind of control this row targets
        find: Builds the candidate locator inside the dialog
        pick_last: Take the last match instead of the first
    """

    action: DismissAction
    find: Callable[[Locator], Locator]
    pick_last: bool = False


# Evaluated top to bottom; the first row with any match wins.
DISMISS_RULES: tuple[DismissRule, ...] = (
    DismissRule(DismissAction.CONTINUE, lambda d: d.get_by_role("button", name=CONTINUE_LABEL)),
    DismissRule(DismissAction.CONFIRM, lambda d: d.get_by_role("button", name=CONFIRM_LABEL)),
    DismissRule(DismissAction.CLOSE, lambda d: d.get_by_role("button", name=CLOSE_LABEL)),
    DismissRule(DismissAction.ICON_BUTTON, lambda d: d.locator(ICON_BUTTON_SELECTOR)),
    DismissRule(DismissAction.LAST_NATIVE_BUTTON, lambda d: d.locator("button"), pick_last=True),
    DismissRule(DismissAction.LAST_ROLE_BUTTON, lambda d: d.get_by_role("button"), pick_last=True),
)


def choose_dismiss_action(
    dialog: Locator,
    rules: tuple[DismissRule, ...] = DISMISS_RULES,
) -> tuple[DismissRule, Locator] | None:
    """Pick the control that should close ``dialog``.

    Returns:
        The winning rule and the element to click, or None when no row of
        the table matches (callers fall back to the keyboard).
    """
    for rule in rules:
        locator = rule.find(dialog)
        try:
            count = locator.count()
        except PlaywrightError as e:
            logger.debug(f"Dismiss rule {rule.action.value} failed to count: {e}")
            continue
        if count:
            target = locator.nth(count - 1) if rule.pick_last else locator.first
            return rule, target
    return None


def wait_until_gone(target: Locator, timeout_ms: float = DIALOG_GONE_TIMEOUT_MS) -> None:
    """Wait for ``target`` to be hidden and then detached, ignoring timeouts."""
    for state in ("hidden", "detached"):
        try:
            target.wait_for(state=state, timeout=timeout_ms)
        except PlaywrightError:
            logger.debug(f"Dialog did not become {state} within {timeout_ms}ms")


def dismiss_dialog(page: Page, dialog: Locator) -> DismissAction:
    """Close ``dialog`` with the highest-priority control available.

    Click failures on the chosen control propagate; the waits for the dialog
    to disappear do not.
    """
    choice = choose_dismiss_action(dialog)
    if choice is not None:
        rule, target = choice
        logger.info(f"Dismissing dialog via {rule.action.value}")
        target.click(force=True)
        wait_until_gone(dialog)
        return rule.action

    logger.warning("No dialog control found, falling back to the keyboard")
    try:
        page.keyboard.press("Enter")
        if dialog.is_visible():
            page.keyboard.press("Escape")
    except PlaywrightError as e:
        logger.debug(f"Keyboard dismissal failed: {e}")
    wait_until_gone(dialog)
    return DismissAction.KEYBOARD


def dismiss_crop_dialog_if_present(page: Page, timeout_ms: float = 5000) -> bool:
    """Close the image adjust dialog (or any open dialog) if one shows up.

    The crop dialog appears non-deterministically after a media upload, so
    this waits up to ``timeout_ms`` for a crop dialog and then up to
    ``timeout_ms`` for any dialog. The heading and "continuar" checks are
    instant.

    Args:
        page: Current page
        timeout_ms: How long to wait for a dialog to appear

    Returns:
        True if a dialog was dismissed
    """
    crop_heading = page.get_by_text(CROP_HEADING).first
    if is_visible_now(crop_heading):
        continue_button = page.get_by_role("button", name=CONTINUE_LABEL).first
        if is_visible_now(continue_button):
            logger.info("Confirming image adjust dialog")
            continue_button.click(force=True)
            wait_until_gone(crop_heading, 10000)
            return True

    dialogs = page.locator(DIALOG_SELECTOR)

    global_continue = page.get_by_role("button", name=CONTINUE_LABEL).first
    if is_visible_now(global_continue):
        logger.info("Clicking page-level continue button")
        global_continue.click(force=True)
        wait_until_gone(dialogs.first)
        return True

    crop_dialog = dialogs.filter(has_text=CROP_DIALOG_TEXT)
    if not is_visible_within(crop_dialog.first, timeout_ms):
        if not is_visible_within(dialogs.first, timeout_ms):
            return False

    active = find_first_visible(crop_dialog) or find_first_visible(dialogs)
    if active is None:
        return False

    dismiss_dialog(page, active)
    return True
