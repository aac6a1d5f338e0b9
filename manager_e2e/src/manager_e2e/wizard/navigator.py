"""Polling traversal of creation wizards with unknown step order."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Collection, Mapping

from manager_e2e.wizard.states import StepSnapshot, WizardStep, classify
from manager_e2e.wizard.steps import TRANSITIONS, StepAction, probe_page

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000
POLL_INTERVAL_MS = 500


class WizardNavigator:
    """Drives a creation wizard forward until a target step shows up.

    Every tick reclassifies the whole page instead of tracking where it
    came from, so a page that regresses is simply handled again. The only
    bound is the wall-clock timeout.

    Example:
        >>> navigator = WizardNavigator(page, data_collection=False)
        >>> if not navigator.advance_to_content():
        ...     raise WizardNavigationError("content step not reached")
    """

    def __init__(
        self,
        page: Page,
        data_collection: bool = False,
        probe: Callable[[Page], StepSnapshot] = probe_page,
        transitions: Mapping[WizardStep, StepAction] | None = None,
        clock: Callable[[], float] = time.monotonic,
        poll_interval_ms: float = POLL_INTERVAL_MS,
    ) -> None:
        """Initialize the navigator.

        Args:
            page: Page showing the wizard
            data_collection: Whether the content type collects answers
            probe: Reads the step markers from the page
            transitions: Action performed on each actionable step
            clock: Monotonic clock in seconds
            poll_interval_ms: Wait between ticks that classify nothing
        """
        self.page = page
        self.data_collection = data_collection
        self._probe = probe
        self._transitions = dict(TRANSITIONS if transitions is None else transitions)
        self._clock = clock
        self._poll_interval_ms = poll_interval_ms

    def current_step(self) -> WizardStep:
        """Classify the step currently displayed."""
        return classify(self._probe(self.page))

    def advance_until(
        self,
        stop_at: Collection[WizardStep],
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
    ) -> WizardStep | None:
        """Advance through the wizard until one of ``stop_at`` is displayed.

        Transition action failures propagate and abort the traversal.

        Returns:
            The step that stopped the traversal, or None on timeout
        """
        start = self._clock()
        while (self._clock() - start) * 1000 < timeout_ms:
            step = self.current_step()
            if step in stop_at:
                logger.info(f"Wizard reached {step.value}")
                return step

            action = self._transitions.get(step)
            if action is None:
                self.page.wait_for_timeout(self._poll_interval_ms)
                continue

            logger.info(f"Completing wizard step {step.value}")
            action(self.page, self.data_collection)

        logger.warning(f"Wizard did not reach {sorted(s.value for s in stop_at)} within {timeout_ms}ms")
        return None

    def advance_to_content(self, timeout_ms: float = DEFAULT_TIMEOUT_MS) -> bool:
        """Advance until the content step; returns False on timeout."""
        return self.advance_until({WizardStep.CONTENT}, timeout_ms) is not None


def advance_to_content(page: Page, data_collection: bool, timeout_ms: float = DEFAULT_TIMEOUT_MS) -> bool:
    """Shortcut for ``WizardNavigator(page, data_collection).advance_to_content()``."""
    return WizardNavigator(page, data_collection).advance_to_content(timeout_ms)
