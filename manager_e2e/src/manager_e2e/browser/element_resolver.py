"""Multi-strategy element resolution for markup-change resilient targeting."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence, Union

from playwright.sync_api import Error as PlaywrightError

if TYPE_CHECKING:
    from playwright.sync_api import Locator, Page

logger = logging.getLogger(__name__)

TextMatch = Union[str, "re.Pattern[str]"]


class QueryKind(str, Enum):
    """How a candidate query locates its element."""

    ROLE = "role"
    LABEL = "label"
    PLACEHOLDER = "placeholder"
    TEXT = "text"
    CSS = "css"


def _describe(value: TextMatch | None) -> str:
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    return repr(value)


@dataclass(frozen=True)
class CandidateQuery:
    """One way of finding an element, tried in priority order with its siblings.

    Example:
        title_candidates = [
            by_role("textbox", name=re.compile(r"t[ií]tulo", re.I)),
            by_label(re.compile(r"t[ií]tulo", re.I)),
            by_css('input[name*="title" i]'),
        ]
    """

    kind: QueryKind
    value: TextMatch  # Role, label/placeholder/text match, or CSS selector
    name: TextMatch | None = None  # Accessible name (role queries only)
    exact: bool | None = None
    scope: str | None = None  # CSS selector the query is restricted to

    def locate(self, root: Page | Locator) -> Locator:
        """Build the Playwright locator for this query under ``root``."""
        if self.scope:
            root = root.locator(self.scope)

        if self.kind == QueryKind.ROLE:
            kwargs: dict[str, Any] = {}
            if self.name is not None:
                kwargs["name"] = self.name
            if self.exact is not None:
                kwargs["exact"] = self.exact
            return root.get_by_role(self.value, **kwargs)
        if self.kind == QueryKind.LABEL:
            return root.get_by_label(self.value, exact=self.exact)
        if self.kind == QueryKind.PLACEHOLDER:
            return root.get_by_placeholder(self.value, exact=self.exact)
        if self.kind == QueryKind.TEXT:
            return root.get_by_text(self.value, exact=self.exact)
        return root.locator(self.value)

    def __str__(self) -> str:
        text = f"{self.kind.value}={_describe(self.value)}"
        if self.name is not None:
            text += f"[name={_describe(self.name)}]"
        if self.scope:
            text = f"{self.scope} >> {text}"
        return text


def by_role(role: str, name: TextMatch | None = None, exact: bool | None = None, scope: str | None = None) -> CandidateQuery:
    return CandidateQuery(QueryKind.ROLE, role, name=name, exact=exact, scope=scope)


def by_label(text: TextMatch, exact: bool | None = None, scope: str | None = None) -> CandidateQuery:
    return CandidateQuery(QueryKind.LABEL, text, exact=exact, scope=scope)


def by_placeholder(text: TextMatch, exact: bool | None = None, scope: str | None = None) -> CandidateQuery:
    return CandidateQuery(QueryKind.PLACEHOLDER, text, exact=exact, scope=scope)


def by_text(text: TextMatch, exact: bool | None = None, scope: str | None = None) -> CandidateQuery:
    return CandidateQuery(QueryKind.TEXT, text, exact=exact, scope=scope)


def by_css(selector: str, scope: str | None = None) -> CandidateQuery:
    return CandidateQuery(QueryKind.CSS, selector, scope=scope)


def find_first_visible(locator: Locator) -> Locator | None:
    """Return the first visible match of ``locator``, in document order.

    Matches that detach between ``count()`` and the visibility check are
    skipped; a locator that cannot even be counted yields ``None``.
    """
    try:
        count = locator.count()
    except PlaywrightError as e:
        logger.debug(f"Could not count candidates: {e}")
        return None

    for index in range(count):
        candidate = locator.nth(index)
        try:
            if candidate.is_visible():
                return candidate
        except PlaywrightError:
            continue
    return None


def is_visible_now(locator: Locator) -> bool:
    """Check visibility without waiting; a detached or broken locator is not visible."""
    try:
        return locator.is_visible()
    except PlaywrightError:
        return False


def is_visible_within(locator: Locator, timeout_ms: float) -> bool:
    """Wait up to ``timeout_ms`` for ``locator`` to be visible.

    Returns False instead of raising when the wait times out.
    """
    try:
        locator.wait_for(state="visible", timeout=timeout_ms)
        return True
    except PlaywrightError:
        return False


def has_matches(locator: Locator) -> bool:
    """Check whether ``locator`` matches anything, visible or not."""
    try:
        return locator.count() > 0
    except PlaywrightError:
        return False


class ElementResolver:
    """Resolves ordered candidate queries against a page or a container.

    Earlier candidates always win: the first query with a visible match
    decides, even if a later query would be more specific.

    Example:
        resolver = ElementResolver(page)
        if not resolver.fill(title_candidates, "Weekly update"):
            raise ElementNotFoundError("title field", element="title")
    """

    def __init__(self, root: Page | Locator) -> None:
        """Initialize the resolver.

        Args:
            root: Page or locator every candidate is resolved under
        """
        self.root = root

    def resolve(self, candidates: Sequence[CandidateQuery]) -> Locator | None:
        """Return the first visible element across ``candidates``, or None."""
        for query in candidates:
            try:
                locator = query.locate(self.root)
            except PlaywrightError as e:
                logger.debug(f"Skipping {query}: {e}")
                continue
            match = find_first_visible(locator)
            if match is not None:
                logger.debug(f"Resolved via {query}")
                return match
        logger.debug(f"No visible match among {len(candidates)} candidates")
        return None

    def is_present(self, candidates: Sequence[CandidateQuery]) -> bool:
        """Check whether any candidate matches at least one element."""
        for query in candidates:
            try:
                locator = query.locate(self.root)
            except PlaywrightError:
                continue
            if has_matches(locator):
                return True
        return False

    def fill(self, candidates: Sequence[CandidateQuery], value: str) -> bool:
        """Fill the first visible candidate; returns whether a fill happened."""
        element = self.resolve(candidates)
        if element is None:
            return False
        element.fill(value)
        return True

    def click(self, candidates: Sequence[CandidateQuery]) -> bool:
        """Click the first visible candidate; returns whether a click happened."""
        element = self.resolve(candidates)
        if element is None:
            return False
        element.click()
        return True

    def check_or_click(self, candidates: Sequence[CandidateQuery]) -> bool:
        """Check the first visible candidate, clicking it when it is not checkable.

        A candidate that can be neither checked nor clicked hands over to the
        next one.
        """
        for query in candidates:
            try:
                locator = query.locate(self.root)
            except PlaywrightError:
                continue
            element = find_first_visible(locator)
            if element is None:
                continue
            try:
                element.check()
                return True
            except PlaywrightError as e:
                logger.debug(f"check() not applicable to {query}: {e}")
            try:
                element.click()
                return True
            except PlaywrightError as e:
                logger.warning(f"Could not check or click {query}: {e}")
        return False
