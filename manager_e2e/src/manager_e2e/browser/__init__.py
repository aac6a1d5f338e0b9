"""Element resolution, dialog handling and URL checks on top of Playwright."""

from manager_e2e.browser.dialogs import (
    DISMISS_RULES,
    DismissAction,
    DismissRule,
    choose_dismiss_action,
    dismiss_crop_dialog_if_present,
    dismiss_dialog,
)
from manager_e2e.browser.element_resolver import (
    CandidateQuery,
    ElementResolver,
    QueryKind,
    by_css,
    by_label,
    by_placeholder,
    by_role,
    by_text,
    find_first_visible,
)
from manager_e2e.browser.verification import MANAGER_URL, is_login_url, is_manager_url

__all__ = [
    "CandidateQuery",
    "ElementResolver",
    "QueryKind",
    "by_css",
    "by_label",
    "by_placeholder",
    "by_role",
    "by_text",
    "find_first_visible",
    "DISMISS_RULES",
    "DismissAction",
    "DismissRule",
    "choose_dismiss_action",
    "dismiss_crop_dialog_if_present",
    "dismiss_dialog",
    "MANAGER_URL",
    "is_login_url",
    "is_manager_url",
]
