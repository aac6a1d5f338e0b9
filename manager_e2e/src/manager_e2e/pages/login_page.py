"""Page object for the manager login page."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.sync_api import Page

MICROSOFT_BUTTON_LABEL = re.compile(r"entrar com microsoft", re.I)
PASSWORD_LOGIN_BLOCKED = re.compile(r"Acesso por senha não autorizado", re.I)


class LoginPage:
    """E-mail/password and "Entrar com Microsoft" controls."""

    def __init__(self, page: Page) -> None:
        self.page = page

    def go(self) -> None:
        self.page.goto("/login")

    def fill_email(self, email: str) -> None:
        self.page.get_by_label("E-mail").fill(email)

    def fill_password(self, password: str) -> None:
        self.page.get_by_label("Senha").fill(password)

    def submit(self) -> None:
        self.page.click('button[type="submit"]')

    def microsoft_button(self):
        return self.page.get_by_role("button", name=MICROSOFT_BUTTON_LABEL)

    def click_microsoft(self) -> None:
        self.microsoft_button().click()

    def password_blocked_banner(self):
        return self.page.get_by_text(PASSWORD_LOGIN_BLOCKED)
