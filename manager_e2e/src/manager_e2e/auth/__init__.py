"""Login flows for the manager console."""

from manager_e2e.auth.login import login_as_valid_user, login_with_microsoft

__all__ = ["login_as_valid_user", "login_with_microsoft"]
