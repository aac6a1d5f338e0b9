"""Credential models and the users data file loader."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from manager_e2e.core.exceptions import ValidationError
from manager_e2e.utils.sanitization import mask_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """E-mail and password for one manager account."""

    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={mask_email(self.email)!r}, password='***')"

    @classmethod
    def from_dict(cls, data: dict[str, Any], field_name: str = "validUser") -> "Credentials":
        """Build credentials from a ``{"email": ..., "password": ...}`` mapping.

        Raises:
            ValidationError: If either key is missing or empty.
        """
        if not isinstance(data, dict):
            raise ValidationError(f"{field_name} must be an object", field=field_name)
        email = str(data.get("email") or "").strip()
        password = str(data.get("password") or "")
        if not email:
            raise ValidationError(f"{field_name}.email is required", field=f"{field_name}.email")
        if not password:
            raise ValidationError(f"{field_name}.password is required", field=f"{field_name}.password")
        return cls(email=email, password=password)


@dataclass(frozen=True)
class UsersData:
    """Contents of the users JSON file."""

    valid_user: Credentials

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UsersData":
        if "validUser" not in data:
            raise ValidationError("users file has no validUser entry", field="validUser")
        return cls(valid_user=Credentials.from_dict(data["validUser"]))


_users_cache: dict[Path, UsersData] = {}


def load_users(path: Path | str, use_cache: bool = True) -> UsersData:
    """Load and validate the users file, caching it per resolved path.

    Args:
        path: Location of the JSON file
        use_cache: Reuse a previously parsed file for the same path

    Returns:
        Parsed UsersData

    Raises:
        ValidationError: If the file is missing, malformed, or incomplete
    """
    resolved = Path(path).resolve()
    if use_cache and resolved in _users_cache:
        return _users_cache[resolved]

    if not resolved.exists():
        raise ValidationError(
            f"Users file not found: {resolved}. Set MANAGER_E2E_USERS_FILE or create the file.",
            field="users_file",
            value=str(resolved),
        )
    try:
        with open(resolved, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Users file is not valid JSON: {e}", field="users_file") from e

    users = UsersData.from_dict(raw)
    logger.debug(f"Loaded users from {resolved} (valid user {mask_email(users.valid_user.email)})")
    _users_cache[resolved] = users
    return users


def clear_users_cache() -> None:
    """Forget every cached users file."""
    _users_cache.clear()
