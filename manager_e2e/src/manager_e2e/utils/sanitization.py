"""Text helpers for titles, patterns and safe logging."""

import re
from datetime import datetime, timezone


def mask_email(email: str | None) -> str:
    """Mask the local part of an e-mail address for log output.

    Args:
        email: Address to mask

    Returns:
        ``j***@example.com`` style string, or an empty string
    """
    if not email:
        return ""
    local, sep, domain = email.partition("@")
    if not sep:
        return local[:1] + "***"
    return f"{local[:1]}***@{domain}"


def literal_pattern(text: str, flags: int = re.IGNORECASE) -> re.Pattern[str]:
    """Compile a pattern that matches ``text`` literally."""
    return re.compile(re.escape(text), flags)


def utc_timestamp(now: datetime | None = None) -> str:
    """Format a timestamp as ``YYYY-MM-DD HH:MM:SS.mmm UTC``."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%d %H:%M:%S.") + f"{now.microsecond // 1000:03d} UTC"


def build_post_title(standard_text: str, type_label: str, now: datetime | None = None) -> str:
    """Build the unique title used to find a publication card afterwards."""
    return f"{standard_text} - {type_label} - {utc_timestamp(now)}"
