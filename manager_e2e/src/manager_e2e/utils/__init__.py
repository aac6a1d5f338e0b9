"""Utility modules for the manager E2E suite."""

from manager_e2e.utils.retry import RetryPolicy, retry_call
from manager_e2e.utils.sanitization import (
    build_post_title,
    literal_pattern,
    mask_email,
    utc_timestamp,
)

__all__ = [
    "RetryPolicy",
    "retry_call",
    "build_post_title",
    "literal_pattern",
    "mask_email",
    "utc_timestamp",
]
