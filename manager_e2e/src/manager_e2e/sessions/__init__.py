"""Saved browser sessions."""

from manager_e2e.sessions.storage_state import (
    create_storage_state,
    load_storage_state,
    storage_state_exists,
    summarize_storage_state,
)

__all__ = [
    "create_storage_state",
    "load_storage_state",
    "storage_state_exists",
    "summarize_storage_state",
]
