"""Data models for the manager E2E suite."""

from manager_e2e.models.communications import (
    POST_TYPES,
    MediaFiles,
    PostType,
    get_post_type,
)
from manager_e2e.models.results import PublicationResult, Status
from manager_e2e.models.users import Credentials, UsersData, load_users

__all__ = [
    "POST_TYPES",
    "MediaFiles",
    "PostType",
    "get_post_type",
    "PublicationResult",
    "Status",
    "Credentials",
    "UsersData",
    "load_users",
]
