"""Publication workflows."""

from manager_e2e.workflows.publication import (
    PublicationWorkflow,
    publish_poll,
    publish_simple_post,
    run_initial_flow,
    safe_goto,
)

__all__ = [
    "PublicationWorkflow",
    "publish_poll",
    "publish_simple_post",
    "run_initial_flow",
    "safe_goto",
]
