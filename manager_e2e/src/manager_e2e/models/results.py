"""Result models for publication runs."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Status(str, Enum):
    """Outcome of a wizard run."""

    PUBLISHED = "published"
    CONTENT_FILLED = "content_filled"
    SEGMENTATION_REACHED = "segmentation_reached"


@dataclass
class PublicationResult:
    """Result of driving one creation wizard.

    Attributes:
        post_type: Display name of the content type
        status: How far the run got
        title: Title typed into the content step (empty if none was filled)
        media: Media fixture attached, if any
        duration_seconds: Wall-clock time of the run
        timestamp: When the run finished
    """

    post_type: str
    status: Status
    title: str = ""
    media: str = ""
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_published(self) -> bool:
        return self.status == Status.PUBLISHED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "post_type": self.post_type,
            "status": self.status.value,
            "title": self.title,
            "media": self.media,
            "duration_seconds": round(self.duration_seconds, 2),
            "timestamp": self.timestamp.isoformat(),
        }
