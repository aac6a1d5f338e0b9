"""Communication types offered by the manager creation wizards."""

from dataclasses import dataclass
from pathlib import Path

STANDARD_TEXT = "Teste automatizado_Froes"

# Editoria selected on the category step of every wizard
EDITORIA_NAME = "Einstein - Institucional - Padrão"

NEW_COMMUNICATION_PATH = "/manager/communications/new"
SIMPLE_POST_PATH = f"{NEW_COMMUNICATION_PATH}/simple-communication"


@dataclass(frozen=True)
class PostType:
    """A content type and the wizard that creates it.

    Attributes:
        name: Label used in test ids and titles
        slug: Last path segment of the wizard URL
        data_collection: Whether the type collects answers (skips the TV channel)
        requires_question: Content step asks for a question
        requires_options: Content step asks for answer alternatives
        requires_deadline: Content step asks for a deadline
    """

    name: str
    slug: str
    data_collection: bool
    requires_question: bool = False
    requires_options: bool = False
    requires_deadline: bool = False

    @property
    def path(self) -> str:
        return f"{NEW_COMMUNICATION_PATH}/{self.slug}"

    def __str__(self) -> str:
        return self.name


CAROUSEL = PostType("Post carrossel", "carousel-communication", data_collection=False)
POLL = PostType(
    "Post enquete",
    "poll",
    data_collection=True,
    requires_question=True,
    requires_options=True,
    requires_deadline=True,
)
SIMPLE_SURVEY = PostType("Pergunta unica", "simple-survey", data_collection=True, requires_question=True)
SURVEY = PostType("Pesquisa", "survey", data_collection=True, requires_question=True)
QUIZ = PostType("Quiz", "quiz", data_collection=True, requires_question=True, requires_options=True)
EXAM = PostType("Questionario", "exam", data_collection=True, requires_question=True, requires_options=True)

POST_TYPES: tuple[PostType, ...] = (CAROUSEL, POLL, SIMPLE_SURVEY, SURVEY, QUIZ, EXAM)


def get_post_type(slug_or_name: str) -> PostType:
    """Look up a post type by wizard slug or display name.

    Raises:
        KeyError: If nothing matches.
    """
    needle = slug_or_name.strip().lower()
    for post_type in POST_TYPES:
        if needle in (post_type.slug, post_type.name.lower()):
            return post_type
    raise KeyError(f"Unknown post type: {slug_or_name}")


@dataclass(frozen=True)
class MediaFiles:
    """Local media fixtures attached to simple posts."""

    image: Path
    gif: Path
    video: Path

    @classmethod
    def from_dir(cls, media_dir: Path | str) -> "MediaFiles":
        media_dir = Path(media_dir)
        return cls(
            image=media_dir / "post-image.png",
            gif=media_dir / "simple.gif",
            video=media_dir / "simple.mp4",
        )

    def missing(self) -> list[Path]:
        """Return the fixture paths that do not exist on disk."""
        return [p for p in (self.image, self.gif, self.video) if not p.exists()]
