"""Step definitions for the communication creation wizard."""

from dataclasses import dataclass
from enum import Enum


class WizardStep(str, Enum):
    """Steps a creation wizard can display.

    The step order differs between content types, so the navigator never
    assumes a sequence; it classifies whatever is on screen:
    1. CHANNELS - Where the communication is shown (app, TV)
    2. CATEGORY - Editoria the communication belongs to
    3. SEGMENTATION - Audience selection
    4. CONTENT - Title/body/question editor (terminal)

    UNCLASSIFIED means no marker was found on this tick (still loading, or
    an unrelated page).
    """

    CHANNELS = "channels"
    CATEGORY = "category"
    SEGMENTATION = "segmentation"
    CONTENT = "content"
    UNCLASSIFIED = "unclassified"

    @property
    def is_terminal(self) -> bool:
        """Check if reaching this step ends the traversal."""
        return self == WizardStep.CONTENT

    @property
    def is_actionable(self) -> bool:
        """Check if this step has a transition action."""
        return self in ACTIONABLE_STEPS


ACTIONABLE_STEPS = frozenset({
    WizardStep.CHANNELS,
    WizardStep.CATEGORY,
    WizardStep.SEGMENTATION,
})

# Priority used when several markers are present at once
CLASSIFICATION_ORDER = (
    WizardStep.CONTENT,
    WizardStep.CHANNELS,
    WizardStep.CATEGORY,
    WizardStep.SEGMENTATION,
)


@dataclass(frozen=True)
class StepSnapshot:
    """Which step markers were present on the page during one polling tick."""

    content: bool = False
    channels: bool = False
    category: bool = False
    segmentation: bool = False

    def has(self, step: WizardStep) -> bool:
        return bool(getattr(self, step.value, False))


def classify(snapshot: StepSnapshot) -> WizardStep:
    """Map a snapshot to the step it represents.

    Args:
        snapshot: Markers observed on the page

    Returns:
        The first step in CLASSIFICATION_ORDER whose marker is present,
        or UNCLASSIFIED
    """
    for step in CLASSIFICATION_ORDER:
        if snapshot.has(step):
            return step
    return WizardStep.UNCLASSIFIED
