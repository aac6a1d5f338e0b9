"""Creation wizard traversal."""

from manager_e2e.wizard.navigator import WizardNavigator, advance_to_content
from manager_e2e.wizard.states import StepSnapshot, WizardStep, classify

__all__ = [
    "WizardNavigator",
    "advance_to_content",
    "StepSnapshot",
    "WizardStep",
    "classify",
]
