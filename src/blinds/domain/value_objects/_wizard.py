"""Wizard steps and completion policies."""

from __future__ import annotations

from enum import Enum


class WizardStep(str, Enum):
    """Screens of the customer configuration flow, in order."""

    ROOM = "room"
    MOUNT = "mount"
    COLOR = "color"
    DIMENSIONS = "dimensions"
    OPTIONS = "options"
    SUMMARY = "summary"

    @property
    def label(self) -> str:
        return _STEP_LABELS[self]

    @property
    def index(self) -> int:
        return STEP_ORDER.index(self)


_STEP_LABELS: dict[WizardStep, str] = {
    WizardStep.ROOM: "Room",
    WizardStep.MOUNT: "Mount Type",
    WizardStep.COLOR: "Color",
    WizardStep.DIMENSIONS: "Dimensions",
    WizardStep.OPTIONS: "Options",
    WizardStep.SUMMARY: "Review",
}

STEP_ORDER: tuple[WizardStep, ...] = tuple(WizardStep)


class OptionsCompletion(str, Enum):
    """When the options step counts as complete.

    - ANY_PICK: any single explicit option pick completes the step
    - EVERY_CATEGORY: every option category offered by the product needs
      an explicit pick (specialty options stay optional)
    """

    ANY_PICK = "any_pick"
    EVERY_CATEGORY = "every_category"
