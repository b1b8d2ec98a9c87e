"""Room merchandising recommendations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoomKind(str, Enum):
    """Rooms a buyer can pick in the first wizard step."""

    LIVING_ROOM = "living_room"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    HOME_OFFICE = "home_office"
    DINING_ROOM = "dining_room"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


MIN_RECOMMENDATION_LEVEL = 1
MAX_RECOMMENDATION_LEVEL = 5
DEFAULT_RECOMMENDATION_LEVEL = 3

RECOMMENDATION_LABELS: dict[int, str] = {
    1: "Not Recommended",
    2: "Adequate",
    3: "Good",
    4: "Very Good",
    5: "Excellent",
}


@dataclass(frozen=True)
class RoomRecommendation:
    """How well a product suits a room, from 1 (not recommended) to 5."""

    room: RoomKind
    level: int = DEFAULT_RECOMMENDATION_LEVEL
    note: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise ValueError("Recommendation level must be an integer")
        if not MIN_RECOMMENDATION_LEVEL <= self.level <= MAX_RECOMMENDATION_LEVEL:
            raise ValueError(
                f"Recommendation level must be between {MIN_RECOMMENDATION_LEVEL} "
                f"and {MAX_RECOMMENDATION_LEVEL}"
            )
        if self.note is not None:
            note = self.note.strip()
            object.__setattr__(self, "note", note or None)

    @property
    def label(self) -> str:
        return RECOMMENDATION_LABELS[self.level]
