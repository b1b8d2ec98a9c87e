"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from blinds.domain import Choice, PriceBreakdown
from blinds.domain.value_objects import CategoryKind


@dataclass
class QuoteInput:
    """Input DTO for a price quote.

    Attributes:
        width: Ordered width in inches.
        height: Ordered height in inches.
        choices: Value id per category name (``"control_type": "motorized"``).
            Specialty values may be comma separated.
        coarse_options: Coarse name/value choices (``"Opacity": "Blackout"``).
        apply_defaults: Price unchosen categories at their default value.
    """

    width: float
    height: float
    choices: dict[str, str] = field(default_factory=dict)
    coarse_options: dict[str, str] = field(default_factory=dict)
    apply_defaults: bool = False

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.width <= 0:
            errors.append("Width must be positive")
        if self.height <= 0:
            errors.append("Height must be positive")
        for name, value in self.choices.items():
            try:
                CategoryKind.parse(name)
            except ValueError as e:
                errors.append(str(e))
                continue
            if not value.strip():
                errors.append(f"No value given for '{name}'")
        for name, value in self.coarse_options.items():
            if not name.strip() or not value.strip():
                errors.append(f"Coarse option '{name}={value}' needs a name and a value")
        return errors

    def to_chosen(self) -> dict[CategoryKind, Choice]:
        """Explicit choices keyed by category kind. Call ``validate`` first."""
        chosen: dict[CategoryKind, Choice] = {}
        for name, value in self.choices.items():
            kind = CategoryKind.parse(name)
            ids = tuple(v.strip() for v in value.split(",") if v.strip())
            chosen[kind] = ids if kind.multi_select or len(ids) != 1 else ids[0]
        return chosen


@dataclass
class QuoteOutput:
    """Output DTO for a price quote."""

    breakdown: PriceBreakdown | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0 and self.breakdown is not None
