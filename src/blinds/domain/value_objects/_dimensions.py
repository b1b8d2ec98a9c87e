"""Continuous size domain of a product and the wizard's fractional inches."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from ..exceptions import InvalidDimensionRangeError
from ._money import MoneyLike, to_decimal

# Fractions offered by the dimension picker, in eighths of an inch
EIGHTH_FRACTIONS: tuple[str, ...] = ("0", "1/8", "1/4", "3/8", "1/2", "5/8", "3/4", "7/8")

_FRACTION_VALUES: dict[str, Decimal] = {
    "0": Decimal("0"),
    "1/8": Decimal("0.125"),
    "1/4": Decimal("0.25"),
    "3/8": Decimal("0.375"),
    "1/2": Decimal("0.5"),
    "5/8": Decimal("0.625"),
    "3/4": Decimal("0.75"),
    "7/8": Decimal("0.875"),
}


@dataclass(frozen=True)
class DimensionRange:
    """Width and height bounds a product may be ordered in, in inches.

    Attributes:
        min_width: Smallest orderable width.
        max_width: Largest orderable width.
        min_height: Smallest orderable height.
        max_height: Largest orderable height.
        width_increment: Granularity of the width picker.
        height_increment: Granularity of the height picker.

    Raises:
        InvalidDimensionRangeError: If min >= max on either axis, a bound is
            not positive, or an increment is not positive.
    """

    min_width: Decimal
    max_width: Decimal
    min_height: Decimal
    max_height: Decimal
    width_increment: Decimal = Decimal("0.125")
    height_increment: Decimal = Decimal("0.125")

    def __post_init__(self) -> None:
        for name in (
            "min_width",
            "max_width",
            "min_height",
            "max_height",
            "width_increment",
            "height_increment",
        ):
            try:
                value = to_decimal(getattr(self, name))
            except ValueError as e:
                raise InvalidDimensionRangeError(f"{name} must be a number") from e
            if not value.is_finite():
                raise InvalidDimensionRangeError(f"{name} must be finite")
            object.__setattr__(self, name, value)

        if self.min_width <= 0 or self.min_height <= 0:
            raise InvalidDimensionRangeError("Minimum dimensions must be positive")
        if self.min_width >= self.max_width:
            raise InvalidDimensionRangeError(
                "Minimum width must be less than maximum width"
            )
        if self.min_height >= self.max_height:
            raise InvalidDimensionRangeError(
                "Minimum height must be less than maximum height"
            )
        if self.width_increment <= 0:
            raise InvalidDimensionRangeError("Width increment must be greater than 0")
        if self.height_increment <= 0:
            raise InvalidDimensionRangeError("Height increment must be greater than 0")

    @classmethod
    def of(
        cls,
        min_width: MoneyLike,
        max_width: MoneyLike,
        min_height: MoneyLike,
        max_height: MoneyLike,
        width_increment: MoneyLike = "0.125",
        height_increment: MoneyLike = "0.125",
    ) -> "DimensionRange":
        """Build a range from plain numbers, converting them to Decimal."""
        return cls(
            min_width=min_width,  # type: ignore[arg-type]
            max_width=max_width,  # type: ignore[arg-type]
            min_height=min_height,  # type: ignore[arg-type]
            max_height=max_height,  # type: ignore[arg-type]
            width_increment=width_increment,  # type: ignore[arg-type]
            height_increment=height_increment,  # type: ignore[arg-type]
        )

    def contains_width(self, width: Decimal) -> bool:
        return self.min_width <= width <= self.max_width

    def contains_height(self, height: Decimal) -> bool:
        return self.min_height <= height <= self.max_height

    def width_steps(self) -> Iterator[Decimal]:
        """Orderable widths from min to max in increment steps."""
        return _steps(self.min_width, self.max_width, self.width_increment)

    def height_steps(self) -> Iterator[Decimal]:
        """Orderable heights from min to max in increment steps."""
        return _steps(self.min_height, self.max_height, self.height_increment)

    @property
    def increment_exceeds_span(self) -> bool:
        """True if an increment is wider than its axis' range."""
        return (
            self.width_increment > self.max_width - self.min_width
            or self.height_increment > self.max_height - self.min_height
        )


def _steps(start: Decimal, stop: Decimal, step: Decimal) -> Iterator[Decimal]:
    current = start
    while current <= stop:
        yield current
        current += step


@dataclass(frozen=True)
class FractionalInch:
    """A measurement entered as whole inches plus an eighth-inch fraction."""

    whole: int = 0
    fraction: str = "0"

    def __post_init__(self) -> None:
        if isinstance(self.whole, bool) or not isinstance(self.whole, int):
            raise ValueError("Whole inches must be an integer")
        if self.whole < 0:
            raise ValueError("Whole inches cannot be negative")
        if self.fraction not in _FRACTION_VALUES:
            raise ValueError(
                f"Fraction must be one of: {', '.join(EIGHTH_FRACTIONS)}"
            )

    @property
    def inches(self) -> Decimal:
        """Exact decimal value, e.g. ``36 1/2`` -> ``Decimal("36.5")``."""
        return Decimal(self.whole) + _FRACTION_VALUES[self.fraction]

    @classmethod
    def from_inches(cls, value: MoneyLike) -> "FractionalInch":
        """Split a decimal measurement into whole inches and eighths.

        Raises:
            ValueError: If the value is negative or not a multiple of 1/8".
        """
        amount = to_decimal(value)
        if amount < 0:
            raise ValueError("Measurement cannot be negative")
        whole = int(amount)
        remainder = amount - whole
        for label, fraction in _FRACTION_VALUES.items():
            if fraction == remainder:
                return cls(whole=whole, fraction=label)
        raise ValueError(f"{value}\" is not a multiple of 1/8 inch")

    def __str__(self) -> str:
        if self.fraction == "0":
            return f'{self.whole}"'
        return f'{self.whole} {self.fraction}"'
