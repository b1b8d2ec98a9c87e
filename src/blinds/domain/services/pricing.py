"""Price computation for configured blinds.

Prices are built from four terms:

1. The product's declared base price, taken as-is.
2. A size adjustment: a fixed fraction of the base price (10% by default)
   per extra linear foot of width plus height beyond the product minimum.
3. One adjustment per chosen category value: the catalog adjustment plus
   the product's additional adjustment. Specialty options may be chosen
   several at a time and their adjustments are summed.
4. The total, the exact sum of the above, rounded to cents for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Sequence

from ..entities import Choice, ProductConfiguration, normalize_choice
from ..exceptions import (
    DimensionOutOfRangeError,
    SelectionNotFoundError,
    UnknownCategoryValueError,
)
from ..value_objects import (
    INCHES_PER_FOOT,
    ZERO,
    CategoryKind,
    MoneyLike,
    round_money,
    to_decimal,
)

logger = logging.getLogger(__name__)

__all__ = ["PriceBreakdown", "compute_price"]


@dataclass(frozen=True)
class PriceBreakdown:
    """Every term of a computed price, for display and auditing.

    Attributes:
        base_price: The product's declared base price.
        size_adjustment: Surcharge for dimensions beyond the minimum.
        category_adjustments: Adjustment per category kind; zero for
            categories without a chosen value.
        width: Width that was priced, in inches.
        height: Height that was priced, in inches.
        chosen: The category values that were priced.
    """

    base_price: Decimal
    size_adjustment: Decimal
    category_adjustments: Mapping[CategoryKind, Decimal]
    width: Decimal
    height: Decimal
    chosen: Mapping[CategoryKind, Choice] = field(default_factory=dict)

    @property
    def options_total(self) -> Decimal:
        return sum(self.category_adjustments.values(), ZERO)

    @property
    def unrounded_total(self) -> Decimal:
        """Exact sum of all terms."""
        return self.base_price + self.size_adjustment + self.options_total

    @property
    def total(self) -> Decimal:
        """Total rounded to cents."""
        return round_money(self.unrounded_total)

    def adjustment_for(self, kind: CategoryKind) -> Decimal:
        return self.category_adjustments.get(kind, ZERO)

    @property
    def mount_type_adjustment(self) -> Decimal:
        return self.adjustment_for(CategoryKind.MOUNT_TYPE)

    @property
    def control_type_adjustment(self) -> Decimal:
        return self.adjustment_for(CategoryKind.CONTROL_TYPE)

    @property
    def fabric_adjustment(self) -> Decimal:
        return self.adjustment_for(CategoryKind.FABRIC)

    @property
    def headrail_adjustment(self) -> Decimal:
        return self.adjustment_for(CategoryKind.HEADRAIL)

    @property
    def bottom_rail_adjustment(self) -> Decimal:
        return self.adjustment_for(CategoryKind.BOTTOM_RAIL)

    @property
    def specialty_adjustment(self) -> Decimal:
        return self.adjustment_for(CategoryKind.SPECIALTY)

    def as_dict(self) -> dict[str, Any]:
        """Serializable view with amounts as strings."""
        return {
            "width": str(self.width),
            "height": str(self.height),
            "base_price": str(self.base_price),
            "size_adjustment": str(round_money(self.size_adjustment)),
            "adjustments": {
                kind.value: str(round_money(self.adjustment_for(kind)))
                for kind in CategoryKind
            },
            "chosen": {
                kind.value: list(choice) if isinstance(choice, tuple) else choice
                for kind, choice in self.chosen.items()
            },
            "total": str(self.total),
        }


def compute_price(
    config: ProductConfiguration,
    base_price: MoneyLike,
    width: MoneyLike,
    height: MoneyLike,
    chosen: Mapping[CategoryKind, str | Sequence[str]],
    apply_defaults: bool = False,
) -> PriceBreakdown:
    """Compute the price of a configured product.

    Args:
        config: The product's curated option space.
        base_price: Declared base price of the product.
        width: Ordered width in inches.
        height: Ordered height in inches.
        chosen: Value id per category kind. Specialty may map to several ids.
        apply_defaults: Fill unchosen categories with their default value
            before pricing.

    Returns:
        PriceBreakdown with each term and the total.

    Raises:
        UnknownCategoryValueError: If a chosen id is not selected for its
            category, or several ids are given for a single-select category.
        DimensionOutOfRangeError: If width or height lie outside the
            product's dimension range.
        ValueError: If the base price is not a finite number.
    """
    base = to_decimal(base_price)
    if not base.is_finite():
        raise ValueError(f"Base price must be finite (got: {base_price!r})")

    dimensions = config.dimensions
    width_in = _checked_dimension(
        "width", width, dimensions.min_width, dimensions.max_width
    )
    height_in = _checked_dimension(
        "height", height, dimensions.min_height, dimensions.max_height
    )

    normalized = {kind: normalize_choice(kind, choice) for kind, choice in chosen.items()}
    if apply_defaults:
        normalized = config.resolve_choices(normalized)

    adjustments: dict[CategoryKind, Decimal] = {}
    for kind in CategoryKind:
        choice = normalized.get(kind)
        if choice is None:
            adjustments[kind] = ZERO
            continue
        value_ids = choice if isinstance(choice, tuple) else (choice,)
        total = ZERO
        # Each specialty option counts once even if listed twice
        for value_id in dict.fromkeys(value_ids):
            try:
                selected = config.get_selection(kind, value_id)
            except SelectionNotFoundError as e:
                raise UnknownCategoryValueError(kind, value_id) from e
            total += selected.total_adjustment
        adjustments[kind] = total

    extra_width = max(ZERO, width_in - dimensions.min_width)
    extra_height = max(ZERO, height_in - dimensions.min_height)
    linear_feet = extra_width / INCHES_PER_FOOT + extra_height / INCHES_PER_FOOT
    size_ratio = max(ZERO, linear_feet * config.policy.size_rate_per_foot)
    size_adjustment = base * size_ratio

    breakdown = PriceBreakdown(
        base_price=base,
        size_adjustment=size_adjustment,
        category_adjustments=adjustments,
        width=width_in,
        height=height_in,
        chosen=normalized,
    )
    logger.debug(
        f"Priced {config.product_id} at {width_in}x{height_in}: "
        f"base={base} size={size_adjustment} options={breakdown.options_total} "
        f"total={breakdown.total}"
    )
    return breakdown


def _checked_dimension(
    axis: str, value: MoneyLike, minimum: Decimal, maximum: Decimal
) -> Decimal:
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise DimensionOutOfRangeError(axis, value, minimum, maximum) from e
    if not amount.is_finite() or not minimum <= amount <= maximum:
        raise DimensionOutOfRangeError(axis, value, minimum, maximum)
    return amount
