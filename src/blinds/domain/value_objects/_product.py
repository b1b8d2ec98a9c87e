"""Product references and configurator policy."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ._money import MoneyLike, ZERO, to_decimal
from ._wizard import OptionsCompletion

# Size surcharge: 10% of the base price per extra linear foot
DEFAULT_SIZE_RATE_PER_FOOT = Decimal("0.10")
INCHES_PER_FOOT = Decimal("12")


@dataclass(frozen=True)
class ProductRef:
    """The external product record the core prices against.

    Attributes:
        id: Product identifier in the surrounding storefront.
        name: Display title.
        base_price: Declared base price, taken as-is by the pricing engine.
    """

    id: str
    name: str = ""
    base_price: Decimal = ZERO

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Product id must not be empty")
        object.__setattr__(self, "base_price", to_decimal(self.base_price))
        if not self.base_price.is_finite() or self.base_price < 0:
            raise ValueError("Base price must be a finite, non-negative amount")

    @classmethod
    def of(cls, id: str, base_price: MoneyLike, name: str = "") -> "ProductRef":
        return cls(id=id, name=name, base_price=to_decimal(base_price))


@dataclass(frozen=True)
class ConfiguratorPolicy:
    """Platform-level rules for editing, pricing and the wizard.

    Attributes:
        price_adjustment_floor: Lowest allowed additional price adjustment.
            ``None`` allows any finite amount, including discounts.
        size_rate_per_foot: Fraction of the base price added per extra
            linear foot beyond the minimum dimensions.
        options_completion: Completion rule for the wizard's options step.
    """

    price_adjustment_floor: Decimal | None = ZERO
    size_rate_per_foot: Decimal = DEFAULT_SIZE_RATE_PER_FOOT
    options_completion: OptionsCompletion = OptionsCompletion.ANY_PICK

    def __post_init__(self) -> None:
        if self.price_adjustment_floor is not None:
            object.__setattr__(
                self, "price_adjustment_floor", to_decimal(self.price_adjustment_floor)
            )
        object.__setattr__(self, "size_rate_per_foot", to_decimal(self.size_rate_per_foot))
        if self.size_rate_per_foot < 0:
            raise ValueError("Size rate per foot cannot be negative")
