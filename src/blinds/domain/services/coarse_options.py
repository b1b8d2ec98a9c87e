"""Coarse option names mapped onto catalog category values.

Some storefront screens offer options as plain name/value strings
("Control Type" = "Motorized") rather than catalog values. This module
translates such choices into the ``chosen`` mapping the pricing engine
consumes, so every price goes through ``compute_price``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator, Mapping

from ..entities import Choice, ProductConfiguration, normalize_choice
from ..value_objects import (
    ZERO,
    CategoryKind,
    MoneyLike,
    OptionCategoryValue,
    to_decimal,
)
from .pricing import PriceBreakdown, compute_price

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_COARSE_OPTIONS",
    "CoarseOption",
    "CoarseOptionMap",
    "default_coarse_map",
    "estimate_price",
]


@dataclass(frozen=True)
class CoarseOption:
    """One row of the coarse option table.

    Attributes:
        option_name: Name shown to the buyer, e.g. "Opacity".
        value: Value shown to the buyer, e.g. "Blackout".
        kind: Category the choice is priced in.
        value_id: Catalog value id the choice maps to.
        surcharge: Catalog adjustment of that value.
    """

    option_name: str
    value: str
    kind: CategoryKind
    value_id: str
    surcharge: Decimal = ZERO

    def __post_init__(self) -> None:
        if not self.option_name or not self.value:
            raise ValueError("Coarse option name and value must not be empty")
        if not self.value_id:
            raise ValueError("Coarse option value id must not be empty")
        object.__setattr__(self, "surcharge", to_decimal(self.surcharge))

    def to_catalog_value(self) -> OptionCategoryValue:
        return OptionCategoryValue(
            id=self.value_id,
            kind=self.kind,
            name=self.value,
            base_price_adjustment=self.surcharge,
            description=f"{self.option_name}: {self.value}",
        )


DEFAULT_COARSE_OPTIONS: tuple[CoarseOption, ...] = (
    CoarseOption("Control Type", "Motorized", CategoryKind.CONTROL_TYPE, "motorized", Decimal("75")),
    CoarseOption("Control Type", "Cordless", CategoryKind.CONTROL_TYPE, "cordless", Decimal("30")),
    CoarseOption("Control Type", "Day/Night", CategoryKind.CONTROL_TYPE, "day-night", Decimal("40")),
    CoarseOption("Opacity", "Blackout", CategoryKind.SPECIALTY, "blackout", Decimal("20")),
    CoarseOption("Opacity", "Room Darkening", CategoryKind.SPECIALTY, "room-darkening", Decimal("10")),
    CoarseOption("Cell Type", "Double Cell", CategoryKind.SPECIALTY, "double-cell", Decimal("15")),
)


class CoarseOptionMap:
    """Lookup table from (option name, value) to a category value."""

    def __init__(self, entries: Iterable[CoarseOption] = ()) -> None:
        self._entries: dict[tuple[str, str], CoarseOption] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: CoarseOption) -> None:
        """Register a row.

        Raises:
            ValueError: If the (name, value) pair is already mapped.
        """
        key = (entry.option_name, entry.value)
        if key in self._entries:
            raise ValueError(
                f"Coarse option '{entry.option_name}={entry.value}' is already mapped"
            )
        self._entries[key] = entry

    def lookup(self, option_name: str, value: str) -> CoarseOption | None:
        return self._entries.get((option_name, value))

    def translate(self, coarse_choices: Mapping[str, str]) -> dict[CategoryKind, Choice]:
        """Turn coarse choices into a ``chosen`` mapping.

        Unmapped pairs carry no surcharge and are skipped.

        Raises:
            UnknownCategoryValueError: If two coarse options map onto the
                same single-select category.
        """
        collected: dict[CategoryKind, list[str]] = {}
        for option_name, value in coarse_choices.items():
            entry = self.lookup(option_name, value)
            if entry is None:
                logger.debug(f"No coarse mapping for {option_name}={value}; ignored")
                continue
            collected.setdefault(entry.kind, []).append(entry.value_id)
        return {kind: normalize_choice(kind, ids) for kind, ids in collected.items()}

    def catalog_values(self) -> list[OptionCategoryValue]:
        """Catalog entries that reproduce the table's surcharges."""
        return [entry.to_catalog_value() for entry in self]

    def apply_to(self, config: ProductConfiguration) -> None:
        """Select every mapped value on a configuration that lacks it.

        The configuration's catalog must already hold ``catalog_values()``.
        """
        for entry in self:
            if not config.is_selected(entry.kind, entry.value_id):
                config.add_selection(entry.kind, entry.value_id)

    def __iter__(self) -> Iterator[CoarseOption]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def default_coarse_map() -> CoarseOptionMap:
    """Map with the storefront's standard surcharges."""
    return CoarseOptionMap(DEFAULT_COARSE_OPTIONS)


def estimate_price(
    config: ProductConfiguration,
    base_price: MoneyLike,
    width: MoneyLike,
    height: MoneyLike,
    coarse_choices: Mapping[str, str],
    mapping: CoarseOptionMap | None = None,
) -> PriceBreakdown:
    """Price coarse name/value choices through the canonical engine.

    Example:
        >>> estimate_price(config, 100, 36, 48,
        ...                {"Control Type": "Motorized", "Opacity": "Blackout"}).total
        Decimal('215.00')
    """
    if mapping is None:
        mapping = default_coarse_map()
    chosen = mapping.translate(coarse_choices)
    return compute_price(config, base_price, width, height, chosen)
