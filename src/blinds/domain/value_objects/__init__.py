"""Value objects for the blinds configurator domain.

This module provides immutable data types used throughout the configurator.
All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Money
from ._money import (
    CENT,
    ZERO,
    MoneyLike,
    format_money,
    round_money,
    to_decimal,
)

# Catalog
from ._catalog import (
    CategoryKind,
    FabricColorValue,
    OptionCategoryValue,
    canonical_color_code,
)

# Dimensions
from ._dimensions import (
    EIGHTH_FRACTIONS,
    DimensionRange,
    FractionalInch,
)

# Rooms
from ._rooms import (
    DEFAULT_RECOMMENDATION_LEVEL,
    MAX_RECOMMENDATION_LEVEL,
    MIN_RECOMMENDATION_LEVEL,
    RECOMMENDATION_LABELS,
    RoomKind,
    RoomRecommendation,
)

# Inventory
from ._inventory import InventoryKey

# Products and policy
from ._product import (
    DEFAULT_SIZE_RATE_PER_FOOT,
    INCHES_PER_FOOT,
    ConfiguratorPolicy,
    ProductRef,
)

# Wizard
from ._wizard import (
    STEP_ORDER,
    OptionsCompletion,
    WizardStep,
)

__all__ = [
    # Money
    "CENT",
    "ZERO",
    "MoneyLike",
    "format_money",
    "round_money",
    "to_decimal",
    # Catalog
    "CategoryKind",
    "FabricColorValue",
    "OptionCategoryValue",
    "canonical_color_code",
    # Dimensions
    "EIGHTH_FRACTIONS",
    "DimensionRange",
    "FractionalInch",
    # Rooms
    "DEFAULT_RECOMMENDATION_LEVEL",
    "MAX_RECOMMENDATION_LEVEL",
    "MIN_RECOMMENDATION_LEVEL",
    "RECOMMENDATION_LABELS",
    "RoomKind",
    "RoomRecommendation",
    # Inventory
    "InventoryKey",
    # Products and policy
    "DEFAULT_SIZE_RATE_PER_FOOT",
    "INCHES_PER_FOOT",
    "ConfiguratorPolicy",
    "ProductRef",
    # Wizard
    "STEP_ORDER",
    "OptionsCompletion",
    "WizardStep",
]
