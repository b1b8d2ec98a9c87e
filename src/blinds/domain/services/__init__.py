"""Domain services for the blinds configurator.

This package provides the stateless and stateful services that operate on
product configurations:
- Option category store (catalog)
- Pricing engine and the coarse option mapping
- Configuration wizard state machine
- Inventory ledger
"""

from .catalog import OptionCategoryStore
from .coarse_options import (
    DEFAULT_COARSE_OPTIONS,
    CoarseOption,
    CoarseOptionMap,
    default_coarse_map,
    estimate_price,
)
from .inventory import DEFAULT_MIN_STOCK_LEVELS, SORT_COLUMNS, InventoryLedger
from .pricing import PriceBreakdown, compute_price
from .wizard import OPTION_KINDS, ConfigurationWizard, WizardSummary

__all__ = [
    # Catalog
    "OptionCategoryStore",
    # Pricing
    "PriceBreakdown",
    "compute_price",
    # Coarse options
    "DEFAULT_COARSE_OPTIONS",
    "CoarseOption",
    "CoarseOptionMap",
    "default_coarse_map",
    "estimate_price",
    # Wizard
    "OPTION_KINDS",
    "ConfigurationWizard",
    "WizardSummary",
    # Inventory
    "DEFAULT_MIN_STOCK_LEVELS",
    "SORT_COLUMNS",
    "InventoryLedger",
]
