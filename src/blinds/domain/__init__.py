"""Domain layer - product configuration, pricing, wizard and inventory."""

from .entities import (
    CartLineItem,
    Choice,
    InventoryItem,
    ProductConfiguration,
    SavedConfiguration,
    SelectedOption,
    WizardSession,
    normalize_choice,
)
from .exceptions import (
    CannotRemoveDefaultError,
    ConcurrentModificationError,
    ConfigurationNotFoundError,
    ConfiguratorError,
    DimensionOutOfRangeError,
    DuplicateSelectionError,
    InsufficientStockError,
    InvalidAmountError,
    InvalidDimensionRangeError,
    InvalidQuantityError,
    SavedConfigurationNotFoundError,
    SelectionNotFoundError,
    SessionClosedError,
    StepNotAvailableError,
    UnknownCategoryValueError,
    UnknownInventoryKeyError,
)
from .services import (
    CoarseOptionMap,
    ConfigurationWizard,
    InventoryLedger,
    OptionCategoryStore,
    PriceBreakdown,
    compute_price,
    estimate_price,
)
from .value_objects import (
    CategoryKind,
    ConfiguratorPolicy,
    DimensionRange,
    FabricColorValue,
    FractionalInch,
    InventoryKey,
    OptionCategoryValue,
    ProductRef,
    RoomKind,
    RoomRecommendation,
    WizardStep,
)

__all__ = [
    "CannotRemoveDefaultError",
    "CartLineItem",
    "CategoryKind",
    "Choice",
    "CoarseOptionMap",
    "ConcurrentModificationError",
    "ConfigurationNotFoundError",
    "ConfigurationWizard",
    "ConfiguratorError",
    "ConfiguratorPolicy",
    "DimensionOutOfRangeError",
    "DimensionRange",
    "DuplicateSelectionError",
    "FabricColorValue",
    "FractionalInch",
    "InsufficientStockError",
    "InvalidAmountError",
    "InvalidDimensionRangeError",
    "InvalidQuantityError",
    "InventoryItem",
    "InventoryKey",
    "InventoryLedger",
    "OptionCategoryStore",
    "OptionCategoryValue",
    "PriceBreakdown",
    "ProductConfiguration",
    "ProductRef",
    "RoomKind",
    "RoomRecommendation",
    "SavedConfiguration",
    "SavedConfigurationNotFoundError",
    "SelectedOption",
    "SelectionNotFoundError",
    "SessionClosedError",
    "StepNotAvailableError",
    "UnknownCategoryValueError",
    "UnknownInventoryKeyError",
    "WizardSession",
    "WizardStep",
    "compute_price",
    "estimate_price",
    "normalize_choice",
]
