"""Configuration schema and loading system for product configurations.

This package provides JSON-based configuration loading and validation for
configurable blinds. It includes Pydantic models for schema validation, a
loader with detailed error reporting, cross-field validation, and adapters
that build the domain objects.

Public API:
    - ProductConfigurationFile: Root configuration model
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - ValidationResult: Container for validation results
    - validate_config: Perform full configuration validation
    - config_to_catalog / config_to_product / config_to_product_ref /
      config_to_policy / config_to_coarse_map / config_to_inventory_ledger:
      Build domain objects

Example:
    >>> from pathlib import Path
    >>> from blinds.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("roller-shade.json"))
    ...     print(f"Base price: {config.product.base_price}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from blinds.application.config.adapter import (
    config_to_catalog,
    config_to_coarse_map,
    config_to_inventory_ledger,
    config_to_policy,
    config_to_product,
    config_to_product_ref,
)
from blinds.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from blinds.application.config.schema import (
    SUPPORTED_VERSIONS,
    CatalogConfig,
    CatalogValueConfig,
    CoarseOptionConfig,
    DimensionsConfig,
    FabricColorConfig,
    FabricConfig,
    InventoryConfig,
    PolicyConfig,
    ProductConfig,
    ProductConfigurationFile,
    RoomRecommendationConfig,
    SelectionConfig,
    SelectionsConfig,
)
from blinds.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "CatalogConfig",
    "CatalogValueConfig",
    "CoarseOptionConfig",
    "DimensionsConfig",
    "FabricColorConfig",
    "FabricConfig",
    "InventoryConfig",
    "PolicyConfig",
    "ProductConfig",
    "ProductConfigurationFile",
    "RoomRecommendationConfig",
    "SelectionConfig",
    "SelectionsConfig",
    # Loader
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
    # Adapters
    "config_to_catalog",
    "config_to_coarse_map",
    "config_to_inventory_ledger",
    "config_to_policy",
    "config_to_product",
    "config_to_product_ref",
]
