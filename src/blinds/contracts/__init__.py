"""Contracts module - protocols for the core's external collaborators.

By depending on protocols rather than concrete implementations, the domain
stays free of persistence and transport concerns and remains testable.

Example:
    ```python
    from blinds.contracts import CartSink

    def checkout(sink: CartSink) -> None:
        ...
    ```
"""

from .protocols import (
    CartSink as CartSink,
    CatalogReader as CatalogReader,
    ConfigurationRepository as ConfigurationRepository,
    InventoryStore as InventoryStore,
    SavedConfigurationStore as SavedConfigurationStore,
)

__all__ = [
    "CartSink",
    "CatalogReader",
    "ConfigurationRepository",
    "InventoryStore",
    "SavedConfigurationStore",
]
