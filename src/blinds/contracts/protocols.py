"""Collaborator protocols for dependency injection.

The core is consumed in-process and owns no persistence. These protocols
describe the external systems it reads from and writes to; the
infrastructure layer provides in-memory implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from blinds.domain.entities import (
        CartLineItem,
        InventoryItem,
        ProductConfiguration,
        SavedConfiguration,
    )
    from blinds.domain.value_objects import CategoryKind, OptionCategoryValue


@runtime_checkable
class CatalogReader(Protocol):
    """Read-only access to the option category store.

    Example:
        ```python
        class MyCatalog:
            def list_values(self, kind: CategoryKind) -> Sequence[OptionCategoryValue]:
                ...

            def get_value(self, kind: CategoryKind, value_id: str) -> OptionCategoryValue | None:
                ...
        ```
    """

    def list_values(self, kind: "CategoryKind") -> "Sequence[OptionCategoryValue]":
        """All catalog values for a category kind, in catalog order."""
        ...

    def get_value(
        self, kind: "CategoryKind", value_id: str
    ) -> "OptionCategoryValue | None":
        """Look up a single value, returning None if it does not exist."""
        ...


@runtime_checkable
class ConfigurationRepository(Protocol):
    """Persistence sink for product configurations.

    Implementations must compare ``config.revision`` with the stored
    revision on save and raise ``ConcurrentModificationError`` on mismatch.
    """

    def save(self, config: "ProductConfiguration") -> None:
        """Store the configuration and advance its revision."""
        ...

    def load(self, product_id: str) -> "ProductConfiguration":
        """Return an independent copy of the stored configuration.

        Raises:
            ConfigurationNotFoundError: If no configuration exists for the product.
        """
        ...


@runtime_checkable
class CartSink(Protocol):
    """Receives configured line items from the wizard."""

    def add_line_item(self, item: "CartLineItem") -> None:
        """Accept a line item. Fire-and-forget from the wizard's view."""
        ...


@runtime_checkable
class InventoryStore(Protocol):
    """Persistence for inventory rows."""

    def persist(self, items: "Sequence[InventoryItem]") -> None:
        """Replace the stored rows with the given items."""
        ...

    def reload(self) -> "list[InventoryItem]":
        """Return copies of the stored rows."""
        ...


@runtime_checkable
class SavedConfigurationStore(Protocol):
    """Storage for buyer-saved wizard configurations."""

    def save(self, saved: "SavedConfiguration") -> None:
        ...

    def get(self, configuration_id: str) -> "SavedConfiguration":
        """Raises SavedConfigurationNotFoundError if the id is unknown."""
        ...

    def update(self, saved: "SavedConfiguration") -> None:
        """Raises SavedConfigurationNotFoundError if the id is unknown."""
        ...

    def delete(self, configuration_id: str) -> bool:
        ...

    def list_for_product(self, product_id: str) -> "list[SavedConfiguration]":
        ...
