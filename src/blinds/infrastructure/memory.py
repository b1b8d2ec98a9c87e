"""In-memory implementations of the collaborator protocols.

These back the CLI and the test suite. Each store hands out copies so
callers cannot mutate stored state behind the store's back.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Sequence

from blinds.domain.entities import (
    CartLineItem,
    InventoryItem,
    ProductConfiguration,
    SavedConfiguration,
)
from blinds.domain.exceptions import (
    ConcurrentModificationError,
    ConfigurationNotFoundError,
    SavedConfigurationNotFoundError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "InMemoryCartSink",
    "InMemoryConfigurationRepository",
    "InMemoryInventoryStore",
    "InMemorySavedConfigurationStore",
]


class InMemoryConfigurationRepository:
    """Product configurations keyed by product id, with revision checks.

    ``save`` is a compare-and-swap: it succeeds only when the caller's copy
    was loaded at the stored revision.
    """

    def __init__(self) -> None:
        self._configs: dict[str, ProductConfiguration] = {}
        self._lock = threading.Lock()

    def save(self, config: ProductConfiguration) -> None:
        """Store a configuration and advance its revision.

        Raises:
            ConcurrentModificationError: If the stored revision differs from
                ``config.revision``.
        """
        with self._lock:
            stored = self._configs.get(config.product_id)
            stored_revision = stored.revision if stored is not None else 0
            if stored_revision != config.revision:
                raise ConcurrentModificationError(
                    config.product_id, config.revision, stored_revision
                )
            config.revision += 1
            self._configs[config.product_id] = config.copy()
        logger.info(f"Saved configuration for {config.product_id} at revision {config.revision}")

    def load(self, product_id: str) -> ProductConfiguration:
        """A copy of the stored configuration.

        Raises:
            ConfigurationNotFoundError: If nothing is stored for the product.
        """
        with self._lock:
            try:
                return self._configs[product_id].copy()
            except KeyError:
                raise ConfigurationNotFoundError(product_id) from None

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return product_id in self._configs


class InMemoryCartSink:
    """Collects line items emitted by the wizard."""

    def __init__(self) -> None:
        self.items: list[CartLineItem] = []

    def add_line_item(self, item: CartLineItem) -> None:
        self.items.append(item)


class InMemoryInventoryStore:
    """Holds the last persisted inventory rows."""

    def __init__(self, items: Sequence[InventoryItem] = ()) -> None:
        self._items = [replace(item) for item in items]

    def persist(self, items: Sequence[InventoryItem]) -> None:
        self._items = [replace(item) for item in items]

    def reload(self) -> list[InventoryItem]:
        return [replace(item) for item in self._items]


class InMemorySavedConfigurationStore:
    """Saved wizard configurations keyed by id."""

    def __init__(self) -> None:
        self._saved: dict[str, SavedConfiguration] = {}

    def save(self, saved: SavedConfiguration) -> None:
        self._saved[saved.id] = saved

    def get(self, configuration_id: str) -> SavedConfiguration:
        try:
            return self._saved[configuration_id]
        except KeyError:
            raise SavedConfigurationNotFoundError(configuration_id) from None

    def update(self, saved: SavedConfiguration) -> None:
        if saved.id not in self._saved:
            raise SavedConfigurationNotFoundError(saved.id)
        self._saved[saved.id] = saved

    def delete(self, configuration_id: str) -> bool:
        return self._saved.pop(configuration_id, None) is not None

    def list_for_product(self, product_id: str) -> list[SavedConfiguration]:
        """Saved configurations for a product, newest first."""
        matches = [s for s in self._saved.values() if s.product_ref.id == product_id]
        return sorted(matches, key=lambda s: s.saved_at, reverse=True)
