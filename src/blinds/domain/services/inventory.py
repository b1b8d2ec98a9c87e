"""Inventory ledger for selected option values.

The ledger keeps one stock row per distinct option value a product offers.
Fabrics are stocked per fabric and color. Every read-modify-write of a row
and every regeneration of the ledger runs under one ledger lock, so
concurrent order placements cannot oversell and a regeneration cannot be
undone by a stock change that started before it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Iterable, Mapping

from ..entities import InventoryItem, ProductConfiguration
from ..exceptions import InsufficientStockError, UnknownInventoryKeyError
from ..value_objects import CategoryKind, InventoryKey

if TYPE_CHECKING:
    from blinds.contracts.protocols import InventoryStore

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_MIN_STOCK_LEVELS", "SORT_COLUMNS", "InventoryLedger"]

DEFAULT_MIN_STOCK_LEVELS: dict[CategoryKind, int] = {
    CategoryKind.MOUNT_TYPE: 5,
    CategoryKind.CONTROL_TYPE: 5,
    CategoryKind.FABRIC: 10,
    CategoryKind.HEADRAIL: 8,
    CategoryKind.BOTTOM_RAIL: 8,
    CategoryKind.SPECIALTY: 3,
}

SORT_COLUMNS: dict[str, Callable[[InventoryItem], object]] = {
    "name": lambda item: item.display_name.lower(),
    "category": lambda item: item.category.label,
    "total_stock": lambda item: item.total_stock,
    "available_stock": lambda item: item.available_stock,
    "min_stock_level": lambda item: item.min_stock_level,
    "last_updated": lambda item: item.last_updated,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InventoryLedger:
    """Stock rows derived from a product configuration.

    Args:
        store: Optional persistence collaborator for ``persist``/``reload``.
        clock: Returns the current UTC time, stamped on every change.
        min_stock_levels: Low-stock threshold per category for new rows.
    """

    def __init__(
        self,
        store: InventoryStore | None = None,
        clock: Callable[[], datetime] = _utc_now,
        min_stock_levels: Mapping[CategoryKind, int] | None = None,
    ) -> None:
        self.store = store
        self._clock = clock
        self.min_stock_levels = dict(DEFAULT_MIN_STOCK_LEVELS)
        if min_stock_levels:
            self.min_stock_levels.update(min_stock_levels)
        self._items: dict[InventoryKey, InventoryItem] = {}
        # Reentrant so a clock or store callback may read the ledger
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Building rows
    # -------------------------------------------------------------------------

    def generate(
        self,
        config: ProductConfiguration,
        stock: Mapping[InventoryKey, int] | None = None,
    ) -> list[InventoryItem]:
        """Replace the ledger with one row per selected option value.

        Rows start with zero stock unless ``stock`` gives an initial count,
        which becomes both the total and the available stock.
        """
        stock = stock or {}
        now = self._clock()
        items: dict[InventoryKey, InventoryItem] = {}
        for selected in config.iter_selections():
            key = InventoryKey.for_value(selected.value)
            if key in items:
                continue
            count = stock.get(key, 0)
            items[key] = InventoryItem(
                key=key,
                display_name=selected.value.display_name,
                total_stock=count,
                available_stock=count,
                min_stock_level=self.min_stock_levels[key.category],
                last_updated=now,
            )
        self._replace_all(items.values())
        logger.debug(f"Generated {len(items)} inventory rows for {config.product_id}")
        return self.items()

    def sync(self, config: ProductConfiguration) -> list[InventoryItem]:
        """Regenerate rows, keeping stock figures for keys still selected."""
        now = self._clock()
        items: dict[InventoryKey, InventoryItem] = {}
        # Held from reading the old rows to swapping in the new ones so no
        # stock change in between is lost
        with self._lock:
            previous = dict(self._items)
            for selected in config.iter_selections():
                key = InventoryKey.for_value(selected.value)
                if key in items:
                    continue
                kept = previous.get(key)
                if kept is not None:
                    items[key] = replace(kept, display_name=selected.value.display_name)
                else:
                    items[key] = InventoryItem(
                        key=key,
                        display_name=selected.value.display_name,
                        total_stock=0,
                        available_stock=0,
                        min_stock_level=self.min_stock_levels[key.category],
                        last_updated=now,
                    )
            self._replace_all(items.values())
        dropped = [key.slug for key in previous if key not in items]
        if dropped:
            logger.debug(f"Dropped inventory rows no longer selected: {', '.join(dropped)}")
        return self.items()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, key: InventoryKey) -> InventoryItem:
        """Return a copy of a row.

        Raises:
            UnknownInventoryKeyError: If the key is not in the ledger.
        """
        with self._lock:
            return replace(self._row(key))

    def items(self) -> list[InventoryItem]:
        """Copies of all rows, in generation order."""
        with self._lock:
            return [replace(item) for item in self._items.values()]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @staticmethod
    def is_low_stock(item: InventoryItem) -> bool:
        return item.available_stock <= item.min_stock_level

    def low_stock(self) -> list[InventoryItem]:
        return [item for item in self.items() if self.is_low_stock(item)]

    def query(
        self,
        text: str | None = None,
        category: CategoryKind | None = None,
        low_stock_only: bool = False,
        sort_by: str = "name",
        descending: bool = False,
    ) -> list[InventoryItem]:
        """Filter and sort rows the way the inventory table does.

        ``text`` matches the display name or the category label,
        case-insensitively.

        Raises:
            ValueError: If ``sort_by`` is not a known column.
        """
        if sort_by not in SORT_COLUMNS:
            raise ValueError(
                f"Unknown sort column '{sort_by}'. "
                f"Choose from: {', '.join(SORT_COLUMNS)}"
            )
        rows = self.items()
        if text:
            needle = text.lower()
            rows = [
                item
                for item in rows
                if needle in item.display_name.lower()
                or needle in item.category.label.lower()
            ]
        if category is not None:
            rows = [item for item in rows if item.category is category]
        if low_stock_only:
            rows = [item for item in rows if self.is_low_stock(item)]
        return sorted(rows, key=SORT_COLUMNS[sort_by], reverse=descending)  # type: ignore[arg-type]

    # -------------------------------------------------------------------------
    # Stock changes
    # -------------------------------------------------------------------------

    def adjust(self, key: InventoryKey, delta: int) -> InventoryItem:
        """Change available stock by ``delta``.

        Raises:
            UnknownInventoryKeyError: If the key is not in the ledger.
            InsufficientStockError: If available stock would go negative.
        """
        with self._lock:
            now = self._clock()
            item = self._row(key)
            available = item.available_stock + delta
            if available < 0:
                raise InsufficientStockError(key, item.available_stock, delta)
            updated = self._store(replace(item, available_stock=available), now)
        self._warn_if_low(updated)
        return replace(updated)

    def try_reserve(self, key: InventoryKey, quantity: int) -> bool:
        """Take ``quantity`` units if that many are available.

        Returns:
            True if the units were reserved, False if stock was short.

        Raises:
            UnknownInventoryKeyError: If the key is not in the ledger.
            ValueError: If quantity is not positive.
        """
        if quantity <= 0:
            raise ValueError("Reservation quantity must be positive")
        with self._lock:
            now = self._clock()
            item = self._row(key)
            if item.available_stock < quantity:
                return False
            updated = self._store(
                replace(item, available_stock=item.available_stock - quantity), now
            )
        self._warn_if_low(updated)
        return True

    def restock(self, key: InventoryKey, quantity: int) -> InventoryItem:
        """Receive new units, raising total and available stock.

        Raises:
            UnknownInventoryKeyError: If the key is not in the ledger.
            ValueError: If quantity is not positive.
        """
        if quantity <= 0:
            raise ValueError("Restock quantity must be positive")
        with self._lock:
            now = self._clock()
            item = self._row(key)
            updated = self._store(
                replace(
                    item,
                    total_stock=item.total_stock + quantity,
                    available_stock=item.available_stock + quantity,
                ),
                now,
            )
        return replace(updated)

    def set_levels(
        self,
        key: InventoryKey,
        available: int | None = None,
        min_stock_level: int | None = None,
    ) -> InventoryItem:
        """Vendor edit of available stock and the low-stock threshold.

        Raises:
            UnknownInventoryKeyError: If the key is not in the ledger.
            ValueError: If a value is negative.
        """
        with self._lock:
            now = self._clock()
            item = self._row(key)
            changes: dict[str, int] = {}
            if available is not None:
                changes["available_stock"] = available
            if min_stock_level is not None:
                changes["min_stock_level"] = min_stock_level
            updated = self._store(replace(item, **changes), now)
        return replace(updated)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def persist(self) -> None:
        """Write all rows to the inventory store."""
        self._require_store().persist(self.items())

    def reload(self) -> list[InventoryItem]:
        """Replace the ledger with the rows held by the inventory store."""
        self._replace_all(self._require_store().reload())
        return self.items()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _row(self, key: InventoryKey) -> InventoryItem:
        try:
            return self._items[key]
        except KeyError:
            raise UnknownInventoryKeyError(key) from None

    def _store(self, item: InventoryItem, now: datetime) -> InventoryItem:
        # Caller holds the lock and read the row after taking ``now``, so no
        # callback runs between the read and this write.
        stamped = replace(item, last_updated=now)
        self._items[item.key] = stamped
        return stamped

    def _replace_all(self, items: Iterable[InventoryItem]) -> None:
        with self._lock:
            self._items = {item.key: replace(item) for item in items}

    def _require_store(self) -> InventoryStore:
        if self.store is None:
            raise RuntimeError("No inventory store configured")
        return self.store

    def _warn_if_low(self, item: InventoryItem) -> None:
        if self.is_low_stock(item):
            logger.warning(
                f"Low stock for {item.display_name} ({item.key.slug}): "
                f"{item.available_stock} available, minimum {item.min_stock_level}"
            )
