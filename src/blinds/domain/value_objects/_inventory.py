"""Inventory identifiers."""

from __future__ import annotations

from dataclasses import dataclass

from ._catalog import CategoryKind, FabricColorValue, OptionCategoryValue


@dataclass(frozen=True)
class InventoryKey:
    """Identifies one stocked option value.

    Fabrics are stocked per color, so their key carries the fabric id and
    the color code rather than the catalog value id.
    """

    category: CategoryKind
    item_id: str
    color_code: str | None = None

    def __post_init__(self) -> None:
        if not self.item_id:
            raise ValueError("Inventory item id must not be empty")
        if self.color_code is not None and self.category is not CategoryKind.FABRIC:
            raise ValueError("Only fabric inventory keys carry a color code")

    @classmethod
    def for_value(cls, value: OptionCategoryValue) -> "InventoryKey":
        """Derive the key that stocks a catalog value."""
        if isinstance(value, FabricColorValue):
            return cls(
                category=CategoryKind.FABRIC,
                item_id=value.fabric_id,
                color_code=value.swatch_hex,
            )
        return cls(category=value.kind, item_id=value.id)

    @property
    def slug(self) -> str:
        """Flat identifier such as ``control_motorized`` or ``fabric_12_FFFFFF``."""
        if self.color_code is not None:
            return f"{self.category.slug_prefix}_{self.item_id}_{self.color_code}"
        return f"{self.category.slug_prefix}_{self.item_id}"

    def __str__(self) -> str:
        return self.slug
