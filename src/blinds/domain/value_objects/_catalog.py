"""Option category kinds and catalog values."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import re
from enum import Enum

from ._money import ZERO, MoneyLike, to_decimal

_HEX_COLOR = re.compile(r"[0-9A-F]{3}|[0-9A-F]{6}")


def canonical_color_code(code: str) -> str:
    """Six-digit upper-case hex without ``#`` (``#fff`` -> ``FFFFFF``).

    Raises:
        ValueError: If the code is not a 3 or 6 digit hex color.
    """
    digits = code.strip().lstrip("#").upper()
    if not _HEX_COLOR.fullmatch(digits):
        raise ValueError(f"Color code must be a 3 or 6 digit hex color, got {code!r}")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return digits


class CategoryKind(str, Enum):
    """The six option axes a configurable blind is priced on."""

    MOUNT_TYPE = "mount_type"
    CONTROL_TYPE = "control_type"
    FABRIC = "fabric"
    HEADRAIL = "headrail"
    BOTTOM_RAIL = "bottom_rail"
    SPECIALTY = "specialty"

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``Bottom Rail``."""
        return _LABELS[self]

    @property
    def slug_prefix(self) -> str:
        """Prefix used for inventory slugs."""
        return _SLUG_PREFIXES[self]

    @property
    def multi_select(self) -> bool:
        """Whether a buyer may choose several values at once."""
        return self is CategoryKind.SPECIALTY

    @classmethod
    def parse(cls, text: str) -> "CategoryKind":
        """Parse a kind from its value or label (``"Control Type"``, ``control_type``).

        Raises:
            ValueError: If the text names no category kind.
        """
        normalized = text.strip().lower().replace(" ", "_").replace("-", "_")
        for kind in cls:
            if normalized in (kind.value, kind.slug_prefix):
                return kind
        raise ValueError(f"Unknown option category: {text!r}")


_LABELS: dict[CategoryKind, str] = {
    CategoryKind.MOUNT_TYPE: "Mount Type",
    CategoryKind.CONTROL_TYPE: "Control Type",
    CategoryKind.FABRIC: "Fabric",
    CategoryKind.HEADRAIL: "Headrail",
    CategoryKind.BOTTOM_RAIL: "Bottom Rail",
    CategoryKind.SPECIALTY: "Specialty Option",
}

_SLUG_PREFIXES: dict[CategoryKind, str] = {
    CategoryKind.MOUNT_TYPE: "mount",
    CategoryKind.CONTROL_TYPE: "control",
    CategoryKind.FABRIC: "fabric",
    CategoryKind.HEADRAIL: "headrail",
    CategoryKind.BOTTOM_RAIL: "rail",
    CategoryKind.SPECIALTY: "specialty",
}


@dataclass(frozen=True)
class OptionCategoryValue:
    """An immutable catalog entry for one category kind.

    Attributes:
        id: Catalog identifier, unique within its category kind.
        kind: The category this value belongs to.
        name: Display name (e.g. "Motorized").
        base_price_adjustment: Catalog-level price delta, independent of product.
        description: Optional marketing description.
        image_ref: Optional reference to an image asset.
    """

    id: str
    kind: CategoryKind
    name: str
    base_price_adjustment: Decimal = ZERO
    description: str | None = None
    image_ref: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Catalog value id must not be empty")
        if not self.name:
            raise ValueError("Catalog value name must not be empty")
        object.__setattr__(
            self, "base_price_adjustment", to_decimal(self.base_price_adjustment)
        )
        if not self.base_price_adjustment.is_finite():
            raise ValueError("Base price adjustment must be finite")

    @property
    def display_name(self) -> str:
        """Name shown in listings and inventory rows."""
        return self.name


@dataclass(frozen=True)
class FabricColorValue(OptionCategoryValue):
    """One independently selectable color variant of a fabric.

    A fabric catalog entry fans out into one value per color; each variant
    is priced and stocked on its own. ``id`` defaults to
    ``"<fabric_id>:<color_code>"``.
    """

    fabric_id: str = ""
    color_code: str = ""
    color_name: str = ""
    swatch_image_ref: str | None = None

    def __post_init__(self) -> None:
        if self.kind is not CategoryKind.FABRIC:
            raise ValueError("Fabric color values must have kind FABRIC")
        if not self.fabric_id:
            raise ValueError("fabric_id must not be empty")
        if not self.color_code:
            raise ValueError("color_code must not be empty")
        canonical_color_code(self.color_code)
        if not self.color_name:
            object.__setattr__(self, "color_name", self.color_code)
        super().__post_init__()

    @classmethod
    def variant(
        cls,
        fabric_id: str,
        fabric_name: str,
        color_code: str,
        color_name: str,
        base_price_adjustment: MoneyLike = ZERO,
        swatch_image_ref: str | None = None,
        description: str | None = None,
        image_ref: str | None = None,
    ) -> "FabricColorValue":
        """Build a color variant with the conventional composite id."""
        return cls(
            id=f"{fabric_id}:{color_code}",
            kind=CategoryKind.FABRIC,
            name=fabric_name,
            base_price_adjustment=to_decimal(base_price_adjustment),
            description=description,
            image_ref=image_ref,
            fabric_id=fabric_id,
            color_code=color_code,
            color_name=color_name,
            swatch_image_ref=swatch_image_ref,
        )

    @property
    def swatch_hex(self) -> str:
        """Canonical six-digit code; ``#fff`` and ``FFFFFF`` stock the same row."""
        return canonical_color_code(self.color_code)

    @property
    def display_name(self) -> str:
        return f"{self.color_name} ({self.name})"

