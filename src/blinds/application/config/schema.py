"""Pydantic models for product configuration files.

A configuration file describes one configurable blind: the product record,
its orderable dimension range, the option catalog, which catalog values the
product offers (with defaults and surcharges), room recommendations, pricing
policy and an optional coarse option table.

Example:
    >>> config = ProductConfigurationFile(
    ...     schema_version="1.0",
    ...     product=ProductConfig(id="roller", name="Roller Shade", base_price=100),
    ...     dimensions=DimensionsConfig(
    ...         min_width=24, max_width=72, min_height=36, max_height=96
    ...     ),
    ... )
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from blinds.domain.value_objects import (
    DEFAULT_RECOMMENDATION_LEVEL,
    MAX_RECOMMENDATION_LEVEL,
    MIN_RECOMMENDATION_LEVEL,
    CategoryKind,
    OptionsCompletion,
    RoomKind,
)

# Supported schema versions for configuration files
# Version 1.0: Initial schema
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class ProductConfig(BaseModel):
    """The product record the configuration belongs to.

    Attributes:
        id: Product identifier
        name: Display title
        base_price: Declared base price in dollars (non-negative)
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    base_price: float = Field(..., ge=0)


class DimensionsConfig(BaseModel):
    """Orderable size domain in inches.

    The min < max ordering is checked by ``validate_config`` so that it is
    reported with the other configuration errors.
    """

    model_config = ConfigDict(extra="forbid")

    min_width: float = Field(..., gt=0)
    max_width: float = Field(..., gt=0)
    min_height: float = Field(..., gt=0)
    max_height: float = Field(..., gt=0)
    width_increment: float = Field(default=0.125, gt=0)
    height_increment: float = Field(default=0.125, gt=0)


class CatalogValueConfig(BaseModel):
    """A catalog value for a non-fabric category."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price_adjustment: float = 0.0
    description: str | None = None
    image: str | None = None


class FabricColorConfig(BaseModel):
    """One color variant of a fabric."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(..., min_length=1)
    name: str = ""
    price_adjustment: float = 0.0
    swatch: str | None = None


class FabricConfig(BaseModel):
    """A fabric and its color variants.

    Each color becomes its own catalog value with id ``<fabric id>:<code>``.
    The color's price adjustment is added to the fabric's.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price_adjustment: float = 0.0
    description: str | None = None
    image: str | None = None
    colors: list[FabricColorConfig] = Field(default_factory=list)


class CatalogConfig(BaseModel):
    """Catalog values available to the product, per category."""

    model_config = ConfigDict(extra="forbid")

    mount_type: list[CatalogValueConfig] = Field(default_factory=list)
    control_type: list[CatalogValueConfig] = Field(default_factory=list)
    fabrics: list[FabricConfig] = Field(default_factory=list)
    headrail: list[CatalogValueConfig] = Field(default_factory=list)
    bottom_rail: list[CatalogValueConfig] = Field(default_factory=list)
    specialty: list[CatalogValueConfig] = Field(default_factory=list)

    def values_for(self, kind: CategoryKind) -> list[CatalogValueConfig]:
        """Non-fabric catalog entries for a category kind."""
        if kind is CategoryKind.FABRIC:
            return []
        return list(getattr(self, kind.value))


class SelectionConfig(BaseModel):
    """A catalog value offered for this product."""

    model_config = ConfigDict(extra="forbid")

    value: str = Field(..., min_length=1)
    default: bool = False
    additional_price_adjustment: float = 0.0


class SelectionsConfig(BaseModel):
    """Selected catalog values per category, in display order."""

    model_config = ConfigDict(extra="forbid")

    mount_type: list[SelectionConfig] = Field(default_factory=list)
    control_type: list[SelectionConfig] = Field(default_factory=list)
    fabric: list[SelectionConfig] = Field(default_factory=list)
    headrail: list[SelectionConfig] = Field(default_factory=list)
    bottom_rail: list[SelectionConfig] = Field(default_factory=list)
    specialty: list[SelectionConfig] = Field(default_factory=list)

    def for_kind(self, kind: CategoryKind) -> list[SelectionConfig]:
        return list(getattr(self, kind.value))


class RoomRecommendationConfig(BaseModel):
    """Suitability of the product for a room, 1 (not recommended) to 5."""

    model_config = ConfigDict(extra="forbid")

    room: RoomKind
    level: int = Field(
        default=DEFAULT_RECOMMENDATION_LEVEL,
        ge=MIN_RECOMMENDATION_LEVEL,
        le=MAX_RECOMMENDATION_LEVEL,
    )
    note: str | None = None


class PolicyConfig(BaseModel):
    """Pricing and wizard rules.

    Attributes:
        price_adjustment_floor: Lowest allowed additional price adjustment;
            null allows discounts of any size
        size_rate_per_foot: Fraction of the base price per extra linear foot
        options_completion: Options step completion rule
    """

    model_config = ConfigDict(extra="forbid")

    price_adjustment_floor: float | None = 0.0
    size_rate_per_foot: float = Field(default=0.10, ge=0)
    options_completion: OptionsCompletion = OptionsCompletion.ANY_PICK


class CoarseOptionConfig(BaseModel):
    """A row of the coarse option table."""

    model_config = ConfigDict(extra="forbid")

    option_name: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)
    category: CategoryKind
    value_id: str = Field(..., min_length=1)
    surcharge: float = 0.0


class InventoryConfig(BaseModel):
    """Initial stock figures.

    Attributes:
        min_stock_levels: Low-stock threshold overrides per category
        stock: Initial stock per inventory slug (e.g. ``mount_inside``)
    """

    model_config = ConfigDict(extra="forbid")

    min_stock_levels: dict[CategoryKind, int] = Field(default_factory=dict)
    stock: dict[str, int] = Field(default_factory=dict)

    @field_validator("min_stock_levels", "stock")
    @classmethod
    def validate_non_negative(cls, v: dict) -> dict:
        for key, count in v.items():
            if count < 0:
                raise ValueError(f"Stock figure for '{key}' cannot be negative")
        return v


class ProductConfigurationFile(BaseModel):
    """Root model of a product configuration file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        product: Product record
        dimensions: Orderable dimension range
        catalog: Option catalog
        selections: Offered catalog values
        room_recommendations: Merchandising guidance
        policy: Pricing and wizard rules
        coarse_options: Coarse option table; the standard table if omitted
        inventory: Initial inventory figures
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    product: ProductConfig
    dimensions: DimensionsConfig
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    selections: SelectionsConfig = Field(default_factory=SelectionsConfig)
    room_recommendations: list[RoomRecommendationConfig] = Field(default_factory=list)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    coarse_options: list[CoarseOptionConfig] | None = Field(
        default=None, description="Coarse option table (optional)"
    )
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
