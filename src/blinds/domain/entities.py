"""Domain entities for product configuration, checkout and stock."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Iterator, Mapping, Sequence

from .exceptions import (
    CannotRemoveDefaultError,
    DuplicateSelectionError,
    InvalidAmountError,
    InvalidDimensionRangeError,
    SelectionNotFoundError,
    UnknownCategoryValueError,
)
from .value_objects import (
    DEFAULT_RECOMMENDATION_LEVEL,
    ZERO,
    CategoryKind,
    ConfiguratorPolicy,
    DimensionRange,
    FractionalInch,
    InventoryKey,
    MoneyLike,
    OptionCategoryValue,
    ProductRef,
    RoomKind,
    RoomRecommendation,
    WizardStep,
    to_decimal,
)

if TYPE_CHECKING:
    from blinds.contracts.protocols import CatalogReader

# A buyer's pick per category: one value id, or several for multi-select kinds
Choice = str | tuple[str, ...]


@dataclass(frozen=True)
class SelectedOption:
    """A catalog value offered for one product.

    Holds a reference to the catalog entry rather than a copy, plus the
    per-product surcharge layered on top of the catalog adjustment.

    Attributes:
        value: The catalog entry being offered.
        is_default: Whether this value is pre-chosen for the buyer.
        additional_price_adjustment: Per-product surcharge.
    """

    value: OptionCategoryValue
    is_default: bool = False
    additional_price_adjustment: Decimal = ZERO

    @property
    def category_value_id(self) -> str:
        return self.value.id

    @property
    def kind(self) -> CategoryKind:
        return self.value.kind

    @property
    def total_adjustment(self) -> Decimal:
        """Catalog adjustment plus the per-product surcharge."""
        return self.value.base_price_adjustment + self.additional_price_adjustment


@dataclass
class ProductConfiguration:
    """A vendor's curated option space for one configurable product.

    Every editing operation acts on a single category and either applies
    completely or raises without changing anything. For each category with
    at least one selection, exactly one selection is the default.

    Attributes:
        product_id: Identifier of the product this configuration belongs to.
        dimensions: Orderable width/height bounds.
        catalog: Option category store the selections reference.
        policy: Platform rules (adjustment floor, size rate, wizard policy).
        room_recommendations: Merchandising guidance per room.
        revision: Stored revision this copy was loaded at, checked on save.
    """

    product_id: str
    dimensions: DimensionRange
    catalog: "CatalogReader" = field(repr=False, compare=False)
    policy: ConfiguratorPolicy = field(default_factory=ConfiguratorPolicy)
    room_recommendations: dict[RoomKind, RoomRecommendation] = field(
        default_factory=dict
    )
    revision: int = 0
    option_selections: dict[CategoryKind, list[SelectedOption]] = field(
        default_factory=dict, repr=False
    )

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValueError("Product id must not be empty")
        for kind in CategoryKind:
            self.option_selections.setdefault(kind, [])

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def selections(self, kind: CategoryKind) -> tuple[SelectedOption, ...]:
        """Selections for a category, in the order they were added."""
        return tuple(self.option_selections[kind])

    def iter_selections(self) -> Iterator[SelectedOption]:
        """All selections across categories, category by category."""
        for kind in CategoryKind:
            yield from self.option_selections[kind]

    def get_selection(self, kind: CategoryKind, value_id: str) -> SelectedOption:
        """Return the selection for a value.

        Raises:
            SelectionNotFoundError: If the value is not selected.
        """
        for selected in self.option_selections[kind]:
            if selected.category_value_id == value_id:
                return selected
        raise SelectionNotFoundError(kind, value_id)

    def is_selected(self, kind: CategoryKind, value_id: str) -> bool:
        return any(s.category_value_id == value_id for s in self.option_selections[kind])

    def selected_value_ids(self, kind: CategoryKind) -> list[str]:
        return [s.category_value_id for s in self.option_selections[kind]]

    def default_for(self, kind: CategoryKind) -> SelectedOption | None:
        """The category's default selection, or None if it has no selections."""
        for selected in self.option_selections[kind]:
            if selected.is_default:
                return selected
        return None

    @property
    def offered_kinds(self) -> list[CategoryKind]:
        """Categories with at least one selection."""
        return [kind for kind in CategoryKind if self.option_selections[kind]]

    @property
    def is_configured(self) -> bool:
        return bool(self.offered_kinds)

    def resolve_choices(
        self, chosen: Mapping[CategoryKind, Choice]
    ) -> dict[CategoryKind, Choice]:
        """Fill unchosen categories with their designated default value.

        Specialty options are never defaulted; the buyer opts into them.
        """
        resolved: dict[CategoryKind, Choice] = dict(chosen)
        for kind in CategoryKind:
            if kind in resolved or kind.multi_select:
                continue
            default = self.default_for(kind)
            if default is not None:
                resolved[kind] = default.category_value_id
        return resolved

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_selection(self, kind: CategoryKind, value_id: str) -> SelectedOption:
        """Offer a catalog value for this product.

        The first selection in a category becomes its default.

        Raises:
            DuplicateSelectionError: If the value is already selected.
            UnknownCategoryValueError: If the catalog has no such value.
        """
        if self.is_selected(kind, value_id):
            raise DuplicateSelectionError(kind, value_id)
        value = self.catalog.get_value(kind, value_id)
        if value is None:
            raise UnknownCategoryValueError(
                kind, value_id, f"{kind.label} '{value_id}' does not exist in the catalog"
            )
        selected = SelectedOption(
            value=value,
            is_default=not self.option_selections[kind],
            additional_price_adjustment=ZERO,
        )
        self.option_selections[kind] = [*self.option_selections[kind], selected]
        return selected

    def remove_selection(self, kind: CategoryKind, value_id: str) -> None:
        """Stop offering a value.

        Raises:
            SelectionNotFoundError: If the value is not selected.
            CannotRemoveDefaultError: If the value is the default and other
                selections remain in the category.
        """
        target = self.get_selection(kind, value_id)
        current = self.option_selections[kind]
        if target.is_default and len(current) > 1:
            raise CannotRemoveDefaultError(kind, value_id)
        self.option_selections[kind] = [s for s in current if s.category_value_id != value_id]

    def set_default(self, kind: CategoryKind, value_id: str) -> None:
        """Make a selected value the category's only default.

        Raises:
            SelectionNotFoundError: If the value is not selected.
        """
        self.get_selection(kind, value_id)
        self.option_selections[kind] = [
            replace(s, is_default=s.category_value_id == value_id)
            for s in self.option_selections[kind]
        ]

    def set_additional_price_adjustment(
        self, kind: CategoryKind, value_id: str, amount: MoneyLike
    ) -> None:
        """Set the per-product surcharge for a selected value.

        Raises:
            InvalidAmountError: If the amount is not a finite number at or
                above the policy's floor.
            SelectionNotFoundError: If the value is not selected.
        """
        adjustment = self._validate_amount(amount)
        self.get_selection(kind, value_id)
        self.option_selections[kind] = [
            replace(s, additional_price_adjustment=adjustment)
            if s.category_value_id == value_id
            else s
            for s in self.option_selections[kind]
        ]

    def set_dimension_range(
        self, dimensions: DimensionRange | Mapping[str, MoneyLike]
    ) -> None:
        """Replace the orderable size domain.

        Accepts a ``DimensionRange`` or a mapping of its field names to
        numbers (``{"min_width": 24, "max_width": 72, ...}``).

        Raises:
            InvalidDimensionRangeError: If min >= max on either axis or an
                increment is not positive.
        """
        if not isinstance(dimensions, DimensionRange):
            try:
                dimensions = DimensionRange.of(**dimensions)
            except TypeError as e:
                raise InvalidDimensionRangeError(f"Incomplete dimension range: {e}") from e
        self.dimensions = dimensions

    def _validate_amount(self, amount: MoneyLike) -> Decimal:
        if isinstance(amount, float) and not math.isfinite(amount):
            raise InvalidAmountError(amount, self.policy.price_adjustment_floor)
        try:
            value = to_decimal(amount)
        except ValueError as e:
            raise InvalidAmountError(amount, self.policy.price_adjustment_floor) from e
        if not value.is_finite():
            raise InvalidAmountError(amount, self.policy.price_adjustment_floor)
        floor = self.policy.price_adjustment_floor
        if floor is not None and value < floor:
            raise InvalidAmountError(amount, floor)
        return value

    # -------------------------------------------------------------------------
    # Room recommendations
    # -------------------------------------------------------------------------

    def set_room_recommendation(
        self,
        room: RoomKind,
        level: int = DEFAULT_RECOMMENDATION_LEVEL,
        note: str | None = None,
    ) -> RoomRecommendation:
        """Add or replace the recommendation for a room."""
        recommendation = RoomRecommendation(room=room, level=level, note=note)
        self.room_recommendations[room] = recommendation
        return recommendation

    def remove_room_recommendation(self, room: RoomKind) -> bool:
        """Drop a room's recommendation. Returns False if there was none."""
        return self.room_recommendations.pop(room, None) is not None

    def recommendation_for(self, room: RoomKind) -> RoomRecommendation | None:
        return self.room_recommendations.get(room)

    # -------------------------------------------------------------------------
    # Copies
    # -------------------------------------------------------------------------

    def copy(self) -> "ProductConfiguration":
        """Independent copy sharing the (immutable) catalog entries."""
        return replace(
            self,
            room_recommendations=dict(self.room_recommendations),
            option_selections={kind: list(items) for kind, items in self.option_selections.items()},
        )


@dataclass(frozen=True)
class CartLineItem:
    """A configured product handed to the external cart."""

    product_ref: ProductRef
    width: Decimal
    height: Decimal
    chosen_options: Mapping[CategoryKind, Choice]
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class WizardSession:
    """Ephemeral state of one buyer's walk through the configuration wizard.

    The session is plain data; ``ConfigurationWizard`` applies the
    transition rules to it.

    Attributes:
        product_ref: The product being configured.
        current_step: The step the buyer is looking at.
        room: Chosen room, if any.
        mount_choice: Explicitly chosen mount type value id.
        color_choice: Explicitly chosen fabric color value id.
        width: Entered width.
        height: Entered height.
        chosen_options: Explicit picks for the options step.
        quantity: Number of blinds to order.
        history: Every step the buyer has been shown, in order.
        closed: True once the session has been added to cart or abandoned.
    """

    product_ref: ProductRef
    current_step: WizardStep = WizardStep.ROOM
    room: RoomKind | None = None
    mount_choice: str | None = None
    color_choice: str | None = None
    width: FractionalInch = field(default_factory=FractionalInch)
    height: FractionalInch = field(default_factory=FractionalInch)
    chosen_options: dict[CategoryKind, Choice] = field(default_factory=dict)
    quantity: int = 1
    history: list[WizardStep] = field(default_factory=lambda: [WizardStep.ROOM])
    closed: bool = False


@dataclass(frozen=True)
class SavedConfiguration:
    """A named snapshot of a wizard session the buyer can come back to."""

    id: str
    name: str
    saved_at: datetime
    product_ref: ProductRef
    room: RoomKind | None
    mount_choice: str | None
    color_choice: str | None
    width: FractionalInch
    height: FractionalInch
    chosen_options: Mapping[CategoryKind, Choice]
    quantity: int

    def __post_init__(self) -> None:
        name = self.name.strip()
        if not name:
            raise ValueError("Saved configuration name must not be empty")
        object.__setattr__(self, "name", name)


@dataclass
class InventoryItem:
    """Stock figures for one selected option value.

    Attributes:
        key: Which option value this row stocks.
        display_name: Name shown in the inventory table.
        total_stock: Units owned.
        available_stock: Units not yet committed to orders.
        min_stock_level: Threshold at or below which the row is low on stock.
        last_updated: When the row last changed (UTC).
    """

    key: InventoryKey
    display_name: str
    total_stock: int
    available_stock: int
    min_stock_level: int
    last_updated: datetime

    def __post_init__(self) -> None:
        if self.total_stock < 0:
            raise ValueError("Total stock cannot be negative")
        if self.available_stock < 0:
            raise ValueError("Available stock cannot be negative")
        if self.min_stock_level < 0:
            raise ValueError("Minimum stock level cannot be negative")

    @property
    def category(self) -> CategoryKind:
        return self.key.category

    @property
    def is_low_stock(self) -> bool:
        return self.available_stock <= self.min_stock_level


def normalize_choice(kind: CategoryKind, choice: str | Sequence[str]) -> Choice:
    """Coerce a buyer's pick into the canonical ``Choice`` shape.

    Raises:
        UnknownCategoryValueError: If several values are given for a
            single-select category.
    """
    if isinstance(choice, str):
        return (choice,) if kind.multi_select else choice
    values = tuple(choice)
    if kind.multi_select:
        return values
    if len(values) == 1:
        return values[0]
    raise UnknownCategoryValueError(
        kind, values, f"{kind.label} accepts a single choice (got {len(values)})"
    )
