"""Configuration wizard state machine.

The wizard walks a buyer through a fixed sequence of steps::

    Room -> Mount -> Color -> Dimensions -> Options -> Summary

Each step has a completion predicate computed from the session. ``go_next``
only advances from a completed step, ``go_previous`` is always allowed
except at the first step, and ``add_to_cart`` hands a priced line item to
the cart sink and ends the session.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Mapping, Sequence

from ..entities import (
    CartLineItem,
    Choice,
    ProductConfiguration,
    SavedConfiguration,
    WizardSession,
    normalize_choice,
)
from ..exceptions import (
    DimensionOutOfRangeError,
    InvalidQuantityError,
    SessionClosedError,
    StepNotAvailableError,
    UnknownCategoryValueError,
)
from ..value_objects import (
    STEP_ORDER,
    CategoryKind,
    FractionalInch,
    OptionCategoryValue,
    OptionsCompletion,
    ProductRef,
    RoomKind,
    RoomRecommendation,
    WizardStep,
    format_money,
)
from .pricing import PriceBreakdown, compute_price

if TYPE_CHECKING:
    from blinds.contracts.protocols import CartSink, SavedConfigurationStore

logger = logging.getLogger(__name__)

__all__ = ["OPTION_KINDS", "ConfigurationWizard", "WizardSummary"]

# Categories chosen on the options step; mount and fabric have their own steps
OPTION_KINDS: tuple[CategoryKind, ...] = (
    CategoryKind.CONTROL_TYPE,
    CategoryKind.HEADRAIL,
    CategoryKind.BOTTOM_RAIL,
    CategoryKind.SPECIALTY,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class WizardSummary:
    """What the buyer reviews on the summary step."""

    product_ref: ProductRef
    room: RoomKind | None
    room_recommendation: RoomRecommendation | None
    mount: OptionCategoryValue | None
    color: OptionCategoryValue | None
    width: FractionalInch
    height: FractionalInch
    options: Mapping[CategoryKind, tuple[OptionCategoryValue, ...]]
    quantity: int
    price: PriceBreakdown
    completed: Mapping[WizardStep, bool] = field(default_factory=dict)

    @property
    def line_total(self) -> Decimal:
        return self.price.total * self.quantity

    @property
    def ready(self) -> bool:
        """True if every step before the summary is complete."""
        return all(done for step, done in self.completed.items() if step is not WizardStep.SUMMARY)

    def lines(self) -> list[str]:
        """Plain-text review lines."""
        lines = [f"Product: {self.product_ref.name or self.product_ref.id}"]
        if self.room is not None:
            lines.append(f"Room: {self.room.label}")
        if self.mount is not None:
            lines.append(f"Mount Type: {self.mount.display_name}")
        if self.color is not None:
            lines.append(f"Color: {self.color.display_name}")
        lines.append(f"Dimensions: {self.width} W x {self.height} H")
        for kind, values in self.options.items():
            names = ", ".join(v.display_name for v in values)
            lines.append(f"{kind.label}: {names}")
        lines.append(f"Quantity: {self.quantity}")
        lines.append(f"Unit Price: {format_money(self.price.total)}")
        lines.append(f"Total: {format_money(self.line_total)}")
        return lines


class ConfigurationWizard:
    """Drives one buyer's configuration session for a product.

    The session holds the state; the wizard validates every change against
    the product configuration and applies the step rules.

    Args:
        config: The product's curated option space.
        product_ref: The product being configured, with its base price.
        cart_sink: Receives the line item on ``add_to_cart``.
        session: Existing session to continue. A fresh one is created if
            omitted.
        saved_configurations: Store for ``snapshot``. Optional.
        clock: Returns the current UTC time; used for snapshots.
        id_factory: Returns new saved configuration ids.
    """

    def __init__(
        self,
        config: ProductConfiguration,
        product_ref: ProductRef,
        cart_sink: CartSink,
        session: WizardSession | None = None,
        saved_configurations: SavedConfigurationStore | None = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        if product_ref.id != config.product_id:
            raise ValueError(
                f"Product '{product_ref.id}' does not match configuration "
                f"for '{config.product_id}'"
            )
        self.config = config
        self.product_ref = product_ref
        self.cart_sink = cart_sink
        self.session = session if session is not None else WizardSession(product_ref=product_ref)
        self.saved_configurations = saved_configurations
        self._clock = clock
        self._id_factory = id_factory

    # -------------------------------------------------------------------------
    # Step choices
    # -------------------------------------------------------------------------

    def select_room(self, room: RoomKind | str) -> None:
        self._ensure_open()
        self.session.room = RoomKind(room)

    def select_mount(self, value_id: str) -> None:
        """Choose a mount type offered for the product.

        Raises:
            UnknownCategoryValueError: If the mount type is not offered.
        """
        self._ensure_open()
        self._require_offered(CategoryKind.MOUNT_TYPE, value_id)
        self.session.mount_choice = value_id

    def select_color(self, value_id: str) -> None:
        """Choose a fabric color offered for the product.

        Raises:
            UnknownCategoryValueError: If the fabric color is not offered.
        """
        self._ensure_open()
        self._require_offered(CategoryKind.FABRIC, value_id)
        self.session.color_choice = value_id

    def set_width(self, whole: int, fraction: str = "0") -> None:
        """Enter the width. A whole part of 0 clears the measurement.

        Raises:
            DimensionOutOfRangeError: If the width lies outside the product's
                range.
        """
        self._ensure_open()
        width = FractionalInch(whole, fraction)
        self._check_measurement("width", width)
        self.session.width = width

    def set_height(self, whole: int, fraction: str = "0") -> None:
        """Enter the height. A whole part of 0 clears the measurement.

        Raises:
            DimensionOutOfRangeError: If the height lies outside the product's
                range.
        """
        self._ensure_open()
        height = FractionalInch(whole, fraction)
        self._check_measurement("height", height)
        self.session.height = height

    def select_option(self, kind: CategoryKind, choice: str | Sequence[str]) -> None:
        """Pick a value for one of the options step categories.

        Specialty accepts several ids and replaces the previous set.

        Raises:
            ValueError: If the category is chosen on another step.
            UnknownCategoryValueError: If a value is not offered, or several
                values are given for a single-select category.
        """
        self._ensure_open()
        if kind not in OPTION_KINDS:
            raise ValueError(f"{kind.label} is not chosen on the options step")
        normalized = normalize_choice(kind, choice)
        value_ids = normalized if isinstance(normalized, tuple) else (normalized,)
        for value_id in value_ids:
            self._require_offered(kind, value_id)
        if normalized == ():
            self.session.chosen_options.pop(kind, None)
        else:
            self.session.chosen_options[kind] = normalized

    def clear_option(self, kind: CategoryKind) -> None:
        self._ensure_open()
        self.session.chosen_options.pop(kind, None)

    def toggle_specialty(self, value_id: str) -> bool:
        """Add or remove one specialty option. Returns True if now chosen."""
        self._ensure_open()
        self._require_offered(CategoryKind.SPECIALTY, value_id)
        chosen = self.session.chosen_options.get(CategoryKind.SPECIALTY, ())
        current = chosen if isinstance(chosen, tuple) else (chosen,)
        if value_id in current:
            remaining = tuple(v for v in current if v != value_id)
            if remaining:
                self.session.chosen_options[CategoryKind.SPECIALTY] = remaining
            else:
                self.session.chosen_options.pop(CategoryKind.SPECIALTY, None)
            return False
        self.session.chosen_options[CategoryKind.SPECIALTY] = (*current, value_id)
        return True

    def set_quantity(self, quantity: int) -> None:
        """Store the quantity; it is validated by ``add_to_cart``."""
        self._ensure_open()
        self.session.quantity = quantity

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def current_step(self) -> WizardStep:
        return self.session.current_step

    @property
    def effective_mount(self) -> str | None:
        """The explicit mount choice, else the product's default mount."""
        if self.session.mount_choice is not None:
            return self.session.mount_choice
        default = self.config.default_for(CategoryKind.MOUNT_TYPE)
        return default.category_value_id if default is not None else None

    @property
    def offered_option_kinds(self) -> list[CategoryKind]:
        return [kind for kind in OPTION_KINDS if self.config.selections(kind)]

    def step_completed(self, step: WizardStep) -> bool:
        session = self.session
        if step is WizardStep.ROOM:
            return session.room is not None
        if step is WizardStep.MOUNT:
            return session.mount_choice is not None
        if step is WizardStep.COLOR:
            return session.color_choice is not None
        if step is WizardStep.DIMENSIONS:
            return session.width.whole > 0 and session.height.whole > 0
        if step is WizardStep.OPTIONS:
            return self._options_completed()
        return True

    @property
    def completed_steps(self) -> dict[WizardStep, bool]:
        return {step: self.step_completed(step) for step in STEP_ORDER}

    @property
    def can_proceed(self) -> bool:
        """Whether ``go_next`` would advance from the current step."""
        return (
            self.session.current_step is not WizardStep.SUMMARY
            and self.step_completed(self.session.current_step)
        )

    def is_available(self, step: WizardStep) -> bool:
        """True if every step before ``step`` is complete."""
        return self._first_incomplete_before(step) is None

    def chosen_options(self) -> dict[CategoryKind, Choice]:
        """Category choices as priced and carried to the cart.

        Explicit picks win; every other single-select category falls back to
        the product's default. Specialty options are only ever explicit.
        """
        explicit: dict[CategoryKind, Choice] = {}
        if self.session.mount_choice is not None:
            explicit[CategoryKind.MOUNT_TYPE] = self.session.mount_choice
        if self.session.color_choice is not None:
            explicit[CategoryKind.FABRIC] = self.session.color_choice
        explicit.update(self.session.chosen_options)
        return self.config.resolve_choices(explicit)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def go_next(self) -> WizardStep:
        """Advance if the current step is complete; otherwise stay put."""
        self._ensure_open()
        if not self.can_proceed:
            return self.session.current_step
        return self._move_to(STEP_ORDER[self.session.current_step.index + 1])

    def go_previous(self) -> WizardStep:
        """Step back; stays put at the first step."""
        self._ensure_open()
        if self.session.current_step is WizardStep.ROOM:
            return self.session.current_step
        return self._move_to(STEP_ORDER[self.session.current_step.index - 1])

    def go_to(self, step: WizardStep) -> WizardStep:
        """Jump to a step whose predecessors are all complete.

        Raises:
            StepNotAvailableError: If an earlier step is incomplete.
        """
        self._ensure_open()
        blocking = self._first_incomplete_before(step)
        if blocking is not None:
            raise StepNotAvailableError(step, blocking)
        if step is self.session.current_step:
            return step
        return self._move_to(step)

    # -------------------------------------------------------------------------
    # Pricing and review
    # -------------------------------------------------------------------------

    def quote(self) -> PriceBreakdown:
        """Live price. Minimum dimensions are priced until both are entered."""
        width, height = self._priced_dimensions()
        return compute_price(
            self.config,
            self.product_ref.base_price,
            width,
            height,
            self.chosen_options(),
        )

    def summary(self) -> WizardSummary:
        chosen = self.chosen_options()
        options: dict[CategoryKind, tuple[OptionCategoryValue, ...]] = {}
        for kind, choice in chosen.items():
            if kind in (CategoryKind.MOUNT_TYPE, CategoryKind.FABRIC):
                continue
            value_ids = choice if isinstance(choice, tuple) else (choice,)
            options[kind] = tuple(
                self.config.get_selection(kind, value_id).value for value_id in value_ids
            )
        room = self.session.room
        return WizardSummary(
            product_ref=self.product_ref,
            room=room,
            room_recommendation=self.config.recommendation_for(room) if room else None,
            mount=self._value_or_none(
                CategoryKind.MOUNT_TYPE, chosen.get(CategoryKind.MOUNT_TYPE)
            ),
            color=self._value_or_none(CategoryKind.FABRIC, chosen.get(CategoryKind.FABRIC)),
            width=self.session.width,
            height=self.session.height,
            options=options,
            quantity=self.session.quantity,
            price=self.quote(),
            completed=self.completed_steps,
        )

    # -------------------------------------------------------------------------
    # Session end
    # -------------------------------------------------------------------------

    def add_to_cart(self) -> CartLineItem:
        """Emit a priced line item to the cart and close the session.

        Raises:
            InvalidQuantityError: If the quantity is not a positive integer.
            SessionClosedError: If the session already ended.
        """
        self._ensure_open()
        quantity = self.session.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError(quantity)

        breakdown = self.quote()
        item = CartLineItem(
            product_ref=self.product_ref,
            width=breakdown.width,
            height=breakdown.height,
            chosen_options=self.chosen_options(),
            quantity=quantity,
            unit_price=breakdown.total,
        )
        self.cart_sink.add_line_item(item)
        self.session.closed = True
        logger.info(
            f"Added {quantity} x {self.product_ref.id} to cart "
            f"at {format_money(item.unit_price)} each"
        )
        return item

    def abandon(self) -> None:
        """End the session without adding anything to the cart."""
        self._ensure_open()
        self.session.closed = True
        logger.debug(f"Wizard session for {self.product_ref.id} abandoned")

    # -------------------------------------------------------------------------
    # Saved configurations
    # -------------------------------------------------------------------------

    def snapshot(self, name: str) -> SavedConfiguration:
        """Capture the session under a name, storing it if a store is set."""
        self._ensure_open()
        session = self.session
        saved = SavedConfiguration(
            id=self._id_factory(),
            name=name,
            saved_at=self._clock(),
            product_ref=self.product_ref,
            room=session.room,
            mount_choice=session.mount_choice,
            color_choice=session.color_choice,
            width=session.width,
            height=session.height,
            chosen_options=dict(session.chosen_options),
            quantity=session.quantity,
        )
        if self.saved_configurations is not None:
            self.saved_configurations.save(saved)
        logger.debug(f"Saved configuration '{saved.name}' ({saved.id})")
        return saved

    @classmethod
    def resume(
        cls,
        saved: SavedConfiguration,
        config: ProductConfiguration,
        cart_sink: CartSink,
        saved_configurations: SavedConfigurationStore | None = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> "ConfigurationWizard":
        """Start a session from a saved configuration.

        Choices the product no longer offers are dropped. The session opens
        on the first incomplete step, or the summary if none is.
        """
        wizard = cls(
            config,
            saved.product_ref,
            cart_sink,
            saved_configurations=saved_configurations,
            clock=clock,
            id_factory=id_factory,
        )
        session = wizard.session
        session.room = saved.room
        if saved.mount_choice is not None and wizard._offered(
            CategoryKind.MOUNT_TYPE, saved.mount_choice
        ):
            session.mount_choice = saved.mount_choice
        if saved.color_choice is not None and wizard._offered(
            CategoryKind.FABRIC, saved.color_choice
        ):
            session.color_choice = saved.color_choice
        if wizard._fits("width", saved.width):
            session.width = saved.width
        if wizard._fits("height", saved.height):
            session.height = saved.height
        for kind, choice in saved.chosen_options.items():
            value_ids = choice if isinstance(choice, tuple) else (choice,)
            kept = tuple(v for v in value_ids if wizard._offered(kind, v))
            if not kept:
                continue
            session.chosen_options[kind] = kept if kind.multi_select else kept[0]
        session.quantity = saved.quantity

        dropped = wizard._count_dropped(saved)
        if dropped:
            logger.warning(
                f"Resumed '{saved.name}' without {dropped} choice(s) "
                f"no longer offered for {config.product_id}"
            )

        start = next(
            (step for step in STEP_ORDER if not wizard.step_completed(step)),
            WizardStep.SUMMARY,
        )
        session.current_step = start
        session.history = [start]
        return wizard

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self.session.closed:
            raise SessionClosedError(
                f"Wizard session for '{self.product_ref.id}' has ended"
            )

    def _move_to(self, step: WizardStep) -> WizardStep:
        self.session.current_step = step
        self.session.history.append(step)
        return step

    def _first_incomplete_before(self, step: WizardStep) -> WizardStep | None:
        for earlier in STEP_ORDER[: step.index]:
            if not self.step_completed(earlier):
                return earlier
        return None

    def _options_completed(self) -> bool:
        offered = self.offered_option_kinds
        if not offered:
            return True
        picked = {kind for kind, choice in self.session.chosen_options.items() if choice}
        if self.config.policy.options_completion is OptionsCompletion.EVERY_CATEGORY:
            return all(kind in picked for kind in offered)
        return bool(picked)

    def _offered(self, kind: CategoryKind, value_id: str) -> bool:
        return self.config.is_selected(kind, value_id)

    def _require_offered(self, kind: CategoryKind, value_id: str) -> None:
        if not self._offered(kind, value_id):
            raise UnknownCategoryValueError(kind, value_id)

    def _value_or_none(
        self, kind: CategoryKind, value_id: str | None
    ) -> OptionCategoryValue | None:
        if value_id is None or not self._offered(kind, value_id):
            return None
        return self.config.get_selection(kind, value_id).value

    def _check_measurement(self, axis: str, measurement: FractionalInch) -> None:
        if not self._fits(axis, measurement):
            dimensions = self.config.dimensions
            if axis == "width":
                minimum, maximum = dimensions.min_width, dimensions.max_width
            else:
                minimum, maximum = dimensions.min_height, dimensions.max_height
            raise DimensionOutOfRangeError(axis, measurement.inches, minimum, maximum)

    def _fits(self, axis: str, measurement: FractionalInch) -> bool:
        if measurement.whole == 0:
            return True
        dimensions = self.config.dimensions
        if axis == "width":
            return dimensions.contains_width(measurement.inches)
        return dimensions.contains_height(measurement.inches)

    def _priced_dimensions(self) -> tuple[Decimal, Decimal]:
        if self.step_completed(WizardStep.DIMENSIONS):
            return self.session.width.inches, self.session.height.inches
        return self.config.dimensions.min_width, self.config.dimensions.min_height

    def _count_dropped(self, saved: SavedConfiguration) -> int:
        session = self.session
        dropped = 0
        if saved.mount_choice is not None and session.mount_choice is None:
            dropped += 1
        if saved.color_choice is not None and session.color_choice is None:
            dropped += 1
        if saved.width != session.width:
            dropped += 1
        if saved.height != session.height:
            dropped += 1
        for kind, choice in saved.chosen_options.items():
            value_ids = choice if isinstance(choice, tuple) else (choice,)
            kept = session.chosen_options.get(kind, ())
            kept_ids = kept if isinstance(kept, tuple) else (kept,)
            dropped += sum(1 for v in value_ids if v not in kept_ids)
        return dropped
