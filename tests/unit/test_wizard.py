"""Unit tests for the configuration wizard.

These tests verify:
- Step completion predicates and gated forward navigation
- Backward navigation and history
- Jumping to steps with incomplete predecessors
- Live quotes, the summary and add to cart
- Snapshots and resuming saved configurations
"""

import logging
from decimal import Decimal

import pytest

from blinds.domain import (
    CategoryKind,
    ConfigurationWizard,
    ConfiguratorPolicy,
    DimensionOutOfRangeError,
    InvalidQuantityError,
    ProductConfiguration,
    ProductRef,
    RoomKind,
    SessionClosedError,
    StepNotAvailableError,
    UnknownCategoryValueError,
    WizardStep,
)
from blinds.domain.value_objects import FractionalInch, OptionsCompletion
from blinds.infrastructure import InMemoryCartSink, InMemorySavedConfigurationStore


def _complete_through_dimensions(wizard: ConfigurationWizard) -> None:
    wizard.select_room(RoomKind.BEDROOM)
    wizard.go_next()
    wizard.select_mount("outside")
    wizard.go_next()
    wizard.select_color("linen:#ffffff")
    wizard.go_next()
    wizard.set_width(36)
    wizard.set_height(48)
    wizard.go_next()


class TestNavigation:
    """Tests for step gating and navigation."""

    def test_starts_at_room(self, wizard: ConfigurationWizard) -> None:
        assert wizard.current_step is WizardStep.ROOM
        assert wizard.session.history == [WizardStep.ROOM]
        assert not wizard.can_proceed

    def test_next_blocked_until_room_chosen(self, wizard: ConfigurationWizard) -> None:
        assert wizard.go_next() is WizardStep.ROOM
        wizard.select_room("kitchen")
        assert wizard.go_next() is WizardStep.MOUNT

    def test_mount_step_needs_explicit_pick(self, wizard: ConfigurationWizard) -> None:
        """The default mount is priced but does not complete the step."""
        wizard.select_room(RoomKind.BEDROOM)
        wizard.go_next()
        assert wizard.effective_mount == "inside"
        assert not wizard.step_completed(WizardStep.MOUNT)
        assert wizard.go_next() is WizardStep.MOUNT

    def test_dimensions_gate(self, wizard: ConfigurationWizard) -> None:
        """Width 36 with height unset keeps the buyer on the dimensions step."""
        wizard.select_room(RoomKind.BEDROOM)
        wizard.go_next()
        wizard.select_mount("inside")
        wizard.go_next()
        wizard.select_color("linen:#ffffff")
        wizard.go_next()
        assert wizard.current_step is WizardStep.DIMENSIONS

        wizard.set_width(36)
        assert wizard.go_next() is WizardStep.DIMENSIONS
        wizard.set_height(48, "1/2")
        assert wizard.go_next() is WizardStep.OPTIONS

    def test_options_any_pick(self, wizard: ConfigurationWizard) -> None:
        _complete_through_dimensions(wizard)
        assert wizard.current_step is WizardStep.OPTIONS
        assert not wizard.can_proceed
        wizard.toggle_specialty("blackout")
        assert wizard.go_next() is WizardStep.SUMMARY
        assert not wizard.can_proceed
        assert wizard.go_next() is WizardStep.SUMMARY

    def test_options_every_category(self, catalog, dimensions, product_ref, cart_sink) -> None:
        config = ProductConfiguration(
            product_id="roller",
            dimensions=dimensions,
            catalog=catalog,
            policy=ConfiguratorPolicy(options_completion=OptionsCompletion.EVERY_CATEGORY),
        )
        config.add_selection(CategoryKind.CONTROL_TYPE, "cordless")
        config.add_selection(CategoryKind.HEADRAIL, "cassette")
        wizard = ConfigurationWizard(config, product_ref, cart_sink)

        wizard.select_option(CategoryKind.CONTROL_TYPE, "cordless")
        assert not wizard.step_completed(WizardStep.OPTIONS)
        wizard.select_option(CategoryKind.HEADRAIL, "cassette")
        assert wizard.step_completed(WizardStep.OPTIONS)

    def test_options_complete_when_nothing_offered(
        self, empty_product: ProductConfiguration, product_ref, cart_sink
    ) -> None:
        wizard = ConfigurationWizard(empty_product, product_ref, cart_sink)
        assert wizard.offered_option_kinds == []
        assert wizard.step_completed(WizardStep.OPTIONS)

    def test_previous_always_allowed(self, wizard: ConfigurationWizard) -> None:
        _complete_through_dimensions(wizard)
        assert wizard.go_previous() is WizardStep.DIMENSIONS
        assert wizard.go_previous() is WizardStep.COLOR
        wizard.go_previous()
        wizard.go_previous()
        assert wizard.go_previous() is WizardStep.ROOM

    def test_history_records_every_move(self, wizard: ConfigurationWizard) -> None:
        wizard.select_room(RoomKind.BEDROOM)
        wizard.go_next()
        wizard.go_previous()
        wizard.go_next()
        assert wizard.session.history == [
            WizardStep.ROOM,
            WizardStep.MOUNT,
            WizardStep.ROOM,
            WizardStep.MOUNT,
        ]

    def test_go_to_blocked_by_incomplete_step(self, wizard: ConfigurationWizard) -> None:
        wizard.select_room(RoomKind.BEDROOM)
        with pytest.raises(StepNotAvailableError, match="Mount Type"):
            wizard.go_to(WizardStep.DIMENSIONS)
        assert wizard.current_step is WizardStep.ROOM

    def test_go_to_available_step(self, wizard: ConfigurationWizard) -> None:
        _complete_through_dimensions(wizard)
        assert wizard.go_to(WizardStep.MOUNT) is WizardStep.MOUNT
        assert wizard.is_available(WizardStep.OPTIONS)
        assert wizard.go_to(WizardStep.OPTIONS) is WizardStep.OPTIONS


class TestChoices:
    """Tests for choice validation."""

    def test_unoffered_mount_rejected(self, wizard: ConfigurationWizard) -> None:
        with pytest.raises(UnknownCategoryValueError):
            wizard.select_mount("ceiling")

    def test_width_out_of_range_rejected(self, wizard: ConfigurationWizard) -> None:
        with pytest.raises(DimensionOutOfRangeError, match="Width"):
            wizard.set_width(100)
        assert wizard.session.width == FractionalInch()

    def test_zero_clears_measurement(self, wizard: ConfigurationWizard) -> None:
        wizard.set_height(48)
        wizard.set_height(0)
        assert wizard.session.height.whole == 0

    def test_mount_not_chosen_on_options_step(self, wizard: ConfigurationWizard) -> None:
        with pytest.raises(ValueError, match="not chosen on the options step"):
            wizard.select_option(CategoryKind.MOUNT_TYPE, "inside")

    def test_toggle_specialty(self, wizard: ConfigurationWizard) -> None:
        assert wizard.toggle_specialty("blackout") is True
        assert wizard.toggle_specialty("double-cell") is True
        assert wizard.session.chosen_options[CategoryKind.SPECIALTY] == ("blackout", "double-cell")
        assert wizard.toggle_specialty("blackout") is False
        assert wizard.toggle_specialty("double-cell") is False
        assert CategoryKind.SPECIALTY not in wizard.session.chosen_options

    def test_empty_specialty_selection_clears(self, wizard: ConfigurationWizard) -> None:
        wizard.select_option(CategoryKind.SPECIALTY, ["blackout"])
        wizard.select_option(CategoryKind.SPECIALTY, [])
        assert CategoryKind.SPECIALTY not in wizard.session.chosen_options


class TestQuoteAndCart:
    """Tests for quote, summary and add_to_cart."""

    def test_quote_uses_minimum_until_dimensions_complete(
        self, wizard: ConfigurationWizard
    ) -> None:
        wizard.set_width(48)
        breakdown = wizard.quote()
        assert breakdown.width == Decimal("24")
        assert breakdown.height == Decimal("36")
        assert breakdown.total == Decimal("100.00")

    def test_quote_prices_default_mount(self, wizard: ConfigurationWizard) -> None:
        wizard.session.mount_choice = None
        assert wizard.quote().chosen[CategoryKind.MOUNT_TYPE] == "inside"

    def test_live_quote(self, wizard: ConfigurationWizard) -> None:
        _complete_through_dimensions(wizard)
        wizard.select_option(CategoryKind.CONTROL_TYPE, "motorized")
        wizard.toggle_specialty("blackout")
        # outside mount adds $5
        assert wizard.quote().total == Decimal("220.00")

    def test_summary(self, wizard: ConfigurationWizard, product: ProductConfiguration) -> None:
        product.set_room_recommendation(RoomKind.BEDROOM, 5)
        _complete_through_dimensions(wizard)
        wizard.select_option(CategoryKind.CONTROL_TYPE, "cordless")
        wizard.set_quantity(2)

        summary = wizard.summary()
        assert summary.ready
        assert summary.room_recommendation.label == "Excellent"
        assert summary.mount.name == "Outside Mount"
        assert summary.color.display_name == "White (Linen)"
        assert summary.line_total == Decimal("310.00")
        lines = summary.lines()
        assert "Room: Bedroom" in lines
        assert "Control Type: Cordless" in lines
        assert "Total: $310.00" in lines

    def test_add_to_cart(self, wizard: ConfigurationWizard, cart_sink: InMemoryCartSink) -> None:
        _complete_through_dimensions(wizard)
        wizard.select_option(CategoryKind.CONTROL_TYPE, "motorized")
        wizard.set_quantity(3)

        item = wizard.add_to_cart()

        assert cart_sink.items == [item]
        assert item.quantity == 3
        assert item.width == Decimal("36")
        assert item.height == Decimal("48")
        assert item.unit_price == Decimal("200.00")
        assert item.line_total == Decimal("600.00")
        assert item.chosen_options[CategoryKind.MOUNT_TYPE] == "outside"
        assert wizard.session.closed

    def test_untouched_categories_carry_their_defaults(
        self,
        product: ProductConfiguration,
        product_ref: ProductRef,
        cart_sink: InMemoryCartSink,
        fixed_clock,
    ) -> None:
        product.set_default(CategoryKind.CONTROL_TYPE, "motorized")
        product.set_default(CategoryKind.HEADRAIL, "cassette")
        wizard = ConfigurationWizard(product, product_ref, cart_sink, clock=fixed_clock)
        wizard.select_room(RoomKind.BEDROOM)
        wizard.go_next()
        wizard.select_mount("inside")
        wizard.go_next()
        wizard.select_color("linen:#ffffff")
        wizard.go_next()
        wizard.set_width(24)
        wizard.set_height(36)
        wizard.go_next()
        assert not wizard.step_completed(WizardStep.OPTIONS)
        wizard.toggle_specialty("blackout")

        assert "Control Type: Motorized" in wizard.summary().lines()
        item = wizard.add_to_cart()

        # motorized $75, cassette $25, blackout $20
        assert item.unit_price == Decimal("220.00")
        assert item.chosen_options[CategoryKind.CONTROL_TYPE] == "motorized"
        assert item.chosen_options[CategoryKind.HEADRAIL] == "cassette"
        assert item.chosen_options[CategoryKind.BOTTOM_RAIL] == "standard"
        assert item.chosen_options[CategoryKind.SPECIALTY] == ("blackout",)
        assert CategoryKind.CONTROL_TYPE not in wizard.session.chosen_options

    @pytest.mark.parametrize("quantity", [0, -1, True, 1.5])
    def test_invalid_quantity(
        self, wizard: ConfigurationWizard, cart_sink: InMemoryCartSink, quantity
    ) -> None:
        wizard.set_quantity(quantity)
        with pytest.raises(InvalidQuantityError, match="valid quantity"):
            wizard.add_to_cart()
        assert cart_sink.items == []
        assert not wizard.session.closed

    def test_closed_session_rejects_changes(self, wizard: ConfigurationWizard) -> None:
        wizard.abandon()
        with pytest.raises(SessionClosedError):
            wizard.select_room(RoomKind.BEDROOM)
        with pytest.raises(SessionClosedError):
            wizard.add_to_cart()

    def test_product_mismatch_rejected(self, product, cart_sink) -> None:
        with pytest.raises(ValueError, match="does not match"):
            ConfigurationWizard(product, ProductRef.of("other", 100), cart_sink)


class TestSavedConfigurations:
    """Tests for snapshot and resume."""

    def test_snapshot_stores_session(
        self, product, product_ref, cart_sink, fixed_clock
    ) -> None:
        store = InMemorySavedConfigurationStore()
        wizard = ConfigurationWizard(
            product,
            product_ref,
            cart_sink,
            saved_configurations=store,
            clock=fixed_clock,
            id_factory=lambda: "saved-1",
        )
        _complete_through_dimensions(wizard)
        saved = wizard.snapshot("  Bedroom blind ")

        assert saved.name == "Bedroom blind"
        assert saved.saved_at == fixed_clock()
        assert store.get("saved-1") is saved

    def test_resume_opens_first_incomplete_step(self, wizard, product, cart_sink) -> None:
        _complete_through_dimensions(wizard)
        saved = wizard.snapshot("Bedroom")

        resumed = ConfigurationWizard.resume(saved, product, cart_sink)

        assert resumed.current_step is WizardStep.OPTIONS
        assert resumed.session.history == [WizardStep.OPTIONS]
        assert resumed.session.mount_choice == "outside"
        assert resumed.session.width == FractionalInch(36)

    def test_resume_drops_choices_no_longer_offered(
        self, wizard, product, cart_sink, caplog
    ) -> None:
        _complete_through_dimensions(wizard)
        wizard.select_option(CategoryKind.CONTROL_TYPE, "motorized")
        wizard.select_option(CategoryKind.SPECIALTY, ["blackout", "double-cell"])
        saved = wizard.snapshot("Bedroom")

        product.remove_selection(CategoryKind.CONTROL_TYPE, "motorized")
        product.remove_selection(CategoryKind.SPECIALTY, "double-cell")
        with caplog.at_level(logging.WARNING, logger="blinds.domain.services.wizard"):
            resumed = ConfigurationWizard.resume(saved, product, cart_sink)

        assert CategoryKind.CONTROL_TYPE not in resumed.session.chosen_options
        assert resumed.session.chosen_options[CategoryKind.SPECIALTY] == ("blackout",)
        assert resumed.current_step is WizardStep.SUMMARY
        assert "without 2 choice(s)" in caplog.text

    def test_resume_drops_sizes_outside_new_range(self, wizard, product, cart_sink) -> None:
        _complete_through_dimensions(wizard)
        saved = wizard.snapshot("Bedroom")
        product.set_dimension_range(
            {"min_width": 40, "max_width": 72, "min_height": 36, "max_height": 96}
        )

        resumed = ConfigurationWizard.resume(saved, product, cart_sink)

        assert resumed.session.width == FractionalInch()
        assert resumed.current_step is WizardStep.DIMENSIONS
