"""Pytest configuration and shared fixtures for configurator tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import pytest

from blinds.application.factory import reset_factory
from blinds.domain import (
    CategoryKind,
    DimensionRange,
    FabricColorValue,
    OptionCategoryStore,
    OptionCategoryValue,
    ProductConfiguration,
    ProductRef,
)

if TYPE_CHECKING:
    from blinds.domain import ConfigurationWizard
    from blinds.infrastructure import InMemoryCartSink


FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests through the CLI")


@pytest.fixture(autouse=True)
def _reset_service_factory():
    """Make sure no test leaks a custom factory into the next one."""
    yield
    reset_factory()


# =============================================================================
# Catalog and product configuration
# =============================================================================


@pytest.fixture
def catalog() -> OptionCategoryStore:
    """A small catalog covering every category kind."""
    return OptionCategoryStore(
        [
            OptionCategoryValue("inside", CategoryKind.MOUNT_TYPE, "Inside Mount"),
            OptionCategoryValue("outside", CategoryKind.MOUNT_TYPE, "Outside Mount", 5),
            OptionCategoryValue("continuous-loop", CategoryKind.CONTROL_TYPE, "Continuous Loop"),
            OptionCategoryValue("cordless", CategoryKind.CONTROL_TYPE, "Cordless", 30),
            OptionCategoryValue("motorized", CategoryKind.CONTROL_TYPE, "Motorized", 75),
            FabricColorValue.variant("linen", "Linen", "#ffffff", "White"),
            FabricColorValue.variant("linen", "Linen", "#f5f5dc", "Beige", 5),
            OptionCategoryValue("open-roll", CategoryKind.HEADRAIL, "Open Roll"),
            OptionCategoryValue("cassette", CategoryKind.HEADRAIL, "Cassette", 25),
            OptionCategoryValue("standard", CategoryKind.BOTTOM_RAIL, "Standard"),
            OptionCategoryValue("blackout", CategoryKind.SPECIALTY, "Blackout", 20),
            OptionCategoryValue("room-darkening", CategoryKind.SPECIALTY, "Room Darkening", 10),
            OptionCategoryValue("double-cell", CategoryKind.SPECIALTY, "Double Cell", 15),
        ]
    )


@pytest.fixture
def dimensions() -> DimensionRange:
    return DimensionRange.of(min_width=24, max_width=72, min_height=36, max_height=96)


@pytest.fixture
def empty_product(catalog: OptionCategoryStore, dimensions: DimensionRange) -> ProductConfiguration:
    """A roller shade configuration with nothing selected yet."""
    return ProductConfiguration(product_id="roller", dimensions=dimensions, catalog=catalog)


@pytest.fixture
def product(empty_product: ProductConfiguration) -> ProductConfiguration:
    """A roller shade offering most of the catalog.

    Defaults are the first value added in each category: inside mount,
    continuous loop, white linen, open roll headrail, standard rail and
    blackout.
    """
    selections = {
        CategoryKind.MOUNT_TYPE: ["inside", "outside"],
        CategoryKind.CONTROL_TYPE: ["continuous-loop", "cordless", "motorized"],
        CategoryKind.FABRIC: ["linen:#ffffff", "linen:#f5f5dc"],
        CategoryKind.HEADRAIL: ["open-roll", "cassette"],
        CategoryKind.BOTTOM_RAIL: ["standard"],
        CategoryKind.SPECIALTY: ["blackout", "room-darkening", "double-cell"],
    }
    for kind, value_ids in selections.items():
        for value_id in value_ids:
            empty_product.add_selection(kind, value_id)
    return empty_product


@pytest.fixture
def product_ref() -> ProductRef:
    return ProductRef.of(id="roller", name="Roller Shade", base_price=100)


# =============================================================================
# Wizard collaborators
# =============================================================================


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def cart_sink() -> "InMemoryCartSink":
    from blinds.infrastructure import InMemoryCartSink

    return InMemoryCartSink()


@pytest.fixture
def wizard(
    product: ProductConfiguration,
    product_ref: ProductRef,
    cart_sink: "InMemoryCartSink",
    fixed_clock,
) -> "ConfigurationWizard":
    """A fresh wizard session for the roller shade."""
    from blinds.domain import ConfigurationWizard

    return ConfigurationWizard(product, product_ref, cart_sink, clock=fixed_clock)
