"""Unit tests for the coarse option mapping.

These tests verify:
- The standard table maps storefront names onto catalog values
- Coarse estimates agree with the pricing engine
- Unmapped pairs are ignored and conflicting pairs are rejected
"""

from decimal import Decimal

import pytest

from blinds.domain import (
    CategoryKind,
    OptionCategoryStore,
    ProductConfiguration,
    UnknownCategoryValueError,
    compute_price,
    estimate_price,
)
from blinds.domain.services import (
    DEFAULT_COARSE_OPTIONS,
    CoarseOption,
    CoarseOptionMap,
    default_coarse_map,
)


class TestCoarseOptionMap:
    """Tests for CoarseOptionMap."""

    def test_default_table(self) -> None:
        mapping = default_coarse_map()
        assert len(mapping) == len(DEFAULT_COARSE_OPTIONS)
        entry = mapping.lookup("Control Type", "Motorized")
        assert entry is not None
        assert entry.kind is CategoryKind.CONTROL_TYPE
        assert entry.surcharge == Decimal("75")

    def test_translate(self) -> None:
        chosen = default_coarse_map().translate(
            {"Control Type": "Cordless", "Opacity": "Room Darkening", "Cell Type": "Double Cell"}
        )
        assert chosen == {
            CategoryKind.CONTROL_TYPE: "cordless",
            CategoryKind.SPECIALTY: ("room-darkening", "double-cell"),
        }

    def test_unmapped_pairs_ignored(self) -> None:
        assert default_coarse_map().translate({"Valance": "Yes", "Opacity": "Sheer"}) == {}

    def test_conflicting_single_select_rejected(self) -> None:
        mapping = CoarseOptionMap(
            [
                CoarseOption("Control Type", "Motorized", CategoryKind.CONTROL_TYPE, "motorized"),
                CoarseOption("Remote", "Yes", CategoryKind.CONTROL_TYPE, "motorized-remote"),
            ]
        )
        with pytest.raises(UnknownCategoryValueError, match="single choice"):
            mapping.translate({"Control Type": "Motorized", "Remote": "Yes"})

    def test_duplicate_row_rejected(self) -> None:
        mapping = default_coarse_map()
        with pytest.raises(ValueError, match="already mapped"):
            mapping.add(
                CoarseOption("Opacity", "Blackout", CategoryKind.SPECIALTY, "blackout-2")
            )

    def test_empty_value_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="value id"):
            CoarseOption("Opacity", "Blackout", CategoryKind.SPECIALTY, "")

    def test_catalog_values_carry_surcharges(self) -> None:
        values = {v.id: v for v in default_coarse_map().catalog_values()}
        assert values["day-night"].base_price_adjustment == Decimal("40")
        assert values["double-cell"].kind is CategoryKind.SPECIALTY


class TestEstimatePrice:
    """Tests for estimate_price."""

    def test_matches_pricing_engine(self, product: ProductConfiguration) -> None:
        coarse = {"Control Type": "Motorized", "Opacity": "Blackout"}
        estimate = estimate_price(product, 100, 36, 48, coarse)
        direct = compute_price(
            product,
            100,
            36,
            48,
            {CategoryKind.CONTROL_TYPE: "motorized", CategoryKind.SPECIALTY: ["blackout"]},
        )
        assert estimate.total == direct.total == Decimal("215.00")

    def test_value_not_offered_is_an_error(self, product: ProductConfiguration) -> None:
        with pytest.raises(UnknownCategoryValueError):
            estimate_price(product, 100, 36, 48, {"Control Type": "Day/Night"})

    def test_product_built_from_the_table(self, dimensions) -> None:
        """A product offering the whole table reproduces its surcharges."""
        mapping = default_coarse_map()
        config = ProductConfiguration(
            product_id="cellular",
            dimensions=dimensions,
            catalog=OptionCategoryStore(mapping.catalog_values()),
        )
        mapping.apply_to(config)
        mapping.apply_to(config)

        breakdown = estimate_price(
            config,
            100,
            24,
            36,
            {"Control Type": "Day/Night", "Opacity": "Blackout", "Cell Type": "Double Cell"},
            mapping=mapping,
        )
        assert breakdown.control_type_adjustment == Decimal("40")
        assert breakdown.specialty_adjustment == Decimal("35")
        assert breakdown.total == Decimal("175.00")
