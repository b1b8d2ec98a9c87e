"""Unit tests for quote and inventory formatters."""

import json
from pathlib import Path

import pytest

from blinds.domain import CategoryKind, InventoryLedger, compute_price
from blinds.infrastructure import (
    INVENTORY_CSV_HEADERS,
    InventoryCsvExporter,
    InventoryReportFormatter,
    PriceBreakdownFormatter,
)


@pytest.fixture
def breakdown(product):
    return compute_price(
        product,
        100,
        36,
        48,
        {CategoryKind.CONTROL_TYPE: "motorized", CategoryKind.SPECIALTY: ["blackout"]},
    )


@pytest.fixture
def items(product, fixed_clock):
    ledger = InventoryLedger(clock=fixed_clock)
    ledger.generate(product)
    return ledger.query(category=CategoryKind.CONTROL_TYPE)


class TestPriceBreakdownFormatter:
    """Tests for PriceBreakdownFormatter."""

    def test_table(self, breakdown) -> None:
        output = PriceBreakdownFormatter().format(breakdown)
        lines = output.splitlines()
        assert lines[0] == "PRICE BREAKDOWN"
        assert lines[2] == 'Size: 36" W x 48" H'
        assert "Control Type (motorized)" in output
        assert "Specialty Option (blackout)" in output
        assert "Headrail" not in output
        assert lines[-1].startswith("TOTAL")
        assert lines[-1].endswith("$215.00")

    def test_show_zero_adjustments(self, breakdown) -> None:
        output = PriceBreakdownFormatter(show_zero_adjustments=True).format(breakdown)
        assert "Headrail" in output

    def test_json(self, breakdown) -> None:
        data = json.loads(PriceBreakdownFormatter().format_json(breakdown))
        assert data["total"] == "215.00"
        assert data["chosen"]["control_type"] == "motorized"


class TestInventoryReportFormatter:
    """Tests for InventoryReportFormatter."""

    def test_empty(self) -> None:
        assert InventoryReportFormatter().format([]) == "No inventory items."

    def test_table(self, items) -> None:
        output = InventoryReportFormatter().format(items)
        assert output.splitlines()[0] == "INVENTORY"
        assert "Motorized" in output
        assert "LOW" in output
        assert output.splitlines()[-1] == "3 items, 3 low on stock"


class TestInventoryCsvExporter:
    """Tests for InventoryCsvExporter."""

    def test_export_string(self, items) -> None:
        lines = InventoryCsvExporter().export_string(items).splitlines()
        assert lines[0] == ",".join(INVENTORY_CSV_HEADERS)
        assert lines[1] == "Continuous Loop,Control Type,0,0,5,2024-03-01T12:00:00+00:00"
        assert len(lines) == 4

    def test_export_to_file(self, items, tmp_path: Path) -> None:
        path = tmp_path / "stock.csv"
        InventoryCsvExporter().export(items, path)
        assert path.read_text().startswith("Name,Type,Total Stock")
