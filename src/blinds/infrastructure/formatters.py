"""Output formatters and exporters for quotes and inventory."""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Sequence

from blinds.domain import InventoryItem, PriceBreakdown
from blinds.domain.value_objects import CategoryKind, format_money

logger = logging.getLogger(__name__)

INVENTORY_CSV_HEADERS = [
    "Name",
    "Type",
    "Total Stock",
    "Available Stock",
    "Min Stock Level",
    "Last Updated",
]


class PriceBreakdownFormatter:
    """Formats a price breakdown for display."""

    def __init__(self, show_zero_adjustments: bool = False) -> None:
        """Initialize formatter.

        Args:
            show_zero_adjustments: Whether to list categories with no
                adjustment.
        """
        self._show_zero = show_zero_adjustments

    def format(self, breakdown: PriceBreakdown, title: str = "PRICE BREAKDOWN") -> str:
        """Format a breakdown as a two-column table."""
        lines = [
            title,
            "=" * 50,
            f'Size: {breakdown.width}" W x {breakdown.height}" H',
            "-" * 50,
            f"{'Base price':<30} {format_money(breakdown.base_price):>18}",
            f"{'Size adjustment':<30} {format_money(breakdown.size_adjustment):>18}",
        ]

        for kind in CategoryKind:
            amount = breakdown.adjustment_for(kind)
            if not amount and not self._show_zero:
                continue
            label = self._category_label(breakdown, kind)
            lines.append(f"{label:<30} {format_money(amount):>18}")

        lines.append("-" * 50)
        lines.append(f"{'TOTAL':<30} {format_money(breakdown.total):>18}")
        return "\n".join(lines)

    def format_json(self, breakdown: PriceBreakdown) -> str:
        return json.dumps(breakdown.as_dict(), indent=2)

    def _category_label(self, breakdown: PriceBreakdown, kind: CategoryKind) -> str:
        choice = breakdown.chosen.get(kind)
        if choice is None:
            return kind.label
        ids = ", ".join(choice) if isinstance(choice, tuple) else choice
        label = f"{kind.label} ({ids})"
        return label if len(label) <= 30 else label[:27] + "..."


class InventoryReportFormatter:
    """Formats inventory rows as a text table with low-stock flags."""

    def format(self, items: Sequence[InventoryItem]) -> str:
        if not items:
            return "No inventory items."

        lines = [
            "INVENTORY",
            "=" * 90,
            f"{'Name':<30} {'Type':<18} {'Total':>7} {'Avail':>7} {'Min':>5}  {'Status'}",
            "-" * 90,
        ]
        low = 0
        for item in items:
            status = "LOW" if item.is_low_stock else "OK"
            if item.is_low_stock:
                low += 1
            name = item.display_name if len(item.display_name) <= 30 else item.display_name[:27] + "..."
            lines.append(
                f"{name:<30} {item.category.label:<18} {item.total_stock:>7} "
                f"{item.available_stock:>7} {item.min_stock_level:>5}  {status}"
            )
        lines.append("-" * 90)
        lines.append(f"{len(items)} items, {low} low on stock")
        return "\n".join(lines)


class InventoryCsvExporter:
    """Exports inventory rows as CSV with the storefront's column headers."""

    format_name = "csv"
    file_extension = "csv"

    def export_string(self, items: Sequence[InventoryItem]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(INVENTORY_CSV_HEADERS)
        for item in items:
            writer.writerow(
                [
                    item.display_name,
                    item.category.label,
                    item.total_stock,
                    item.available_stock,
                    item.min_stock_level,
                    item.last_updated.isoformat(timespec="seconds"),
                ]
            )
        return output.getvalue()

    def export(self, items: Sequence[InventoryItem], path: Path) -> None:
        path.write_text(self.export_string(items))
        logger.info(f"Exported {len(items)} inventory rows to {path}")

