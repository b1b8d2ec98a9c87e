"""Infrastructure layer - in-memory collaborators and formatters."""

from .formatters import (
    INVENTORY_CSV_HEADERS,
    InventoryCsvExporter,
    InventoryReportFormatter,
    PriceBreakdownFormatter,
)
from .memory import (
    InMemoryCartSink,
    InMemoryConfigurationRepository,
    InMemoryInventoryStore,
    InMemorySavedConfigurationStore,
)

__all__ = [
    # Formatters
    "INVENTORY_CSV_HEADERS",
    "InventoryCsvExporter",
    "InventoryReportFormatter",
    "PriceBreakdownFormatter",
    # In-memory collaborators
    "InMemoryCartSink",
    "InMemoryConfigurationRepository",
    "InMemoryInventoryStore",
    "InMemorySavedConfigurationStore",
]
