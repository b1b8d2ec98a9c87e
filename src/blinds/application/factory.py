"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from blinds.application.commands import QuotePriceCommand
    from blinds.application.config import ProductConfigurationFile
    from blinds.contracts.protocols import CartSink, SavedConfigurationStore
    from blinds.domain import ConfigurationWizard, InventoryLedger
    from blinds.infrastructure import (
        InventoryCsvExporter,
        InventoryReportFormatter,
        PriceBreakdownFormatter,
    )


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Formatters and exporters are created lazily and cached. Commands, the
    wizard and the inventory ledger are built per configuration file.

    Attributes:
        clock: Optional clock passed to the ledger and the wizard, for tests.
    """

    clock: Callable[[], datetime] | None = None

    # Cached instances (use field with init=False for dataclass)
    _price_formatter: "PriceBreakdownFormatter | None" = field(
        default=None, init=False, repr=False
    )
    _inventory_formatter: "InventoryReportFormatter | None" = field(
        default=None, init=False, repr=False
    )
    _inventory_csv_exporter: "InventoryCsvExporter | None" = field(
        default=None, init=False, repr=False
    )

    def get_price_formatter(self) -> "PriceBreakdownFormatter":
        """Get or create the price breakdown formatter."""
        if self._price_formatter is None:
            from blinds.infrastructure import PriceBreakdownFormatter

            self._price_formatter = PriceBreakdownFormatter()
        return self._price_formatter

    def get_inventory_formatter(self) -> "InventoryReportFormatter":
        """Get or create the inventory table formatter."""
        if self._inventory_formatter is None:
            from blinds.infrastructure import InventoryReportFormatter

            self._inventory_formatter = InventoryReportFormatter()
        return self._inventory_formatter

    def get_inventory_csv_exporter(self) -> "InventoryCsvExporter":
        """Get or create the inventory CSV exporter."""
        if self._inventory_csv_exporter is None:
            from blinds.infrastructure import InventoryCsvExporter

            self._inventory_csv_exporter = InventoryCsvExporter()
        return self._inventory_csv_exporter

    def create_quote_command(self, config: "ProductConfigurationFile") -> "QuotePriceCommand":
        """Create a quote command for a loaded configuration file.

        Raises:
            ConfigError: If the configuration cannot be turned into domain
                objects.
        """
        from blinds.application.commands import QuotePriceCommand
        from blinds.application.config import (
            config_to_coarse_map,
            config_to_product,
            config_to_product_ref,
        )

        return QuotePriceCommand(
            product=config_to_product(config),
            product_ref=config_to_product_ref(config),
            coarse_map=config_to_coarse_map(config),
        )

    def create_inventory_ledger(self, config: "ProductConfigurationFile") -> "InventoryLedger":
        """Create an inventory ledger seeded from a configuration file."""
        from blinds.application.config import config_to_inventory_ledger

        return config_to_inventory_ledger(config, clock=self.clock)

    def create_wizard(
        self,
        config: "ProductConfigurationFile",
        cart_sink: "CartSink",
        saved_configurations: "SavedConfigurationStore | None" = None,
    ) -> "ConfigurationWizard":
        """Start a wizard session for a configuration file's product."""
        from blinds.application.config import config_to_product, config_to_product_ref
        from blinds.domain import ConfigurationWizard

        kwargs = {"clock": self.clock} if self.clock is not None else {}
        return ConfigurationWizard(
            config_to_product(config),
            config_to_product_ref(config),
            cart_sink,
            saved_configurations=saved_configurations,
            **kwargs,
        )


# Module-level default factory
_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
