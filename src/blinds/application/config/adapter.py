"""Adapters from a ProductConfigurationFile to domain objects.

The schema models mirror the JSON layout; these functions build the
catalog store, product configuration, policy, coarse option map and
inventory ledger the domain services work with. Problems the domain
rejects are re-raised as ``ConfigError`` with ``error_type="domain"``.
"""

from datetime import datetime
from typing import Callable

from blinds.application.config.loader import ConfigError
from blinds.application.config.schema import (
    CatalogValueConfig,
    ProductConfigurationFile,
)
from blinds.domain.entities import ProductConfiguration
from blinds.domain.exceptions import ConfiguratorError
from blinds.domain.services import (
    CoarseOption,
    CoarseOptionMap,
    InventoryLedger,
    OptionCategoryStore,
    default_coarse_map,
)
from blinds.domain.value_objects import (
    CategoryKind,
    ConfiguratorPolicy,
    DimensionRange,
    FabricColorValue,
    InventoryKey,
    OptionCategoryValue,
    ProductRef,
    to_decimal,
)


def config_to_catalog(config: ProductConfigurationFile) -> OptionCategoryStore:
    """Build the option category store from the ``catalog`` section.

    Fabric colors become one catalog value each, priced at the fabric's
    adjustment plus the color's.
    """
    store = OptionCategoryStore()
    try:
        for kind in CategoryKind:
            for value in config.catalog.values_for(kind):
                store.add_value(_catalog_value(kind, value))
        for fabric in config.catalog.fabrics:
            for color in fabric.colors:
                store.add_value(
                    FabricColorValue.variant(
                        fabric_id=fabric.id,
                        fabric_name=fabric.name,
                        color_code=color.code,
                        color_name=color.name or color.code,
                        base_price_adjustment=to_decimal(fabric.price_adjustment)
                        + to_decimal(color.price_adjustment),
                        swatch_image_ref=color.swatch,
                        description=fabric.description,
                        image_ref=fabric.image,
                    )
                )
    except ValueError as e:
        raise ConfigError(message=f"Invalid catalog: {e}", error_type="domain") from e
    return store


def config_to_product_ref(config: ProductConfigurationFile) -> ProductRef:
    return ProductRef.of(
        id=config.product.id,
        name=config.product.name,
        base_price=config.product.base_price,
    )


def config_to_policy(config: ProductConfigurationFile) -> ConfiguratorPolicy:
    policy = config.policy
    floor = policy.price_adjustment_floor
    return ConfiguratorPolicy(
        price_adjustment_floor=to_decimal(floor) if floor is not None else None,
        size_rate_per_foot=to_decimal(policy.size_rate_per_foot),
        options_completion=policy.options_completion,
    )


def config_to_product(
    config: ProductConfigurationFile,
    catalog: OptionCategoryStore | None = None,
) -> ProductConfiguration:
    """Build the product configuration the pricing engine and wizard read.

    Selections are added in file order; the one marked ``default`` is made
    the category default.

    Raises:
        ConfigError: If the domain rejects the dimensions, a selection or an
            adjustment (``error_type="domain"``).
    """
    if catalog is None:
        catalog = config_to_catalog(config)
    dims = config.dimensions
    try:
        product = ProductConfiguration(
            product_id=config.product.id,
            dimensions=DimensionRange.of(
                min_width=dims.min_width,
                max_width=dims.max_width,
                min_height=dims.min_height,
                max_height=dims.max_height,
                width_increment=dims.width_increment,
                height_increment=dims.height_increment,
            ),
            catalog=catalog,
            policy=config_to_policy(config),
        )
        for kind in CategoryKind:
            for selection in config.selections.for_kind(kind):
                product.add_selection(kind, selection.value)
                if selection.additional_price_adjustment:
                    product.set_additional_price_adjustment(
                        kind, selection.value, selection.additional_price_adjustment
                    )
                if selection.default:
                    product.set_default(kind, selection.value)
        for recommendation in config.room_recommendations:
            product.set_room_recommendation(
                recommendation.room, recommendation.level, recommendation.note
            )
    except (ConfiguratorError, ValueError) as e:
        raise ConfigError(message=str(e), error_type="domain") from e
    return product


def config_to_coarse_map(config: ProductConfigurationFile) -> CoarseOptionMap:
    """The file's coarse option table, or the standard table if it has none."""
    if config.coarse_options is None:
        return default_coarse_map()
    try:
        return CoarseOptionMap(
            CoarseOption(
                option_name=row.option_name,
                value=row.value,
                kind=row.category,
                value_id=row.value_id,
                surcharge=to_decimal(row.surcharge),
            )
            for row in config.coarse_options
        )
    except ValueError as e:
        raise ConfigError(message=str(e), error_type="domain") from e


def config_to_inventory_ledger(
    config: ProductConfigurationFile,
    product: ProductConfiguration | None = None,
    clock: Callable[[], datetime] | None = None,
) -> InventoryLedger:
    """Generate an inventory ledger seeded with the file's stock figures."""
    if product is None:
        product = config_to_product(config)
    kwargs = {"clock": clock} if clock is not None else {}
    ledger = InventoryLedger(
        min_stock_levels=config.inventory.min_stock_levels, **kwargs
    )
    stock: dict[InventoryKey, int] = {}
    if config.inventory.stock:
        for selected in product.iter_selections():
            key = InventoryKey.for_value(selected.value)
            if key.slug in config.inventory.stock:
                stock[key] = config.inventory.stock[key.slug]
    ledger.generate(product, stock)
    return ledger


def _catalog_value(kind: CategoryKind, value: CatalogValueConfig) -> OptionCategoryValue:
    return OptionCategoryValue(
        id=value.id,
        kind=kind,
        name=value.name,
        base_price_adjustment=to_decimal(value.price_adjustment),
        description=value.description,
        image_ref=value.image,
    )
