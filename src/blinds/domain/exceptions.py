"""Exceptions raised by the configuration, pricing, wizard and inventory core.

Every error is a local validation failure raised at the point of the
offending call. None of them are retried and none are swallowed; they
propagate to the vendor UI or the wizard for user-visible correction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .value_objects import CategoryKind, InventoryKey, WizardStep


class ConfiguratorError(Exception):
    """Base class for all configurator errors."""

    pass


# =============================================================================
# Product configuration editor
# =============================================================================


class DuplicateSelectionError(ConfiguratorError):
    """Raised when a category value is already selected for a product."""

    def __init__(self, kind: "CategoryKind", value_id: str) -> None:
        self.kind = kind
        self.value_id = value_id
        super().__init__(f"{kind.label} '{value_id}' is already selected")


class CannotRemoveDefaultError(ConfiguratorError):
    """Raised when removing the default while other selections remain."""

    def __init__(self, kind: "CategoryKind", value_id: str) -> None:
        self.kind = kind
        self.value_id = value_id
        super().__init__(
            f"Cannot remove the default {kind.label.lower()} '{value_id}'. "
            f"Set another {kind.label.lower()} as default first."
        )


class SelectionNotFoundError(ConfiguratorError, LookupError):
    """Raised when an operation targets a value that is not selected."""

    def __init__(self, kind: "CategoryKind", value_id: str) -> None:
        self.kind = kind
        self.value_id = value_id
        super().__init__(f"{kind.label} '{value_id}' is not selected for this product")


class InvalidAmountError(ConfiguratorError, ValueError):
    """Raised when a price adjustment is not finite or is below the floor."""

    def __init__(self, amount: Any, floor: Any = None) -> None:
        self.amount = amount
        self.floor = floor
        if floor is None:
            message = f"Price adjustment must be a finite number (got: {amount!r})"
        else:
            message = (
                f"Price adjustment must be a finite number >= {floor} (got: {amount!r})"
            )
        super().__init__(message)


class InvalidDimensionRangeError(ConfiguratorError, ValueError):
    """Raised when a dimension range violates min < max or increment > 0."""

    pass


class ConcurrentModificationError(ConfiguratorError):
    """Raised when saving a configuration whose revision is stale."""

    def __init__(self, product_id: str, expected: int, actual: int) -> None:
        self.product_id = product_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Product '{product_id}' was modified concurrently "
            f"(editing revision {expected}, stored revision {actual})"
        )


class ConfigurationNotFoundError(ConfiguratorError, LookupError):
    """Raised when no configuration is stored for a product."""

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"No configuration for product '{product_id}'")


# =============================================================================
# Pricing engine
# =============================================================================


class UnknownCategoryValueError(ConfiguratorError, LookupError):
    """Raised when a chosen value is not among a category's selections."""

    def __init__(self, kind: "CategoryKind", value_id: Any, reason: str | None = None) -> None:
        self.kind = kind
        self.value_id = value_id
        message = reason or f"{kind.label} '{value_id}' is not offered for this product"
        super().__init__(message)


class DimensionOutOfRangeError(ConfiguratorError, ValueError):
    """Raised when a width or height lies outside the product's bounds."""

    def __init__(self, axis: str, value: Any, minimum: Any, maximum: Any) -> None:
        self.axis = axis
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{axis.capitalize()} {value}\" is outside the allowed range "
            f"{minimum}\" to {maximum}\""
        )


# =============================================================================
# Wizard
# =============================================================================


class InvalidQuantityError(ConfiguratorError, ValueError):
    """Raised when adding a non-positive quantity to the cart."""

    def __init__(self, quantity: Any) -> None:
        self.quantity = quantity
        super().__init__(f"Please select a valid quantity (got: {quantity!r})")


class SessionClosedError(ConfiguratorError):
    """Raised when a wizard session is used after it has ended."""

    pass


class StepNotAvailableError(ConfiguratorError):
    """Raised when jumping to a step whose predecessors are incomplete."""

    def __init__(self, step: "WizardStep", blocking: "WizardStep") -> None:
        self.step = step
        self.blocking = blocking
        super().__init__(
            f"Cannot open the {step.label} step until the {blocking.label} step is complete"
        )


class SavedConfigurationNotFoundError(ConfiguratorError, LookupError):
    """Raised when a saved configuration id is unknown."""

    def __init__(self, configuration_id: str) -> None:
        self.configuration_id = configuration_id
        super().__init__(f"Saved configuration not found: {configuration_id}")


# =============================================================================
# Inventory ledger
# =============================================================================


class InsufficientStockError(ConfiguratorError, ValueError):
    """Raised when an adjustment would drive available stock below zero."""

    def __init__(self, key: "InventoryKey", available: int, delta: int) -> None:
        self.key = key
        self.available = available
        self.delta = delta
        super().__init__(
            f"Insufficient stock for {key.slug}: {available} available, "
            f"adjustment of {delta} requested"
        )


class UnknownInventoryKeyError(ConfiguratorError, LookupError):
    """Raised when an inventory key is absent from the ledger."""

    def __init__(self, key: "InventoryKey") -> None:
        self.key = key
        super().__init__(f"Unknown inventory item: {key.slug}")
