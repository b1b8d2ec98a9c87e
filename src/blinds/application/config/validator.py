"""Validation of product configuration files beyond the schema.

The schema checks shapes and value ranges of single fields. The checks here
look across fields: selections against the catalog, the one-default rule,
dimension ordering, surcharge floors, and merchandising advisories.
"""

from dataclasses import dataclass, field
from typing import Any

from blinds.application.config.schema import ProductConfigurationFile
from blinds.domain.value_objects import CategoryKind, InventoryKey, canonical_color_code


@dataclass
class ValidationError:
    """A blocking problem: the configuration cannot be used as is.

    Attributes:
        path: JSON path to the invalid field (e.g., "selections.fabric[0].value")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking concern the vendor should know about.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings collected by ``validate_config``."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def catalog_ids(config: ProductConfigurationFile) -> dict[CategoryKind, list[str]]:
    """Catalog value ids per category, fabric colors expanded."""
    ids: dict[CategoryKind, list[str]] = {}
    for kind in CategoryKind:
        if kind is CategoryKind.FABRIC:
            ids[kind] = [
                f"{fabric.id}:{color.code}"
                for fabric in config.catalog.fabrics
                for color in fabric.colors
            ]
        else:
            ids[kind] = [value.id for value in config.catalog.values_for(kind)]
    return ids


def check_catalog(config: ProductConfigurationFile) -> ValidationResult:
    """Duplicate catalog ids, bad color codes and fabrics without colors."""
    result = ValidationResult()
    for kind, ids in catalog_ids(config).items():
        seen: set[str] = set()
        for value_id in ids:
            if value_id in seen:
                result.add_error(
                    path=f"catalog.{_catalog_section(kind)}",
                    message=f"Duplicate {kind.label.lower()} id '{value_id}' in catalog",
                    value=value_id,
                )
            seen.add(value_id)

    for i, fabric in enumerate(config.catalog.fabrics):
        if not fabric.colors:
            result.add_warning(
                path=f"catalog.fabrics[{i}].colors",
                message=f"Fabric '{fabric.name}' has no colors and cannot be selected",
                suggestion="Add at least one color variant",
            )
        seen_codes: dict[str, str] = {}
        for j, color in enumerate(fabric.colors):
            path = f"catalog.fabrics[{i}].colors[{j}].code"
            try:
                canonical = canonical_color_code(color.code)
            except ValueError as e:
                result.add_error(path=path, message=str(e), value=color.code)
                continue
            if canonical in seen_codes:
                result.add_warning(
                    path=path,
                    message=(
                        f"Color '{color.code}' is the same color as "
                        f"'{seen_codes[canonical]}' and shares its stock row"
                    ),
                    suggestion="Remove one of the two color variants",
                )
            seen_codes.setdefault(canonical, color.code)
    return result


def check_selections(config: ProductConfigurationFile) -> ValidationResult:
    """Selections must exist in the catalog, be unique and have one default."""
    result = ValidationResult()
    available = catalog_ids(config)
    floor = config.policy.price_adjustment_floor

    for kind in CategoryKind:
        selections = config.selections.for_kind(kind)
        base_path = f"selections.{kind.value}"
        if not selections:
            if kind is not CategoryKind.SPECIALTY:
                result.add_warning(
                    path=base_path,
                    message=f"No {kind.label.lower()} values are offered",
                    suggestion=f"Select at least one {kind.label.lower()} for buyers",
                )
            continue

        seen: set[str] = set()
        for i, selection in enumerate(selections):
            path = f"{base_path}[{i}]"
            if selection.value not in available[kind]:
                result.add_error(
                    path=f"{path}.value",
                    message=f"{kind.label} '{selection.value}' does not exist in the catalog",
                    value=selection.value,
                )
            if selection.value in seen:
                result.add_error(
                    path=f"{path}.value",
                    message=f"{kind.label} '{selection.value}' is selected more than once",
                    value=selection.value,
                )
            seen.add(selection.value)
            if floor is not None and selection.additional_price_adjustment < floor:
                result.add_error(
                    path=f"{path}.additional_price_adjustment",
                    message=f"Additional price adjustment must be >= {floor}",
                    value=selection.additional_price_adjustment,
                )

        defaults = [s.value for s in selections if s.default]
        if len(defaults) != 1:
            result.add_error(
                path=base_path,
                message=(
                    f"Exactly one {kind.label.lower()} must be marked default "
                    f"(found {len(defaults)})"
                ),
                value=defaults,
            )
    return result


def check_dimensions(config: ProductConfigurationFile) -> ValidationResult:
    """Min < max on both axes; increments that leave a single size."""
    result = ValidationResult()
    dims = config.dimensions
    if dims.min_width >= dims.max_width:
        result.add_error(
            path="dimensions.min_width",
            message=(
                f"Minimum width ({dims.min_width}\") must be less than "
                f"maximum width ({dims.max_width}\")"
            ),
            value=dims.min_width,
        )
    elif dims.width_increment > dims.max_width - dims.min_width:
        result.add_warning(
            path="dimensions.width_increment",
            message="Width increment is larger than the width range",
            suggestion="Use an increment such as 0.125 (1/8 inch)",
        )
    if dims.min_height >= dims.max_height:
        result.add_error(
            path="dimensions.min_height",
            message=(
                f"Minimum height ({dims.min_height}\") must be less than "
                f"maximum height ({dims.max_height}\")"
            ),
            value=dims.min_height,
        )
    elif dims.height_increment > dims.max_height - dims.min_height:
        result.add_warning(
            path="dimensions.height_increment",
            message="Height increment is larger than the height range",
            suggestion="Use an increment such as 0.125 (1/8 inch)",
        )
    return result


def check_merchandising(config: ProductConfigurationFile) -> ValidationResult:
    """Advisories: zero base price, duplicate rooms, stale coarse rows and stock slugs."""
    result = ValidationResult()
    if config.product.base_price == 0:
        result.add_warning(
            path="product.base_price",
            message="Base price is zero; size adjustments will always be zero",
        )

    rooms_seen: set[str] = set()
    for i, recommendation in enumerate(config.room_recommendations):
        if recommendation.room.value in rooms_seen:
            result.add_error(
                path=f"room_recommendations[{i}].room",
                message=f"Room '{recommendation.room.label}' is recommended more than once",
                value=recommendation.room.value,
            )
        rooms_seen.add(recommendation.room.value)

    selected = {
        kind: {s.value for s in config.selections.for_kind(kind)} for kind in CategoryKind
    }
    for i, row in enumerate(config.coarse_options or []):
        if row.value_id not in selected[row.category]:
            result.add_warning(
                path=f"coarse_options[{i}].value_id",
                message=(
                    f"'{row.option_name}={row.value}' maps to {row.category.label.lower()} "
                    f"'{row.value_id}', which is not offered; estimates using it will fail"
                ),
                suggestion=f"Select '{row.value_id}' under selections.{row.category.value}",
            )

    known_slugs = _selected_slugs(config)
    for slug in config.inventory.stock:
        if slug not in known_slugs:
            result.add_warning(
                path=f"inventory.stock.{slug}",
                message=f"Stock given for '{slug}', which matches no selected option",
            )
    return result


def validate_config(config: ProductConfigurationFile) -> ValidationResult:
    """Run every cross-field check on a schema-valid configuration."""
    result = ValidationResult()
    result.merge(check_dimensions(config))
    result.merge(check_catalog(config))
    result.merge(check_selections(config))
    result.merge(check_merchandising(config))
    return result


def _catalog_section(kind: CategoryKind) -> str:
    return "fabrics" if kind is CategoryKind.FABRIC else kind.value


def _selected_slugs(config: ProductConfigurationFile) -> set[str]:
    fabrics = {fabric.id: fabric for fabric in config.catalog.fabrics}
    slugs: set[str] = set()
    for kind in CategoryKind:
        for selection in config.selections.for_kind(kind):
            if kind is CategoryKind.FABRIC:
                fabric_id, _, code = selection.value.partition(":")
                if fabric_id not in fabrics or not code:
                    continue
                try:
                    key = InventoryKey(kind, fabric_id, canonical_color_code(code))
                except ValueError:
                    continue
            else:
                key = InventoryKey(kind, selection.value)
            slugs.add(key.slug)
    return slugs
