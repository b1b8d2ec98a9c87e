"""In-memory option category store."""

from __future__ import annotations

from typing import Iterable

from ..value_objects import CategoryKind, OptionCategoryValue

__all__ = ["OptionCategoryStore"]


class OptionCategoryStore:
    """Holds the universe of values for each category kind.

    Satisfies the ``CatalogReader`` protocol. Values are listed in the
    order they were added.
    """

    def __init__(self, values: Iterable[OptionCategoryValue] = ()) -> None:
        self._values: dict[CategoryKind, dict[str, OptionCategoryValue]] = {
            kind: {} for kind in CategoryKind
        }
        for value in values:
            self.add_value(value)

    def add_value(self, value: OptionCategoryValue) -> None:
        """Register a catalog value.

        Raises:
            ValueError: If a value with the same id exists in the category.
        """
        bucket = self._values[value.kind]
        if value.id in bucket:
            raise ValueError(
                f"{value.kind.label} '{value.id}' already exists in the catalog"
            )
        bucket[value.id] = value

    def list_values(self, kind: CategoryKind) -> list[OptionCategoryValue]:
        return list(self._values[kind].values())

    def get_value(self, kind: CategoryKind, value_id: str) -> OptionCategoryValue | None:
        return self._values[kind].get(value_id)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._values.values())

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, OptionCategoryValue):
            return False
        return self._values[value.kind].get(value.id) == value
