"""Application commands."""

from __future__ import annotations

import logging

from blinds.application.dtos import QuoteInput, QuoteOutput
from blinds.domain import (
    Choice,
    CoarseOptionMap,
    ConfiguratorError,
    ProductConfiguration,
    ProductRef,
    compute_price,
)
from blinds.domain.services import default_coarse_map
from blinds.domain.value_objects import CategoryKind

logger = logging.getLogger(__name__)


class QuotePriceCommand:
    """Command to price one configuration of a product.

    Explicit category choices and coarse name/value choices may be mixed.
    An explicit choice replaces a coarse one for the same single-select
    category; specialty choices from both are combined.
    """

    def __init__(
        self,
        product: ProductConfiguration,
        product_ref: ProductRef,
        coarse_map: CoarseOptionMap | None = None,
    ) -> None:
        self.product = product
        self.product_ref = product_ref
        self.coarse_map = coarse_map or default_coarse_map()

    def execute(self, quote_input: QuoteInput) -> QuoteOutput:
        """Execute the quote.

        Returns:
            QuoteOutput with the breakdown, or with errors if the input is
            invalid or the pricing engine rejects it.
        """
        errors = quote_input.validate()
        if errors:
            return QuoteOutput(errors=errors)

        try:
            chosen = self._merge(
                self.coarse_map.translate(quote_input.coarse_options),
                quote_input.to_chosen(),
            )
            breakdown = compute_price(
                self.product,
                self.product_ref.base_price,
                quote_input.width,
                quote_input.height,
                chosen,
                apply_defaults=quote_input.apply_defaults,
            )
        except ConfiguratorError as e:
            logger.debug(f"Quote rejected for {self.product_ref.id}: {e}")
            return QuoteOutput(errors=[str(e)])

        return QuoteOutput(breakdown=breakdown)

    @staticmethod
    def _merge(
        coarse: dict[CategoryKind, Choice], explicit: dict[CategoryKind, Choice]
    ) -> dict[CategoryKind, Choice]:
        merged = dict(coarse)
        for kind, choice in explicit.items():
            existing = merged.get(kind)
            if kind.multi_select and isinstance(existing, tuple) and isinstance(choice, tuple):
                merged[kind] = tuple(dict.fromkeys(existing + choice))
            else:
                merged[kind] = choice
        return merged
