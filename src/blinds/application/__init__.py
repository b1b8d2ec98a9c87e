"""Application layer - commands, DTOs, configuration and templates."""

from blinds.application.commands import QuotePriceCommand
from blinds.application.dtos import QuoteInput, QuoteOutput
from blinds.application.factory import (
    ServiceFactory,
    get_factory,
    reset_factory,
    set_factory,
)

__all__ = [
    "QuoteInput",
    "QuoteOutput",
    "QuotePriceCommand",
    "ServiceFactory",
    "get_factory",
    "reset_factory",
    "set_factory",
]
