"""Reasons a fulfillment attempt is abandoned.

None of these travel back to the customer: the consumer logs them and
acknowledges the order event.
"""


class FulfillmentError(Exception):
    """Base class for an abandoned fulfillment."""

    def __init__(self, order_id: str, message: str):
        super().__init__(message)
        self.order_id = order_id


class UnknownDrinkTypeError(FulfillmentError):
    """The order names a drink without a recipe."""

    def __init__(self, order_id: str, drink_type: str):
        super().__init__(order_id, f"Unknown beverage type: {drink_type}")
        self.drink_type = drink_type


class InsufficientStockError(FulfillmentError):
    """Current stock cannot cover the recipe."""


class ReservationFailedError(FulfillmentError):
    """The inventory ledger refused or failed the reservation."""


class LedgerUnavailableError(FulfillmentError):
    """The inventory ledger could not be read."""
