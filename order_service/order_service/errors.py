"""Errors raised while accepting an order."""


class UnsupportedDrinkError(ValueError):
    """The requested drink is not on the menu."""

    def __init__(self, drink_type: str):
        super().__init__(f"Unsupported drink type: {drink_type!r}")
        self.drink_type = drink_type


class PublishError(RuntimeError):
    """The broker did not confirm durable receipt of an order event."""
