"""Machine Service: consumes placed orders and brews them."""

__version__ = "0.1.0"
