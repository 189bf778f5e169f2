"""Thread-safe ledger of coffee bean and milk stock."""

import threading

from .logger import logger
from .schemas import StockLevel

# Stock counts are unsigned 32-bit integers.
MAX_STOCK = 4_294_967_295
LOW_STOCK_THRESHOLD = 2


class LedgerError(ArithmeticError):
    """Base class for rejected ledger arithmetic."""

    def __init__(self, ingredient: str, message: str):
        super().__init__(message)
        self.ingredient = ingredient


class StockUnderflowError(LedgerError):
    """A reservation would leave an ingredient below zero."""

    def __init__(self, ingredient: str, requested: int, available: int):
        super().__init__(ingredient, f"{ingredient.capitalize()} underflow")
        self.requested = requested
        self.available = available


class StockOverflowError(LedgerError, OverflowError):
    """A refill would push an ingredient past ``MAX_STOCK``."""

    def __init__(self, ingredient: str, requested: int, available: int):
        super().__init__(ingredient, f"{ingredient.capitalize()} overflow")
        self.requested = requested
        self.available = available


class InventoryLedger:
    """Integer stock counts for beans and milk.

    Every operation runs under a single lock, so no caller observes a partial
    update. ``reserve`` and ``refill`` validate both ingredients before
    mutating either: a rejected operation changes nothing.
    """

    def __init__(self, beans: int = 20, milk: int = 10):
        if not (0 <= beans <= MAX_STOCK and 0 <= milk <= MAX_STOCK):
            raise ValueError("Initial stock must be within 0..4294967295")
        self._beans = beans
        self._milk = milk
        self._lock = threading.Lock()

    def read(self) -> StockLevel:
        """Return the current stock."""
        with self._lock:
            return StockLevel(beans=self._beans, milk=self._milk)

    def reserve(self, beans: int = 0, milk: int = 0) -> StockLevel:
        """Subtract both quantities atomically.

        Raises:
            StockUnderflowError: If either ingredient is insufficient.
        """
        _check_quantity(beans, milk)
        with self._lock:
            if beans > self._beans:
                raise StockUnderflowError("beans", beans, self._beans)
            if milk > self._milk:
                raise StockUnderflowError("milk", milk, self._milk)
            self._beans -= beans
            self._milk -= milk
            stock = StockLevel(beans=self._beans, milk=self._milk)
        _warn_if_low(stock)
        return stock

    def refill(self, beans: int = 0, milk: int = 0) -> StockLevel:
        """Add both quantities atomically.

        Raises:
            StockOverflowError: If either total would exceed ``MAX_STOCK``.
        """
        _check_quantity(beans, milk)
        with self._lock:
            if self._beans + beans > MAX_STOCK:
                raise StockOverflowError("beans", beans, self._beans)
            if self._milk + milk > MAX_STOCK:
                raise StockOverflowError("milk", milk, self._milk)
            self._beans += beans
            self._milk += milk
            stock = StockLevel(beans=self._beans, milk=self._milk)
        _warn_if_low(stock)
        return stock


def _check_quantity(beans: int, milk: int) -> None:
    if beans < 0 or milk < 0:
        raise ValueError("Quantities must be non-negative")


def _warn_if_low(stock: StockLevel) -> None:
    if stock.beans < LOW_STOCK_THRESHOLD:
        logger.warning(f"Bean levels critically low: {stock.beans} beans remaining")
    if stock.milk < LOW_STOCK_THRESHOLD:
        logger.warning(f"Milk levels critically low: {stock.milk} milk remaining")
