"""Turns one placed order into a brewed drink."""

import time
from collections.abc import Callable

from .errors import (
    InsufficientStockError,
    LedgerUnavailableError,
    ReservationFailedError,
    UnknownDrinkTypeError,
)
from .inventory_client import InventoryClient, InventoryError
from .logger import logger
from .recipes import recipe_for
from .schemas import MachineStatus, OrderMessage
from .status import StatusTracker


class Fulfiller:
    """Runs the fulfillment steps for a single order.

    1. look up the recipe;
    2. read stock and stop early if it cannot cover the recipe;
    3. reserve the ingredients;
    4. wait ``preparation_seconds`` while the drink brews;
    5. record the order in the status tracker.

    The stock read is advisory. The ledger's reservation is the authority:
    if another caller drains stock between the read and the reservation, the
    ledger refuses it and the order fails with ``ReservationFailedError``.
    An order that fails before step 5 leaves the status untouched.
    """

    def __init__(
        self,
        inventory: InventoryClient,
        status: StatusTracker,
        preparation_seconds: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.inventory = inventory
        self.status = status
        self.preparation_seconds = preparation_seconds
        self._sleep = sleep

    def fulfill(self, order: OrderMessage) -> MachineStatus:
        """Brew ``order`` and return the updated machine status.

        Raises:
            UnknownDrinkTypeError: No recipe exists for the drink.
            LedgerUnavailableError: Stock could not be read.
            InsufficientStockError: Stock cannot cover the recipe.
            ReservationFailedError: The ledger refused or failed the reservation.
        """
        logger.info(f"Processing order {order.order_id} of type {order.drink_type}")

        recipe = recipe_for(order.drink_type)
        if recipe is None:
            raise UnknownDrinkTypeError(order.order_id, order.drink_type)

        try:
            available = self.inventory.get_stock()
        except InventoryError as e:
            raise LedgerUnavailableError(order.order_id, str(e)) from e

        if available.beans < recipe.beans or available.milk < recipe.milk:
            raise InsufficientStockError(
                order.order_id,
                f"Insufficient ingredients for {order.drink_type}: need {recipe.beans} beans and "
                f"{recipe.milk} milk, have {available.beans} beans and {available.milk} milk",
            )

        try:
            remaining = self.inventory.reserve(recipe.beans, recipe.milk)
        except InventoryError as e:
            raise ReservationFailedError(order.order_id, f"Failed to deduct ingredients: {e}") from e

        logger.info(f"Stock after deduction: {remaining.beans} beans, {remaining.milk} milk")
        logger.info(f"Received order {order.order_id} (type {order.drink_type}) at {order.timestamp.isoformat()}")

        self._sleep(self.preparation_seconds)

        status = self.status.record(order.order_id, order.drink_type)
        logger.info(f"Order {order.order_id} completed")
        return status
