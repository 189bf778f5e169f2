"""Test fixtures for the machine service tests."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from inventory_service.ledger import InventoryLedger, LedgerError
from machine_service.fulfillment import Fulfiller
from machine_service.inventory_client import InventoryError
from machine_service.schemas import Stock
from machine_service.status import StatusTracker


class LedgerBackedInventory:
    """In-process stand-in for ``InventoryClient`` backed by a real ledger."""

    def __init__(self, ledger: InventoryLedger):
        self.ledger = ledger
        self.reservations = []

    def get_stock(self) -> Stock:
        stock = self.ledger.read()
        return Stock(beans=stock.beans, milk=stock.milk)

    def reserve(self, beans: int, milk: int) -> Stock:
        self.reservations.append((beans, milk))
        try:
            stock = self.ledger.reserve(beans=beans, milk=milk)
        except LedgerError as e:
            raise InventoryError(str(e)) from e
        return Stock(beans=stock.beans, milk=stock.milk)


@pytest.fixture
def ledger():
    """Ledger with the default opening stock of 20 beans and 10 milk."""
    return InventoryLedger(beans=20, milk=10)


@pytest.fixture
def inventory(ledger):
    """Inventory client talking to ``ledger``."""
    return LedgerBackedInventory(ledger)


@pytest.fixture
def status_tracker():
    """A fresh status tracker."""
    return StatusTracker()


@pytest.fixture
def sleeps():
    """Records preparation delays instead of sleeping."""
    return []


@pytest.fixture
def fulfiller(inventory, status_tracker, sleeps):
    """Fulfiller with an instant preparation step."""
    return Fulfiller(inventory, status_tracker, preparation_seconds=2.0, sleep=sleeps.append)


@pytest.fixture
def make_order():
    """Build raw ``order.placed`` payloads."""

    def _make(drink_type="espresso", order_id="3f2b8c1e-0000-4000-8000-000000000001"):
        return json.dumps(
            {
                "order_id": order_id,
                "type": drink_type,
                "timestamp": datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc).isoformat(),
            }
        ).encode("utf-8")

    return _make


@pytest.fixture
def make_message():
    """Build mock Kafka messages."""

    def _make(value, offset=0, error=None):
        msg = MagicMock()
        msg.error.return_value = error
        msg.value.return_value = value
        msg.topic.return_value = "order.placed"
        msg.partition.return_value = 0
        msg.offset.return_value = offset
        return msg

    return _make


@pytest.fixture
def make_fulfiller():
    """Build a fulfiller over a fresh ledger with the given opening stock.

    Returns:
        callable: ``(beans, milk) -> (fulfiller, ledger, inventory, tracker)``.
    """

    def _make(beans=20, milk=10):
        ledger = InventoryLedger(beans=beans, milk=milk)
        inventory = LedgerBackedInventory(ledger)
        tracker = StatusTracker()
        return Fulfiller(inventory, tracker, sleep=lambda _: None), ledger, inventory, tracker

    return _make
