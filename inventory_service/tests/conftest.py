"""Test fixtures for the inventory service tests."""

import pytest
from fastapi.testclient import TestClient

from inventory_service import server
from inventory_service.ledger import InventoryLedger


@pytest.fixture
def ledger():
    """A ledger holding the default opening stock of 20 beans and 10 milk."""
    return InventoryLedger(beans=20, milk=10)


@pytest.fixture
def test_client(monkeypatch):
    """Create a test client backed by a fresh ledger.

    Returns:
        tuple: The client and the ledger it serves.
    """
    fresh = InventoryLedger(beans=20, milk=10)
    monkeypatch.setattr(server, "ledger", fresh)
    return TestClient(server.app), fresh
