"""Inventory Service: the shared beans and milk ledger."""

__version__ = "0.1.0"
