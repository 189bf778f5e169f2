"""Kafka helpers shared by the coffee order services."""

from .config import client_config
from .topics import ORDER_TOPIC, declare_order_topic

__all__ = [
    "ORDER_TOPIC",
    "client_config",
    "declare_order_topic",
]
