"""Test fixtures for the order service tests."""

from unittest.mock import MagicMock, patch

import pytest

from order_service.producer import OrderProducer


class FakeKafkaProducer:
    """Stands in for ``confluent_kafka.Producer``.

    ``produce`` records each message and ``flush`` delivers the pending
    ones by invoking their callbacks with ``delivery_error``. When
    ``confirm`` is False, ``flush`` times out without any report.
    """

    def __init__(self, delivery_error=None, confirm=True):
        self.delivery_error = delivery_error
        self.confirm = confirm
        self.messages = []
        self._pending = []

    def produce(self, topic, key, value, on_delivery):
        self.messages.append({"topic": topic, "key": key, "value": value})
        self._pending.append((topic, on_delivery))

    def flush(self, timeout=None):
        if not self.confirm:
            return len(self._pending)
        for topic, callback in self._pending:
            msg = MagicMock()
            msg.topic.return_value = topic
            msg.partition.return_value = 0
            msg.offset.return_value = len(self.messages) - 1
            callback(self.delivery_error, msg)
        self._pending.clear()
        return 0


@pytest.fixture
def make_producer():
    """Factory for OrderProducers wired to a FakeKafkaProducer.

    Returns:
        callable: Takes the FakeKafkaProducer options and returns
        ``(OrderProducer, FakeKafkaProducer)``.
    """

    def _make(**options):
        fake = FakeKafkaProducer(**options)
        with patch("order_service.producer.Producer", return_value=fake):
            return OrderProducer({"bootstrap.servers": "localhost:9092"}), fake

    return _make


@pytest.fixture
def fake_kafka():
    """A confirming fake Kafka producer."""
    return FakeKafkaProducer()


@pytest.fixture
def test_producer(fake_kafka):
    """Create an OrderProducer wired to the fake Kafka producer.

    Returns:
        OrderProducer: A producer whose broker always confirms.
    """
    with patch("order_service.producer.Producer", return_value=fake_kafka):
        return OrderProducer({"bootstrap.servers": "localhost:9092"})
