"""Unit tests for the OrderProducer class."""

import json
from concurrent.futures import TimeoutError as FutureTimeoutError
from unittest.mock import MagicMock, patch

import pytest
from confluent_kafka import KafkaError, KafkaException

from kafka_utils import declare_order_topic
from order_service.errors import PublishError, UnsupportedDrinkError
from order_service.producer import OrderProducer
from order_service.schemas import DrinkType, OrderEvent


def test_producer_initialization():
    """Test that OrderProducer asks the broker for durable acknowledgement."""
    mock_producer_instance = MagicMock()
    mock_producer_class = MagicMock(return_value=mock_producer_instance)

    with patch("order_service.producer.Producer", new=mock_producer_class):
        producer = OrderProducer({"bootstrap.servers": "dump:9092"}, publish_timeout=3.0)

        mock_producer_class.assert_called_once_with(
            {
                "bootstrap.servers": "dump:9092",
                "acks": "all",
                "enable.idempotence": True,
                "message.timeout.ms": 3000,
            }
        )
        assert producer.producer == mock_producer_instance


def test_submit_publishes_order_event(test_producer, fake_kafka):
    """A valid drink is published once and its id returned."""
    order_id = test_producer.submit("espresso")

    assert len(fake_kafka.messages) == 1
    message = fake_kafka.messages[0]
    assert message["topic"] == "order.placed"
    assert message["key"] == order_id.encode("utf-8")

    payload = json.loads(message["value"])
    assert set(payload) == {"order_id", "type", "timestamp"}
    assert payload["order_id"] == order_id
    assert payload["type"] == "espresso"
    assert payload["timestamp"].endswith("Z")


@pytest.mark.parametrize("drink", ["tea", "Espresso", "", "latte"])
def test_submit_rejects_unsupported_drink_without_broker(test_producer, fake_kafka, drink):
    """Unsupported drinks never reach the broker."""
    with pytest.raises(UnsupportedDrinkError):
        test_producer.submit(drink)

    assert fake_kafka.messages == []


def test_submit_ids_are_unique(test_producer):
    """Every accepted order gets its own id."""
    ids = {test_producer.submit("coffee") for _ in range(100)}
    assert len(ids) == 100


def test_publish_fails_on_delivery_error(make_producer):
    """A broker-side delivery error is a publish failure."""
    producer, fake = make_producer(delivery_error=KafkaError(KafkaError._MSG_TIMED_OUT))

    with pytest.raises(PublishError):
        producer.submit("cappuccino")
    assert len(fake.messages) == 1


def test_publish_fails_without_confirmation(make_producer):
    """No delivery report within the timeout is a publish failure."""
    producer, _ = make_producer(confirm=False)

    with pytest.raises(PublishError, match="No delivery confirmation"):
        producer.submit("coffee")


def test_publish_fails_when_buffer_full(test_producer):
    """A full local queue is reported, not raised raw."""
    with patch.object(test_producer, "_producer") as mock_producer:
        mock_producer.produce.side_effect = BufferError("queue full")
        with pytest.raises(PublishError):
            test_producer.publish(OrderEvent(type=DrinkType.COFFEE))
        mock_producer.flush.assert_not_called()


def test_declare_order_topic_creates():
    """The topic is created when missing."""
    admin = MagicMock()
    future = MagicMock()
    admin.create_topics.return_value = {"order.placed": future}

    assert declare_order_topic(admin) is True
    future.result.assert_called_once()


def test_declare_order_topic_is_idempotent():
    """An existing topic is not an error."""
    admin = MagicMock()
    future = MagicMock()
    future.result.side_effect = KafkaException(KafkaError(KafkaError.TOPIC_ALREADY_EXISTS))
    admin.create_topics.return_value = {"order.placed": future}

    assert declare_order_topic(admin) is False


def test_declare_order_topic_propagates_other_errors():
    """Other broker errors are raised."""
    admin = MagicMock()
    future = MagicMock()
    future.result.side_effect = KafkaException(KafkaError(KafkaError._TRANSPORT))
    admin.create_topics.return_value = {"order.placed": future}

    with pytest.raises(KafkaException):
        declare_order_topic(admin)


def test_declare_order_topic_timeout_is_a_kafka_error():
    """A broker too slow to create the topic reports a retriable Kafka timeout."""
    admin = MagicMock()
    future = MagicMock()
    future.result.side_effect = FutureTimeoutError()
    admin.create_topics.return_value = {"order.placed": future}

    with pytest.raises(KafkaException) as exc_info:
        declare_order_topic(admin, timeout=0.1)

    assert exc_info.value.args[0].code() == KafkaError._TIMED_OUT
    future.result.assert_called_once_with(timeout=0.1)
