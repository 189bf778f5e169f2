"""Kafka producer for publishing order events."""

from confluent_kafka import KafkaException, Producer
from kafka_utils import ORDER_TOPIC
from logging_utils.config import get_kafka_logger

from .errors import PublishError
from .schemas import DrinkType, OrderEvent

logger = get_kafka_logger("order-service")


class OrderProducer:
    """Kafka producer for publishing order events.

    Every publish waits for the broker's delivery report, so a successful
    ``submit`` means the order is durably stored on the ``order.placed``
    topic. A publish is attempted once; the caller retries the request.

    Attributes:
        _producer: The underlying Kafka producer instance.
    """

    def __init__(self, kafka_config: dict, topic: str = ORDER_TOPIC, publish_timeout: float = 5.0):
        """Initialize the Kafka producer.

        Args:
            kafka_config (dict): Base client settings, at least ``bootstrap.servers``.
            topic (str): Topic the orders are published to.
            publish_timeout (float): Seconds to wait for a delivery report.
        """
        self.topic = topic
        self.publish_timeout = publish_timeout
        self._producer = Producer(
            {
                **kafka_config,
                "acks": "all",
                "enable.idempotence": True,
                "message.timeout.ms": int(publish_timeout * 1000),
            }
        )

    @property
    def producer(self):
        """Get the underlying Kafka producer instance.

        Returns:
            Producer: The Kafka producer instance.
        """
        return self._producer

    def submit(self, drink_type: str) -> str:
        """Validate a drink, publish its order event and return the order id.

        Args:
            drink_type (str): Requested drink.

        Returns:
            str: The new order's identifier.

        Raises:
            UnsupportedDrinkError: If the drink is not on the menu; nothing is published.
            PublishError: If the broker does not confirm the event.
        """
        event = OrderEvent(type=DrinkType.parse(drink_type))
        self.publish(event)
        return event.order_id

    def publish(self, event: OrderEvent) -> None:
        """Publish an order event and block until the broker confirms it.

        Args:
            event (OrderEvent): The order to publish.

        Raises:
            PublishError: If the event could not be queued, the broker reported
                an error, or no report arrived within ``publish_timeout``.
        """
        report = {}

        def on_delivery(err, msg):
            report["error"] = err
            if err is None:
                logger.debug(f"Message delivered to {msg.topic()} [p:{msg.partition()}] at offset {msg.offset()}")

        try:
            self._producer.produce(
                topic=self.topic,
                key=event.order_id.encode("utf-8"),
                value=event.to_json().encode("utf-8"),
                on_delivery=on_delivery,
            )
        except (BufferError, KafkaException) as e:
            raise PublishError(f"Could not queue order {event.order_id}: {e}") from e

        remaining = self._producer.flush(self.publish_timeout)
        if "error" not in report:
            raise PublishError(f"No delivery confirmation for order {event.order_id} ({remaining} pending)")
        if report["error"] is not None:
            raise PublishError(f"Broker rejected order {event.order_id}: {report['error']}")

    def close(self) -> None:
        """Deliver any outstanding messages before shutdown."""
        remaining = self._producer.flush(self.publish_timeout)
        if remaining > 0:
            logger.warning(f"{remaining} messages still pending delivery")
