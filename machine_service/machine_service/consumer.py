"""Kafka consumer that feeds placed orders to the machine."""

import random
import threading
from collections.abc import Callable, Iterator
from enum import Enum

from confluent_kafka import Consumer, KafkaError, KafkaException, Message
from confluent_kafka.admin import AdminClient
from kafka_utils import ORDER_TOPIC, declare_order_topic
from logging_utils.config import get_kafka_logger
from pydantic import ValidationError

from .errors import FulfillmentError
from .fulfillment import Fulfiller
from .schemas import MachineStatus, OrderMessage

logger = get_kafka_logger("machine-service")

# Errors meaning the broker connection is gone; the consumer is rebuilt.
CONNECTION_LOST_CODES = {KafkaError._TRANSPORT, KafkaError._ALL_BROKERS_DOWN}


class ConsumerState(str, Enum):
    """Lifecycle of the order consumer."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    SUBSCRIBED = "subscribed"
    PROCESSING = "processing"
    FATAL = "fatal"


def backoff_delays(base: float, cap: float, rng: Callable[[], float] = random.random) -> Iterator[float]:
    """Yield endless retry delays: capped exponential backoff with full jitter."""
    attempt = 0
    while True:
        yield rng() * min(cap, base * 2**attempt)
        attempt = min(attempt + 1, 32)


def _is_fatal(error) -> bool:
    if not isinstance(error, KafkaError):
        return False
    return error.fatal() or error.code() == KafkaError._INVALID_ARG


class OrderConsumer:
    """Pulls order events one at a time and fulfills them.

    Each event is committed exactly once after its attempt, whatever the
    outcome: malformed payloads and failed fulfillments are logged and
    dropped, never redelivered. Connection failures send the consumer back
    to ``DISCONNECTED`` and it reconnects with jittered exponential backoff.
    ``stop`` lets an in-flight order finish and be committed before exiting.
    """

    def __init__(
        self,
        kafka_config: dict,
        group_id: str,
        fulfiller: Fulfiller,
        topic: str = ORDER_TOPIC,
        retry_base: float = 1.0,
        retry_max: float = 30.0,
        poll_timeout: float = 1.0,
        consumer_factory: Callable[[dict], Consumer] = Consumer,
        admin_factory: Callable[[dict], AdminClient] = AdminClient,
        rng: Callable[[], float] = random.random,
    ):
        self.kafka_config = kafka_config
        self.group_id = group_id
        self.fulfiller = fulfiller
        self.topic = topic
        self.retry_base = retry_base
        self.retry_max = retry_max
        self.poll_timeout = poll_timeout
        self._consumer_factory = consumer_factory
        self._admin_factory = admin_factory
        self._rng = rng
        self._stop = threading.Event()
        self._connection_lost = threading.Event()
        self.state = ConsumerState.DISCONNECTED

    @property
    def stopping(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Stop pulling new events; an order being brewed is finished first."""
        logger.info("Stop requested for order consumer")
        self._stop.set()

    def run(self) -> None:
        """Consume until ``stop`` is called or an unrecoverable error occurs."""
        logger.info(f"Starting order consumer for topic '{self.topic}' (group {self.group_id})")
        try:
            while not self.stopping:
                consumer = self._connect()
                if consumer is None:
                    break
                try:
                    self._consume(consumer)
                finally:
                    consumer.close()
                    self._set_state(ConsumerState.DISCONNECTED)
        except KafkaException as e:
            self._set_state(ConsumerState.FATAL)
            logger.critical(f"Unrecoverable Kafka error, consumer halted: {e}")
            return
        self._set_state(ConsumerState.DISCONNECTED)
        logger.info("Order consumer stopped")

    def handle_message(self, value: bytes | None) -> MachineStatus | None:
        """Parse and fulfill one event.

        Returns:
            The new machine status, or None if the event was discarded or the
            order could not be fulfilled.
        """
        try:
            order = OrderMessage.model_validate_json(value or b"")
        except ValidationError as e:
            logger.error(f"Invalid message received, discarding: {e.errors(include_url=False)}")
            return None

        try:
            return self.fulfiller.fulfill(order)
        except FulfillmentError as e:
            logger.error(f"Order {e.order_id} not fulfilled ({type(e).__name__}): {e}")
        except Exception:
            logger.exception(f"Unexpected error while fulfilling order {order.order_id}")
        return None

    def _set_state(self, state: ConsumerState) -> None:
        if state != self.state:
            logger.debug(f"Consumer state {self.state.value} -> {state.value}")
            self.state = state

    def _on_error(self, error: KafkaError) -> None:
        if error.code() in CONNECTION_LOST_CODES:
            logger.warning(f"Lost connection to Kafka: {error}")
            self._connection_lost.set()
        else:
            logger.error(f"Kafka error: {error}")

    def _connect(self) -> Consumer | None:
        """Connect, declare the topic and subscribe, retrying until it works.

        Returns:
            A subscribed consumer, or None if stopped while retrying.

        Raises:
            KafkaException: On a fatal error such as invalid configuration.
        """
        self._set_state(ConsumerState.CONNECTING)
        for delay in backoff_delays(self.retry_base, self.retry_max, self._rng):
            if self.stopping:
                return None
            consumer = None
            try:
                admin = self._admin_factory(self.kafka_config)
                admin.list_topics(timeout=self.poll_timeout * 5)
                declare_order_topic(admin, self.topic)
                self._connection_lost.clear()
                consumer = self._consumer_factory(
                    {
                        **self.kafka_config,
                        "group.id": self.group_id,
                        "auto.offset.reset": "earliest",
                        "enable.auto.commit": False,
                        "error_cb": self._on_error,
                    }
                )
                consumer.subscribe([self.topic])
            except KafkaException as e:
                if consumer is not None:
                    consumer.close()
                if _is_fatal(e.args[0] if e.args else None):
                    raise
                logger.error(f"Failed to initialize Kafka consumer: {e}. Retrying in {delay:.2f}s")
                if self._stop.wait(delay):
                    return None
                continue
            self._set_state(ConsumerState.SUBSCRIBED)
            logger.info(f"Waiting for messages on topic '{self.topic}'")
            return consumer
        return None

    def _consume(self, consumer: Consumer) -> None:
        """Poll until stopped or the connection is lost."""
        while not self.stopping and not self._connection_lost.is_set():
            msg = consumer.poll(timeout=self.poll_timeout)
            if msg is None:
                continue

            error = msg.error()
            if error is not None:
                if error.code() == KafkaError._PARTITION_EOF:
                    logger.debug("Reached end of partition")
                elif error.code() in CONNECTION_LOST_CODES:
                    self._on_error(error)
                elif _is_fatal(error):
                    raise KafkaException(error)
                else:
                    logger.error(f"Consumer error: {error}")
                continue

            self._set_state(ConsumerState.PROCESSING)
            self.handle_message(msg.value())
            self._acknowledge(consumer, msg)
            self._set_state(ConsumerState.SUBSCRIBED)

    def _acknowledge(self, consumer: Consumer, msg: Message) -> None:
        try:
            consumer.commit(message=msg, asynchronous=False)
        except KafkaException as e:
            logger.error(f"Failed to commit offset {msg.offset()} on {msg.topic()} [{msg.partition()}]: {e}")
