"""Order topic declaration."""

from concurrent.futures import TimeoutError as FutureTimeoutError

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic
from loguru import logger

ORDER_TOPIC = "order.placed"


def declare_order_topic(admin: AdminClient, topic: str = ORDER_TOPIC, timeout: float = 10.0) -> bool:
    """Create the order topic unless it already exists.

    Args:
        admin: Kafka admin client.
        topic: Topic to declare.
        timeout: Seconds to wait for the broker.

    Returns:
        bool: True if the topic was created, False if it already existed.

    Raises:
        KafkaException: If the broker rejects the request for any other reason,
            or does not answer within ``timeout`` (code ``_TIMED_OUT``).
    """
    futures = admin.create_topics([NewTopic(topic, num_partitions=1, replication_factor=1)])
    try:
        futures[topic].result(timeout=timeout)
    except KafkaException as e:
        if e.args[0].code() == KafkaError.TOPIC_ALREADY_EXISTS:
            logger.debug(f"Topic {topic} already exists")
            return False
        raise
    except FutureTimeoutError as e:
        raise KafkaException(KafkaError(KafkaError._TIMED_OUT, f"Declaring topic {topic} timed out")) from e
    logger.info(f"Created topic {topic}")
    return True
