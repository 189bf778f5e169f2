"""Backlog of orders not yet taken by the machine."""

from confluent_kafka import Consumer, KafkaException, TopicPartition
from kafka_utils import ORDER_TOPIC


def fetch_queue_length(kafka_config: dict, group_id: str, topic: str = ORDER_TOPIC, timeout: float = 5.0) -> int:
    """Count records of ``topic`` that ``group_id`` has not committed yet.

    Args:
        kafka_config: Base client settings.
        group_id: Consumer group of the machine service.
        topic: Order topic.
        timeout: Seconds to wait for each broker request.

    Returns:
        int: Pending records summed over all partitions; 0 if the topic does not exist.

    Raises:
        KafkaException: If the broker cannot be queried.
    """
    consumer = Consumer({**kafka_config, "group.id": group_id, "enable.auto.commit": False})
    try:
        metadata = consumer.list_topics(topic, timeout=timeout)
        topic_metadata = metadata.topics.get(topic)
        if topic_metadata is None or not topic_metadata.partitions:
            return 0
        if topic_metadata.error is not None:
            raise KafkaException(topic_metadata.error)

        partitions = [TopicPartition(topic, p) for p in topic_metadata.partitions]
        pending = 0
        for tp in consumer.committed(partitions, timeout=timeout):
            low, high = consumer.get_watermark_offsets(tp, timeout=timeout, cached=False)
            start = tp.offset if tp.offset >= 0 else low
            pending += max(high - start, 0)
        return pending
    finally:
        consumer.close()
