"""Order Service: accepts drink orders and publishes them to Kafka."""

__version__ = "0.1.0"
