"""Environment configuration for the Order Service."""

import os

from kafka_utils import client_config
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Settings read from the environment, each with a default."""

    kafka_bootstrap_servers: str = "localhost:9092"
    kafka_username: str | None = None
    kafka_password: str | None = None
    kafka_consumer_group: str = "machine-service"
    publish_timeout_seconds: float = Field(5.0, gt=0)
    service_port: int = Field(8080, ge=1, le=65535)
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Unset variables fall back to defaults; unparsable ones raise
        ``pydantic.ValidationError``.
        """
        env = {field: os.getenv(field.upper()) for field in cls.model_fields}
        return cls(**{key: value for key, value in env.items() if value is not None})

    def kafka_config(self) -> dict:
        """Client settings shared by every Kafka client of this service."""
        return client_config(self.kafka_bootstrap_servers, self.kafka_username, self.kafka_password)


settings = Settings.from_env()
