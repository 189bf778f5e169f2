"""Environment configuration for the Machine Service."""

import os

from kafka_utils import client_config
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Settings read from the environment, each with a default."""

    kafka_bootstrap_servers: str = "localhost:9092"
    kafka_username: str | None = None
    kafka_password: str | None = None
    kafka_consumer_group: str = "machine-service"
    inventory_service_url: str = "http://localhost:8081"
    inventory_timeout_seconds: float = Field(5.0, gt=0)
    preparation_seconds: float = Field(2.0, ge=0)
    retry_base_seconds: float = Field(1.0, gt=0)
    retry_max_seconds: float = Field(30.0, gt=0)
    service_port: int = Field(8082, ge=1, le=65535)
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables named after each field.

        Unset variables fall back to defaults; unparsable ones raise
        ``pydantic.ValidationError``.
        """
        env = {field: os.getenv(field.upper()) for field in cls.model_fields}
        return cls(**{key: value for key, value in env.items() if value is not None})

    def kafka_config(self) -> dict:
        """Client settings shared by every Kafka client of this service."""
        return client_config(self.kafka_bootstrap_servers, self.kafka_username, self.kafka_password)


settings = Settings.from_env()
