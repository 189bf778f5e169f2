"""Environment configuration for the Inventory Service."""

import os

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Settings read from the environment, each with a default."""

    service_port: int = Field(8081, ge=1, le=65535)
    initial_beans: int = Field(20, ge=0)
    initial_milk: int = Field(10, ge=0)
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables named after each field."""
        env = {field: os.getenv(field.upper()) for field in cls.model_fields}
        return cls(**{key: value for key, value in env.items() if value is not None})


settings = Settings.from_env()
